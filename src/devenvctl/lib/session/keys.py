# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""SSH key discovery in the read-only host mount and promotion to a writable dir.

The host's ``~/.ssh`` is mounted read-only, so the selected key pair is
copied into a private directory where its permissions can be tightened
(ssh refuses private keys that others can read).
"""

import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .._util.fs import copy_with_mode, ensure_dir
from ..errors import KeyPromotionFailed, NoMountedKeys, NoUsableKeyPair

PRIVATE_KEY_MODE = 0o600
PUBLIC_KEY_MODE = 0o644
KEY_DIR_MODE = 0o700


@dataclass(frozen=True)
class CandidateKey:
    """A private/public key pair that may be used for the session."""

    name: str
    private_path: Path
    public_path: Path

    def public_key_text(self) -> str:
        return self.public_path.read_text(encoding="utf-8", errors="ignore").strip()


@dataclass(frozen=True)
class PromotedKey:
    """The candidate key after it was copied into the writable directory."""

    source: CandidateKey
    directory: Path
    private_path: Path
    public_path: Path


def candidate_keys(source_dir: Path, key_types: Iterable[str]) -> list[CandidateKey]:
    """Build the candidate descriptors for *key_types*, in preference order."""
    return [
        CandidateKey(name, source_dir / name, source_dir / f"{name}.pub") for name in key_types
    ]


def select_candidate(
    candidates: Sequence[CandidateKey],
    exists: Callable[[Path], bool] = Path.is_file,
) -> CandidateKey | None:
    """Return the first candidate whose private and public halves both exist."""
    for candidate in candidates:
        if exists(candidate.private_path) and exists(candidate.public_path):
            return candidate
    return None


def discover_key(source_dir: Path, key_types: Sequence[str]) -> CandidateKey:
    """Pick the session key from *source_dir* or raise with remediation."""
    if not source_dir.is_dir() or not any(source_dir.glob("*.pub")):
        raise NoMountedKeys(
            "No SSH keys found from host machine",
            [
                f"Please ensure your ~/.ssh directory is mounted at {source_dir} "
                "and contains SSH keys",
                "Run: devenvctl shell (with SSH keys in ~/.ssh)",
            ],
        )

    selected = select_candidate(candidate_keys(source_dir, key_types))
    if selected is None:
        raise NoUsableKeyPair(
            f"No usable SSH key pairs found in {source_dir}",
            [f"Expected to find one of: {', '.join(key_types)}"],
        )
    return selected


def promote_key(candidate: CandidateKey, dest_dir: Path) -> PromotedKey:
    """Copy both halves of *candidate* into *dest_dir* with tightened modes.

    The private copy always ends up 0600 and the public copy 0644, whatever
    the modes of the source files.
    """
    private_dst = dest_dir / candidate.private_path.name
    public_dst = dest_dir / candidate.public_path.name
    try:
        ensure_dir(dest_dir, mode=KEY_DIR_MODE)
        copy_with_mode(candidate.private_path, private_dst, PRIVATE_KEY_MODE)
        copy_with_mode(candidate.public_path, public_dst, PUBLIC_KEY_MODE)
    except OSError as e:
        raise KeyPromotionFailed(
            f"Could not copy SSH key {candidate.name} to {dest_dir}: {e}",
            [f"Check that {dest_dir} is writable by uid {os.getuid()}"],
        )
    return PromotedKey(candidate, dest_dir, private_dst, public_dst)
