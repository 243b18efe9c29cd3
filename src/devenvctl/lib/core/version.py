# SPDX-FileCopyrightText: 2026 Jiri Vyskocil
# SPDX-License-Identifier: Apache-2.0

"""Version and branch information for devenvctl (used by ``--version`` and ``info``)."""

import json
import subprocess
from importlib import metadata
from pathlib import Path
from typing import Any


def get_version_info() -> tuple[str, str | None]:
    """Get version and branch information.

    Branch detection, first match wins:

    1. PEP 610 ``direct_url.json`` for installs from a VCS URL
       (``pipx install git+https://...``): the requested revision or commit.
    2. Live git detection when running from a source checkout (a
       ``pyproject.toml`` sits at the repository root), unless HEAD is a
       ``vX.Y.Z`` release tag.
    3. The ``BRANCH_NAME`` recorded by ``build_script.py`` at install time.

    Returns:
        tuple: (version_string, branch_name) where branch_name is None for releases
               or when branch info is not available/meaningful
    """
    # version.py -> core -> lib -> devenvctl -> src -> repo
    repo_root = Path(__file__).parent.parent.parent.parent.parent

    try:
        from devenvctl import __version__

        version = __version__
    except (ImportError, AttributeError):
        version = "unknown"

    pep610_revision = _get_pep610_revision()
    if pep610_revision:
        return version, pep610_revision

    if (repo_root / "pyproject.toml").exists():
        return version, _git_branch(repo_root)

    try:
        from devenvctl._branch_info import BRANCH_NAME
    except ImportError:
        BRANCH_NAME = None
    return version, BRANCH_NAME


def _git(repo_root: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["git", *args],
        capture_output=True,
        text=True,
        timeout=1,
        cwd=str(repo_root),
    )


def _git_branch(repo_root: Path) -> str | None:
    """Return the checked-out branch, or None on a release tag or outside git."""
    try:
        result = _git(repo_root, "rev-parse", "--is-inside-work-tree")
        if result.returncode != 0 or result.stdout.strip() != "true":
            return None
        branch_result = _git(repo_root, "branch", "--show-current")
        detected_branch = branch_result.stdout.strip() if branch_result.returncode == 0 else ""
        if not detected_branch:
            return None
        tag = _git(repo_root, "describe", "--exact-match", "--tags", "HEAD")
        tag_name = tag.stdout.strip()
        is_release = (
            tag.returncode == 0
            and tag_name.startswith("v")
            and len(tag_name) > 1
            and tag_name[1].isdigit()
        )
        return None if is_release else detected_branch
    except (OSError, subprocess.SubprocessError):
        # Git not available - continue without branch info
        return None


def _get_pep610_revision(dist_name: str = "devenvctl") -> str | None:
    """Return VCS revision from PEP 610 metadata, if available."""
    try:
        dist = metadata.distribution(dist_name)
        direct_url = dist.read_text("direct_url.json")
    except (metadata.PackageNotFoundError, OSError, UnicodeDecodeError):
        return None

    if not direct_url:
        return None

    try:
        data = json.loads(direct_url)
    except json.JSONDecodeError:
        return None

    vcs_info = data.get("vcs_info")
    if not isinstance(vcs_info, dict):
        return None

    def validate_and_strip(value: Any) -> str | None:
        if isinstance(value, str):
            stripped = value.strip()
            if stripped:
                return stripped
        return None

    if result := validate_and_strip(vcs_info.get("requested_revision")):
        return result
    return validate_and_strip(vcs_info.get("commit_id"))


def format_version_string(version: str, branch: str | None) -> str:
    """Format version and branch into a display string.

    Returns:
        Formatted string like "0.1.0" or "0.1.0 [feature-branch]"
    """
    if branch:
        return f"{version} [{branch}]"
    return version
