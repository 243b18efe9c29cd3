# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""GitHub checks: SSH key registration probe and ``gh`` CLI auth state."""

from pathlib import Path

from ..errors import KeyNotRegistered
from ..util.logging_utils import Logger
from ..util.process import CommandRunner
from .keys import CandidateKey

SUCCESS_MARKER = "successfully authenticated"


def has_success_marker(output: str) -> bool:
    """Return True if the ssh probe output reports a successful authentication.

    GitHub closes shell-less sessions with exit status 1 even when the key is
    accepted, so only the greeting text is a reliable signal.
    """
    return SUCCESS_MARKER in output


def ssh_probe_command(key_path: Path, host: str, timeout: int) -> list[str]:
    return [
        "ssh",
        "-o",
        "StrictHostKeyChecking=no",
        "-o",
        f"ConnectTimeout={timeout}",
        "-o",
        "BatchMode=yes",
        "-i",
        str(key_path),
        "-T",
        f"git@{host}",
    ]


def is_key_registered(
    runner: CommandRunner, key_path: Path, host: str, timeout: int, logger: Logger
) -> bool:
    """Make one non-interactive SSH attempt to *host* with *key_path*."""
    # ConnectTimeout only bounds the TCP connect; the outer timeout bounds the rest.
    result = runner.run(ssh_probe_command(key_path, host, timeout), timeout=timeout + 5)
    if has_success_marker(result.output):
        return True
    logger.warn(f"SSH test output: {result.output.strip()}")
    return False


def validate_key(
    runner: CommandRunner,
    candidate: CandidateKey,
    host: str,
    timeout: int,
    registration_url: str,
    logger: Logger,
) -> None:
    """Raise ``KeyNotRegistered`` unless *host* accepts *candidate*."""
    logger.info(f"Testing if key works with {host}...")
    if not is_key_registered(runner, candidate.private_path, host, timeout, logger):
        raise KeyNotRegistered(
            f"Host SSH key found but NOT registered on {host}",
            [
                f"Please add this key to GitHub: {registration_url}",
                "To skip this check, set SKIP_GITHUB_CHECK=true",
                "Your public key:",
            ],
            details=[candidate.public_key_text()],
        )
    logger.success(f"Host SSH key is already registered on {host}!")


def check_gh_auth(runner: CommandRunner, logger: Logger) -> bool:
    if runner.run(["gh", "auth", "status"]).succeeded:
        logger.success("GitHub CLI is already authenticated")
        return True
    logger.warn("GitHub CLI authentication required")
    return False


def authenticate_github(runner: CommandRunner, host: str, logger: Logger) -> bool:
    """Run the interactive ``gh`` device login; failure is reported, not raised."""
    logger.info("Starting GitHub authentication...")
    logger.info("A browser window will open for device authentication")
    logger.info("Complete the authentication in your browser")
    code = runner.interactive(
        ["gh", "auth", "login", "--git-protocol", "ssh", "--hostname", host, "--web"]
    )
    if code == 0:
        logger.success("GitHub authentication successful")
        return True
    logger.warn("GitHub authentication failed")
    return False


def gh_auth_token(runner: CommandRunner, logger: Logger) -> str:
    """Return the ``gh`` auth token, or an empty string when unavailable."""
    result = runner.run(["gh", "auth", "token"])
    token = result.output.strip() if result.succeeded else ""
    if not token:
        logger.warn("Could not retrieve GitHub token; GITHUB_TOKEN will be empty")
    return token
