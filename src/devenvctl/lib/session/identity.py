"""Git identity: fixed name, email chosen by which network we are on."""

from ..util.logging_utils import Logger
from ..util.process import CommandRunner


def probe_host(runner: CommandRunner, host: str, timeout: int) -> bool:
    """Send one ping to *host*; any failure or timeout counts as unreachable."""
    result = runner.run(
        ["ping", "-q", "-c", "1", "-W", str(timeout), host],
        timeout=timeout + 2,
    )
    return result.succeeded


def select_email(reachable: bool, work_email: str, personal_email: str) -> str:
    return work_email if reachable else personal_email


def setup_git_config(
    runner: CommandRunner,
    name: str,
    work_email: str,
    personal_email: str,
    sentinel_host: str,
    timeout: int,
    logger: Logger,
) -> str:
    """Configure the global git name and email; return the chosen email.

    Failures are logged and never abort the session.
    """
    logger.info("Setting up git configuration...")

    if not runner.run(["git", "config", "--global", "user.name", name]).succeeded:
        logger.warn("Could not set git user.name")

    reachable = probe_host(runner, sentinel_host, timeout)
    email = select_email(reachable, work_email, personal_email)
    if not runner.run(["git", "config", "--global", "user.email", email]).succeeded:
        logger.warn("Could not set git user.email")

    if reachable:
        logger.info("Configured for work environment")
    else:
        logger.info("Configured for personal environment")
    return email
