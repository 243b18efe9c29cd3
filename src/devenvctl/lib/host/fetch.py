"""Fetch the environment's build sources into a transient directory."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .._util.fs import remove_path
from ..core.config import Settings
from ..errors import FetchFailed
from ..util.logging_utils import Logger
from ..util.process import CommandRunner


def fetch(runner: CommandRunner, source_url: str, dest: Path, logger: Logger) -> Path:
    """Clone *source_url* into *dest*, replacing whatever was there before."""
    logger.info("Cloning devcontainer project...")

    try:
        remove_path(dest)
    except OSError as e:
        raise FetchFailed(f"Could not clear {dest}: {e}")

    result = runner.run(["git", "clone", source_url, str(dest)], capture=False)
    if not result.succeeded:
        raise FetchFailed(
            "Failed to clone devcontainer project",
            [f"Source: {source_url}", "Check your network connection and that git is installed."],
        )
    logger.success("Cloned devcontainer project")
    return dest


def cleanup(path: Path, logger: Logger) -> None:
    """Remove *path*; failures are logged, never raised."""
    logger.info("Cleaning up temporary files...")
    try:
        remove_path(path)
    except OSError as e:
        logger.warn(f"Could not remove {path}: {e}")


@contextmanager
def fetched_environment(runner: CommandRunner, settings: Settings, logger: Logger) -> Iterator[Path]:
    """Fetch the sources and remove them again when the block exits, however it exits."""
    dest = settings.fetch_dir
    try:
        yield fetch(runner, settings.source_url, dest, logger)
    finally:
        cleanup(dest, logger)
