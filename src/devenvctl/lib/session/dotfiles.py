"""Apply the personal dotfiles bundle with chezmoi."""

from pathlib import Path

from .._util.fs import remove_path
from ..errors import DotfilesFailed
from ..util.logging_utils import Logger
from ..util.process import CommandRunner


def chezmoi_state_paths(home: Path) -> list[Path]:
    return [home / ".local" / "share" / "chezmoi", home / ".config" / "chezmoi"]


def apply_dotfiles(
    runner: CommandRunner,
    repo: str,
    home: Path,
    logger: Logger,
    env: dict[str, str] | None = None,
) -> None:
    """Discard any previous chezmoi state, then ``chezmoi init --apply`` *repo*."""
    logger.info("Setting up dotfiles with chezmoi...")

    for path in chezmoi_state_paths(home):
        try:
            remove_path(path)
        except OSError as e:
            raise DotfilesFailed(f"Could not remove old chezmoi state {path}: {e}")

    result = runner.run(["chezmoi", "init", "--apply", repo], env=env, capture=False)
    if not result.succeeded:
        raise DotfilesFailed(
            "Failed to apply dotfiles",
            [f"Repository: {repo}", "Check that the SSH key has access to it."],
        )
    logger.success("Dotfiles applied successfully")
