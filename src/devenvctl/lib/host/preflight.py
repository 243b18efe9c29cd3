# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Host checks that gate the bootstrap: docker present and running, workspace dir."""

from pathlib import Path

from ..errors import ComposeMissing, DaemonUnreachable, RuntimeMissing, WorkspaceError
from ..util.logging_utils import Logger
from ..util.process import CommandRunner

DOCKER_INSTALL_HINTS = (
    "  - Ubuntu/Debian: sudo apt install docker.io",
    "  - Arch: sudo pacman -S docker",
    "  - Fedora: sudo dnf install docker",
    "Then start the service: sudo systemctl start docker",
    "And add your user to docker group: sudo usermod -aG docker $USER",
)


def check_runtime(runner: CommandRunner, logger: Logger) -> None:
    """Verify the docker CLI is installed and its daemon answers ``docker info``."""
    if runner.which("docker") is None:
        raise RuntimeMissing(
            "Docker is not installed. Please install Docker first:",
            DOCKER_INSTALL_HINTS,
        )

    if not runner.run(["docker", "info"]).succeeded:
        raise DaemonUnreachable(
            "Docker daemon is not running. Please start it:",
            ["  sudo systemctl start docker"],
        )

    logger.success("Docker is installed and running")


def check_workspace(path: Path, logger: Logger) -> None:
    """Ensure the host workspace directory exists, creating it if absent."""
    if path.is_dir():
        logger.info(f"{path} directory exists")
        return
    if path.exists():
        raise WorkspaceError(
            f"{path} exists but is not a directory",
            [f"Move it aside or set DEV_DIR to another location: mv {path} {path}.bak"],
        )

    logger.warn(f"{path} directory does not exist. Creating it...")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WorkspaceError(
            f"Could not create {path}: {e}",
            ["Check permissions of the parent directory or set DEV_DIR."],
        )
    logger.success(f"Created {path} directory")


def detect_compose(runner: CommandRunner) -> list[str]:
    """Return the compose command: standalone ``docker-compose`` or the plugin."""
    if runner.which("docker-compose") is not None:
        return ["docker-compose"]
    if runner.run(["docker", "compose", "version"]).succeeded:
        return ["docker", "compose"]
    raise ComposeMissing(
        "Docker Compose is not installed.",
        ["Please install either 'docker-compose' or the Docker Compose plugin."],
    )
