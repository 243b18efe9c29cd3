# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Build and run the devcontainer through docker compose.

Every invocation carries ``PROJECT_NAME=<project>`` in its environment, which
the compose file uses to name the container, so sessions for different
projects stay separate. ``DEV_DIR`` selects the workspace mounted at
``~/dev`` and ``SKIP_GITHUB_CHECK`` is forwarded to the entrypoint.
"""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any

from ..core.config import Settings
from ..errors import BuildFailed
from ..util.logging_utils import Logger
from ..util.process import CommandRunner

TTY_DEVICE = "/dev/tty"


def _isatty(stream: Any) -> bool:
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError):
        return False


@contextmanager
def controlling_terminal(logger: Logger, stdin: Any = None) -> Iterator[IO[Any] | None]:
    """Yield the stdin an interactive child should use.

    ``None`` means inherit our own stdin, which is right when it is a
    terminal. When it is not (the tool itself was piped in, as in
    ``curl ... | bash``), the child is given the controlling terminal
    instead, or it would read from the exhausted pipe and exit at once.
    """
    stdin = sys.stdin if stdin is None else stdin
    if _isatty(stdin):
        yield None
        return
    try:
        tty = open(TTY_DEVICE, "rb")
    except OSError as e:
        logger.warn(f"stdin is not a terminal and {TTY_DEVICE} is unavailable ({e})")
        yield None
        return
    with tty:
        yield tty


class Compose:
    """Compose invocations for one project, run from the directory holding the compose file."""

    def __init__(
        self,
        runner: CommandRunner,
        settings: Settings,
        compose_cmd: list[str],
        cwd: Path,
        logger: Logger,
    ):
        self.runner = runner
        self.settings = settings
        self.compose_cmd = list(compose_cmd)
        self.cwd = cwd
        self.logger = logger

    @property
    def env(self) -> dict[str, str]:
        """Variables the compose file interpolates: project, workspace mount, skip flag."""
        s = self.settings
        return {
            "PROJECT_NAME": s.project_name,
            "DEV_DIR": str(s.workspace_dir),
            "SKIP_GITHUB_CHECK": "true" if s.skip_github_check else "false",
        }

    def _cmd(self, *args: str) -> list[str]:
        return [*self.compose_cmd, *args]

    def _passthrough(self, *args: str) -> int:
        return self.runner.interactive(self._cmd(*args), env=self.env, cwd=self.cwd)

    def build(self, no_cache: bool = False) -> None:
        """Build the image; a no-op rebuild when the cached layers are current."""
        self.logger.info("Building Docker image (this may take a few minutes on first run)...")
        args = ["build", "--no-cache"] if no_cache else ["build"]
        if self._passthrough(*args) != 0:
            raise BuildFailed(
                "Failed to build Docker image",
                [f"Re-run the build manually in {self.cwd}: {' '.join(self._cmd(*args))}"],
            )

    def launch(self, shell: bool = False) -> int:
        """Start an interactive session and return its exit code."""
        args = ["run", "--rm", "--service-ports"]
        if shell:
            args += ["--entrypoint", self.settings.shell]
        args.append(self.settings.compose_service)

        self.logger.info("Starting container...")
        self.logger.success("Launching interactive session...")
        with controlling_terminal(self.logger) as stdin:
            return self.runner.interactive(self._cmd(*args), env=self.env, cwd=self.cwd, stdin=stdin)

    def stop(self) -> int:
        return self._passthrough("down")

    def clean(self) -> int:
        return self._passthrough("down", "--rmi", "all", "--volumes", "--remove-orphans")

    def logs(self) -> int:
        return self._passthrough("logs", "-f")

    def restart(self) -> int:
        return self._passthrough("restart")

    def status(self) -> int:
        return self._passthrough("ps")

    def update(self) -> int:
        """Pull the latest base image, then rebuild without cache."""
        pulled = self.runner.interactive(["docker", "pull", self.settings.base_image])
        if pulled != 0:
            return pulled
        self.build(no_cache=True)
        return 0

    def clean_all(self) -> None:
        """Force-remove every devcontainer container and image (best-effort)."""
        name = self.settings.compose_service
        containers = self.runner.run(["docker", "ps", "-aq", "--filter", f"name={name}"])
        ids = containers.output.split() if containers.succeeded else []
        if ids:
            result = self.runner.run(["docker", "rm", "-f", *ids])
            if not result.succeeded:
                self.logger.warn(f"Could not remove containers: {result.output.strip()}")
        images = self.runner.run(["docker", "images", "-q", "--filter", f"reference=*{name}*"])
        image_ids = images.output.split() if images.succeeded else []
        if image_ids:
            result = self.runner.run(["docker", "rmi", "-f", *image_ids])
            if not result.succeeded:
                self.logger.warn(f"Could not remove images: {result.output.strip()}")

    def images(self) -> list[str]:
        """Return ``docker images`` lines mentioning the service name."""
        result = self.runner.run(["docker", "images"])
        if not result.succeeded:
            return []
        name = self.settings.compose_service
        return [line for line in result.output.splitlines() if name in line]
