# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Bootstrap a fresh host: check docker, fetch the sources, build, run, clean up."""

from ..core.config import Settings
from ..util.logging_utils import Logger
from ..util.process import CommandRunner
from .compose import Compose
from .fetch import fetched_environment
from .preflight import check_runtime, check_workspace, detect_compose


def setup_container(compose: Compose) -> int:
    """Build the image and run one interactive session; return its exit code."""
    compose.logger.info(f"Setting up container for project: {compose.settings.project_name}")
    compose.build()
    exit_code = compose.launch()
    compose.logger.info("Container session ended")
    return exit_code


def bootstrap(settings: Settings, runner: CommandRunner, logger: Logger) -> int:
    """Run the whole bootstrap flow and return the session's exit code.

    Fatal steps raise ``FatalError``. The fetched sources are removed once
    the session ends, whatever its exit code.
    """
    logger.info("DevContainer Bootstrap Starting...")
    logger.info(f"Project: {settings.project_name}")

    check_runtime(runner, logger)
    check_workspace(settings.workspace_dir, logger)
    compose_cmd = detect_compose(runner)

    with fetched_environment(runner, settings, logger) as source_dir:
        exit_code = setup_container(Compose(runner, settings, compose_cmd, source_dir, logger))

    if exit_code == 0:
        logger.success("DevContainer setup complete!")
    else:
        logger.warn(f"Container session exited with code {exit_code}")
    return exit_code
