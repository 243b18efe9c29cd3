#!/usr/bin/env python3

"""``devenv-entrypoint``: container entrypoint that sets up identity, then execs the shell."""

import argparse
import sys

from ..lib.core.config import load_settings
from ..lib.errors import FatalError
from ..lib.session import SessionInitializer, exec_shell
from ..lib.util.logging_utils import Logger
from ..lib.util.process import CommandRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devenv-entrypoint",
        description="Initialize the devcontainer session (SSH key, dotfiles, git) and start a shell",
    )
    parser.add_argument(
        "--no-exec",
        action="store_true",
        help="Run the setup steps but do not start the interactive shell",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = Logger(sys.stdout)
    settings = load_settings()

    try:
        session = SessionInitializer(settings, CommandRunner(), logger).run()
    except FatalError as e:
        e.report(logger)
        return e.code

    if args.no_exec:
        return 0
    try:
        exec_shell(session, settings.shell, logger)
    except OSError as e:
        logger.error(f"Could not start shell {settings.shell}: {e}")
        logger.error("Set DEVENV_SHELL (or session.shell in config.yml) to an installed shell.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
