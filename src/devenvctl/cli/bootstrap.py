#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""``devenv-bootstrap``: set up and enter the devcontainer on a fresh host."""

import argparse
import sys

import argcomplete

from ..lib.core.config import load_settings
from ..lib.errors import FatalError
from ..lib.host.bootstrap import bootstrap
from ..lib.util.logging_utils import Logger
from ..lib.util.process import CommandRunner
from .commands._completers import add_project_argument


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devenv-bootstrap",
        description="DevContainer Bootstrap Script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  devenv-bootstrap\n"
            "  devenv-bootstrap --project myproject\n"
            "  pipx run --spec git+<url> devenv-bootstrap -p myproject\n"
        ),
    )
    add_project_argument(parser)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)

    logger = Logger(sys.stderr)
    settings = load_settings()
    if args.project:
        settings = settings.for_project(args.project)

    try:
        return bootstrap(settings, CommandRunner(), logger)
    except FatalError as e:
        e.report(logger)
        return e.code


if __name__ == "__main__":
    sys.exit(main())
