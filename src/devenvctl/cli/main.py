#!/usr/bin/env python3

"""``devenvctl``: manage the devcontainer image and per-project sessions."""

import argparse
import re
import sys
from dataclasses import dataclass
from pathlib import Path

import argcomplete

from ..lib.core.config import Settings, load_settings
from ..lib.core.version import format_version_string, get_version_info
from ..lib.errors import FatalError
from ..lib.util.logging_utils import Logger
from ..lib.util.process import CommandRunner
from .commands import compose as compose_commands, info as info_commands

COMMAND_MODULES = (compose_commands, info_commands)

# ``run-<name>``, ``shell-<name>`` and ``new-<name>`` are shorthand for ``--project <name>``.
_PROJECT_SHORTHAND_RE = re.compile(r"^(run|shell|new)-(.+)$")
_VALUE_OPTIONS = {"--dir"}


@dataclass
class CommandContext:
    settings: Settings
    runner: CommandRunner
    logger: Logger
    directory: Path


def expand_project_shorthand(argv: list[str]) -> list[str]:
    """Rewrite the first ``<verb>-<name>`` argument to ``<verb> --project <name>``."""
    skip = False
    for i, arg in enumerate(argv):
        if skip:
            skip = False
            continue
        if arg.startswith("-"):
            skip = arg in _VALUE_OPTIONS
            continue
        m = _PROJECT_SHORTHAND_RE.match(arg)
        if m:
            return [*argv[:i], m.group(1), "--project", m.group(2), *argv[i + 1 :]]
        break
    return argv


def build_parser() -> argparse.ArgumentParser:
    version, branch = get_version_info()

    parser = argparse.ArgumentParser(
        prog="devenvctl",
        description="devenvctl – build and run the containerized development environment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Per-project shortcuts:\n"
            "  devenvctl run-<name>     run the container for project <name>\n"
            "  devenvctl shell-<name>   start a plain shell for project <name>\n"
            "  devenvctl new-<name>     create and start project <name>\n"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"devenvctl {format_version_string(version, branch)}"
    )
    parser.add_argument(
        "--dir",
        default=".",
        help="Directory containing docker-compose.yml (default: current directory)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)
    for module in COMMAND_MODULES:
        module.register(sub)
    return parser


def main(argv: list[str] | None = None) -> int:
    argv = expand_project_shorthand(list(sys.argv[1:] if argv is None else argv))
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)

    logger = Logger(sys.stderr)
    settings = load_settings()
    if getattr(args, "project", None):
        settings = settings.for_project(args.project)
    ctx = CommandContext(settings, CommandRunner(), logger, Path(args.dir).resolve())

    try:
        for module in COMMAND_MODULES:
            code = module.dispatch(args, ctx)
            if code is not None:
                return code
    except FatalError as e:
        e.report(logger)
        return e.code
    parser.error(f"unknown command: {args.cmd}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
