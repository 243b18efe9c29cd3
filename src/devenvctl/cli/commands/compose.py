"""Container lifecycle commands: build, run, shell, stop, clean, logs and friends."""

from __future__ import annotations

import argparse

from ...lib.host.bootstrap import bootstrap
from ...lib.host.compose import Compose
from ...lib.host.preflight import detect_compose
from ._completers import add_project_argument

# Commands that take -p/--project; the rest act on every project at once.
PROJECT_COMMANDS = {
    "build": "Build the Docker image",
    "run": "Run the container (interactive)",
    "new": "Create and start a new project (e.g. devenvctl new-myproject)",
    "shell": "Start container and get shell access",
    "logs": "Show container logs",
    "restart": "Restart the container",
    "update": "Pull latest base image and rebuild",
    "bootstrap": "Run the full bootstrap (clone, build, run, clean up)",
}
GLOBAL_COMMANDS = {
    "stop": "Stop running containers",
    "clean": "Remove containers and images",
    "clean-all": "Remove all devcontainer containers and images",
    "status": "Show status of containers",
    "images": "List devcontainer images",
}


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Register container lifecycle subcommands."""
    for name, help_text in PROJECT_COMMANDS.items():
        p = subparsers.add_parser(name, help=help_text)
        add_project_argument(p)
    for name, help_text in GLOBAL_COMMANDS.items():
        subparsers.add_parser(name, help=help_text)


def _compose(ctx) -> Compose:
    return Compose(ctx.runner, ctx.settings, detect_compose(ctx.runner), ctx.directory, ctx.logger)


def dispatch(args: argparse.Namespace, ctx) -> int | None:
    """Handle container lifecycle commands.  Returns the exit code if handled."""
    log = ctx.logger
    project = ctx.settings.project_name

    if args.cmd == "bootstrap":
        return bootstrap(ctx.settings, ctx.runner, log)

    if args.cmd == "images":
        log.info("DevContainer images:")
        lines = _compose(ctx).images()
        if not lines:
            print("No devcontainer images found")
        for line in lines:
            print(line)
        return 0

    if args.cmd == "clean-all":
        log.info("Removing all devcontainer containers and images...")
        _compose(ctx).clean_all()
        return 0

    if args.cmd not in PROJECT_COMMANDS and args.cmd not in GLOBAL_COMMANDS:
        return None

    compose = _compose(ctx)
    if args.cmd == "build":
        log.info("Building Docker image...")
        compose.build()
        return 0
    if args.cmd in ("run", "new"):
        if args.cmd == "new":
            log.success(f"Creating new project: {project}")
        log.info(f"Starting container for project: {project}")
        return compose.launch()
    if args.cmd == "shell":
        log.info(f"Starting container shell for project: {project}")
        return compose.launch(shell=True)
    if args.cmd == "logs":
        log.info(f"Showing logs for project: {project}")
        return compose.logs()
    if args.cmd == "restart":
        log.warn(f"Restarting container for project: {project}")
        return compose.restart()
    if args.cmd == "update":
        log.info("Updating base image and rebuilding...")
        return compose.update()
    if args.cmd == "stop":
        log.warn("Stopping containers...")
        return compose.stop()
    if args.cmd == "clean":
        log.warn("Cleaning up containers and images...")
        return compose.clean()
    if args.cmd == "status":
        log.info("Container status:")
        return compose.status()
    return None
