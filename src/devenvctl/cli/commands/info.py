"""Informational CLI commands: system info and configuration overview."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from ...lib._util.ansi import gray as _gray, supports_color as _supports_color, yes_no as _yes_no
from ...lib.core.config import global_config_path, global_config_search_paths
from ...lib.core.paths import state_root
from ...lib.core.version import format_version_string, get_version_info
from ...lib.errors import ComposeMissing
from ...lib.host.preflight import detect_compose
from ._completers import add_project_argument


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Register informational subcommands (info, config)."""
    p_info = subparsers.add_parser("info", help="Show system information")
    add_project_argument(p_info)
    subparsers.add_parser("config", help="Show configuration file locations and resolved settings")


def dispatch(args: argparse.Namespace, ctx) -> int | None:
    """Handle info and config commands.  Returns the exit code if handled."""
    if args.cmd == "info":
        _print_info(ctx)
        return 0
    if args.cmd == "config":
        _print_config(ctx)
        return 0
    return None


def _first_line(ctx, cmd: list[str]) -> str:
    result = ctx.runner.run(cmd)
    if not result.succeeded:
        return "not available"
    lines = result.output.strip().splitlines()
    return lines[0] if lines else ""


def _print_info(ctx) -> None:
    s = ctx.settings
    version, branch = get_version_info()
    try:
        compose_cmd = " ".join(detect_compose(ctx.runner))
        compose_version = _first_line(ctx, [*compose_cmd.split(), "version"])
    except ComposeMissing:
        compose_cmd = "not installed"
        compose_version = "not available"

    print("System Information:")
    print(f"devenvctl version: {format_version_string(version, branch)}")
    print(f"Docker version: {_first_line(ctx, ['docker', '--version'])}")
    print(f"Docker Compose version: {compose_version}")
    print(f"Docker Compose command: {compose_cmd}")
    print(f"Project name: {s.project_name}")
    print(f"Dev directory: {s.workspace_dir}")
    print(f"Container name: {s.container_name}")


def _print_config(ctx) -> None:
    s = ctx.settings
    color_enabled = _supports_color()

    print("Configuration (read):")
    gcfg = global_config_path()
    print(
        f"- Global config file: {_gray(str(gcfg), color_enabled)} "
        f"(exists: {_yes_no(Path(gcfg).is_file(), color_enabled)})"
    )
    print("- Global config search order:")
    for p in global_config_search_paths():
        print(f"  • {_gray(str(p), color_enabled)} (exists: {_yes_no(p.is_file(), color_enabled)})")

    print("Resolved settings:")
    for label, value in (
        ("Workspace dir", s.workspace_dir),
        ("Source repository", s.source_url),
        ("Fetch dir", s.fetch_dir),
        ("Compose service", s.compose_service),
        ("Identity host", s.identity_host),
        ("SSH key types", ", ".join(s.key_types)),
        ("SSH source dir", s.ssh_source_dir),
        ("SSH writable dir", s.ssh_writable_dir),
        ("Dotfiles repository", s.dotfiles_repo),
        ("Sentinel host", s.sentinel_host),
        ("Shell", s.shell),
    ):
        print(f"- {label}: {_gray(str(value), color_enabled)}")
    print(f"- Skip GitHub check: {_yes_no(s.skip_github_check, color_enabled)}")

    print("Writable locations (write):")
    print(f"- Debug log: {_gray(str(state_root() / 'devenvctl.log'), color_enabled)}")

    print("Environment overrides (if set):")
    for var in (
        "DEVENVCTL_CONFIG_FILE",
        "DEVENVCTL_CONFIG_DIR",
        "DEVENVCTL_STATE_DIR",
        "DEV_DIR",
        "PROJECT_NAME",
        "SKIP_GITHUB_CHECK",
        "DEVENV_SOURCE_URL",
        "DEVENV_FETCH_DIR",
        "DEVENV_SHELL",
    ):
        val = os.environ.get(var)
        if val is not None:
            print(f"- {var}={_gray(val, color_enabled)}")
