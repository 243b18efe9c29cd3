"""Shared argcomplete completers for CLI arguments."""

import subprocess

CONTAINER_PREFIX = "devcontainer-"


def complete_project_names(prefix, parsed_args, **kwargs):  # pragma: no cover
    """Return project names of existing devcontainer containers matching *prefix*."""
    try:
        result = subprocess.run(
            ["docker", "ps", "-a", "--format", "{{.Names}}"],
            capture_output=True,
            text=True,
            timeout=2,
        )
    except (OSError, subprocess.SubprocessError):
        return []
    names = [
        line[len(CONTAINER_PREFIX) :]
        for line in result.stdout.splitlines()
        if line.startswith(CONTAINER_PREFIX)
    ]
    if prefix:
        names = [n for n in names if n.startswith(prefix)]
    return names


def add_project_argument(parser) -> None:
    """Add ``-p/--project`` with shell completion of known project names."""
    _a = parser.add_argument(
        "-p",
        "--project",
        default=None,
        help="Project name (default: $PROJECT_NAME or 'default')",
    )
    try:
        _a.completer = complete_project_names  # type: ignore[attr-defined]
    except AttributeError:
        pass
