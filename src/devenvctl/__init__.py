"""devenvctl package.

Modules:
- devenvctl.cli: CLI entry points (devenvctl, devenv-bootstrap, devenv-entrypoint)
- devenvctl.lib.core: Configuration, paths, version
- devenvctl.lib.host: Host preflight, environment fetch, compose build/launch
- devenvctl.lib.session: In-container identity setup (SSH key, dotfiles, git)
- devenvctl.lib.util: Logging and external process helpers
- devenvctl.lib._util: Internal helpers (ansi, fs)
"""

__all__ = [
    "cli",
    "lib",
]

# Version information - single source of truth using importlib.metadata
try:
    from importlib.metadata import version

    __version__ = version("devenvctl")
except Exception:
    # Fallback for development mode when package is not installed
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
                __version__ = pyproject_data["tool"]["poetry"]["version"]
        else:
            __version__ = "unknown"
    except Exception:
        __version__ = "unknown"
