"""Global configuration and the resolved per-run ``Settings``.

Values resolve in the order environment variable, global config file, built-in
default. The result is a frozen ``Settings`` object that is passed explicitly
to every step instead of being exported through the process environment.
"""

import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml  # pip install pyyaml

from .paths import config_root as _config_root_base

DEFAULT_PROJECT = "default"
DEFAULT_KEY_TYPES = ("id_ed25519", "id_rsa", "id_ecdsa")

# ---------- Global config file ----------


def global_config_search_paths() -> list[Path]:
    """Return the ordered list of paths that will be checked for global config.

    - If DEVENVCTL_CONFIG_FILE is set, only that single path is considered.
    - Otherwise, check in order:
        1) config_root()/config.yml (DEVENVCTL_CONFIG_DIR or ~/.config/devenvctl)
        2) sys.prefix/etc/devenvctl/config.yml
        3) /etc/devenvctl/config.yml
    """
    env_file = os.environ.get("DEVENVCTL_CONFIG_FILE")
    if env_file:
        return [Path(env_file).expanduser().resolve()]

    user_cfg = _config_root_base() / "config.yml"
    sp_cfg = Path(sys.prefix) / "etc" / "devenvctl" / "config.yml"
    etc_cfg = Path("/etc/devenvctl/config.yml")
    return [user_cfg, sp_cfg, etc_cfg]


def global_config_path() -> Path:
    """Global config file path (first existing search path wins).

    An explicit DEVENVCTL_CONFIG_FILE is returned even if missing to make
    intent visible to the user. If none exist, return the last path.
    """
    candidates = global_config_search_paths()
    if len(candidates) == 1:
        return candidates[0]

    for c in candidates:
        if c.is_file():
            return c.resolve()
    return candidates[-1]


def load_global_config() -> dict[str, Any]:
    cfg_path = global_config_path()
    if not cfg_path.is_file():
        return {}
    data = yaml.safe_load(cfg_path.read_text()) or {}
    return data if isinstance(data, dict) else {}


def get_global_section(cfg: dict[str, Any], key: str) -> dict[str, Any]:
    """Return a top-level section of *cfg*, defaulting to ``{}``.

    If the value under *key* is not a dict (e.g. the user wrote ``git: "oops"``),
    returns ``{}`` to avoid ``AttributeError`` in callers that expect ``.get()``.
    """
    value = cfg.get(key, {})
    if not isinstance(value, dict):
        return {}
    return value or {}


# ---------- Settings ----------


@dataclass(frozen=True)
class Settings:
    """Everything one bootstrap or session run needs to know."""

    home: Path
    workspace_dir: Path
    project_name: str = DEFAULT_PROJECT
    skip_github_check: bool = False

    # host side
    source_url: str = "https://github.com/radikalliberal/devcontainer.git"
    fetch_dir: Path = Path("/tmp/devcontainer-setup")
    compose_service: str = "devcontainer"
    base_image: str = "archlinux:latest"

    # session side
    identity_host: str = "github.com"
    github_login: bool = False
    key_types: tuple[str, ...] = DEFAULT_KEY_TYPES
    ssh_source_dir: Path | None = None
    ssh_writable_dir: Path | None = None
    ssh_timeout: int = 10
    dotfiles_repo: str = "git@github.com:radikalliberal/dotfiles.git"
    git_name: str = "Jan Schlüter"
    work_email: str = "jan.schlueter@dermalog.com"
    personal_email: str = "radikalliber@gmail.com"
    sentinel_host: str = "br-documentserver"
    probe_timeout: int = 1
    shell: str = "/bin/zsh"

    def __post_init__(self) -> None:
        # Frozen dataclass: derive home-relative defaults via object.__setattr__.
        if self.ssh_source_dir is None:
            object.__setattr__(self, "ssh_source_dir", self.home / ".ssh")
        if self.ssh_writable_dir is None:
            object.__setattr__(self, "ssh_writable_dir", self.home / ".ssh-container")

    @property
    def container_name(self) -> str:
        return f"{self.compose_service}-{self.project_name}"

    @property
    def registration_url(self) -> str:
        return f"https://{self.identity_host}/settings/keys"

    def for_project(self, project_name: str) -> "Settings":
        return replace(self, project_name=project_name or DEFAULT_PROJECT)


def _truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


def _path(value: Any) -> Path:
    return Path(str(value)).expanduser()


def load_settings(env: dict[str, str] | None = None, cfg: dict[str, Any] | None = None) -> Settings:
    """Resolve ``Settings`` from *env* (default ``os.environ``) and the global config.

    Environment variables win over the config file, which wins over the
    defaults on ``Settings``.
    """
    env = dict(os.environ) if env is None else env
    cfg = load_global_config() if cfg is None else cfg

    paths = get_global_section(cfg, "paths")
    source = get_global_section(cfg, "source")
    compose = get_global_section(cfg, "compose")
    github = get_global_section(cfg, "github")
    ssh = get_global_section(cfg, "ssh")
    dotfiles = get_global_section(cfg, "dotfiles")
    git = get_global_section(cfg, "git")
    session = get_global_section(cfg, "session")

    home = _path(env.get("HOME") or Path.home())
    kwargs: dict[str, Any] = {"home": home}

    workspace = env.get("DEV_DIR") or paths.get("workspace_dir")
    kwargs["workspace_dir"] = _path(workspace) if workspace else home / "dev"

    kwargs["project_name"] = env.get("PROJECT_NAME") or DEFAULT_PROJECT
    if "SKIP_GITHUB_CHECK" in env:
        kwargs["skip_github_check"] = _truthy(env["SKIP_GITHUB_CHECK"])
    elif "skip_check" in github:
        kwargs["skip_github_check"] = _truthy(github["skip_check"])

    if url := env.get("DEVENV_SOURCE_URL") or source.get("url"):
        kwargs["source_url"] = str(url)
    if fetch_dir := env.get("DEVENV_FETCH_DIR") or source.get("fetch_dir"):
        kwargs["fetch_dir"] = _path(fetch_dir)

    if compose.get("service"):
        kwargs["compose_service"] = str(compose["service"])
    if compose.get("base_image"):
        kwargs["base_image"] = str(compose["base_image"])

    if github.get("host"):
        kwargs["identity_host"] = str(github["host"])
    if "login_if_needed" in github:
        kwargs["github_login"] = _truthy(github["login_if_needed"])

    key_types = ssh.get("key_types")
    if isinstance(key_types, list) and key_types:
        kwargs["key_types"] = tuple(str(k) for k in key_types)
    if ssh.get("source_dir"):
        kwargs["ssh_source_dir"] = _path(ssh["source_dir"])
    if ssh.get("writable_dir"):
        kwargs["ssh_writable_dir"] = _path(ssh["writable_dir"])
    if ssh.get("timeout"):
        kwargs["ssh_timeout"] = int(ssh["timeout"])

    if dotfiles.get("repo"):
        kwargs["dotfiles_repo"] = str(dotfiles["repo"])

    for key, attr in (
        ("human_name", "git_name"),
        ("work_email", "work_email"),
        ("personal_email", "personal_email"),
        ("sentinel_host", "sentinel_host"),
    ):
        if git.get(key):
            kwargs[attr] = str(git[key])
    if git.get("probe_timeout"):
        kwargs["probe_timeout"] = int(git["probe_timeout"])

    if shell := env.get("DEVENV_SHELL") or session.get("shell"):
        kwargs["shell"] = str(shell)

    return Settings(**kwargs)
