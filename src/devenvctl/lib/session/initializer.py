# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Per-session identity setup run by the container entrypoint.

Steps run strictly in order and never go back::

    KEY_SEARCH -> KEY_VALIDATION -> KEY_PROMOTION -> TRANSPORT_SETUP
        -> DOTFILES -> IDENTITY -> READY

Any fatal step raises a ``FatalError`` and the shell is never started.
The result is a ``SessionEnvironment``: the variables the interactive shell
needs, returned explicitly rather than exported into ``os.environ``.
"""

import os
from dataclasses import dataclass, field
from enum import Enum, auto

from ..core.config import Settings
from ..util.logging_utils import Logger
from ..util.process import CommandRunner
from .dotfiles import apply_dotfiles
from .github import authenticate_github, check_gh_auth, gh_auth_token, validate_key
from .identity import setup_git_config
from .keys import PromotedKey, discover_key, promote_key
from .transport import TransportConfig, start_agent, write_transport_config


class SessionState(Enum):
    KEY_SEARCH = auto()
    KEY_VALIDATION = auto()
    KEY_PROMOTION = auto()
    TRANSPORT_SETUP = auto()
    DOTFILES = auto()
    IDENTITY = auto()
    READY = auto()


@dataclass
class SessionEnvironment:
    """What the interactive shell inherits from the initializer."""

    project_name: str
    promoted_key: PromotedKey
    transport: TransportConfig
    email: str = ""
    github_token: str = ""
    agent_env: dict[str, str] = field(default_factory=dict)

    def as_env(self) -> dict[str, str]:
        return {
            "PROJECT_NAME": self.project_name,
            "GIT_SSH_COMMAND": self.transport.git_ssh_command,
            "GITHUB_TOKEN": self.github_token,
            **self.agent_env,
        }


class SessionInitializer:
    def __init__(self, settings: Settings, runner: CommandRunner, logger: Logger):
        self.settings = settings
        self.runner = runner
        self.logger = logger
        self.state = SessionState.KEY_SEARCH

    def _enter(self, state: SessionState) -> None:
        self.state = state

    def setup_ssh_key(self) -> tuple[PromotedKey, TransportConfig, dict[str, str]]:
        s = self.settings
        self.logger.info("Checking SSH key setup...")

        self._enter(SessionState.KEY_SEARCH)
        candidate = discover_key(s.ssh_source_dir, s.key_types)
        self.logger.info(f"Found host SSH key: {candidate.name}")

        self._enter(SessionState.KEY_VALIDATION)
        if s.skip_github_check:
            self.logger.warn("Skipping GitHub SSH key verification (SKIP_GITHUB_CHECK=true)")
        else:
            validate_key(
                self.runner,
                candidate,
                s.identity_host,
                s.ssh_timeout,
                s.registration_url,
                self.logger,
            )

        self._enter(SessionState.KEY_PROMOTION)
        promoted = promote_key(candidate, s.ssh_writable_dir)

        self._enter(SessionState.TRANSPORT_SETUP)
        agent_env = start_agent(self.runner, promoted.private_path, self.logger)
        transport = write_transport_config(promoted, s.identity_host)
        self.logger.success("SSH configuration complete")
        return promoted, transport, agent_env

    def run(self) -> SessionEnvironment:
        s = self.settings
        self.logger.info("Starting DevContainer initialization...")
        self.logger.info(f"Project: {s.project_name}")

        promoted, transport, agent_env = self.setup_ssh_key()
        session = SessionEnvironment(s.project_name, promoted, transport, agent_env=agent_env)

        if not check_gh_auth(self.runner, self.logger):
            if s.github_login:
                authenticate_github(self.runner, s.identity_host, self.logger)
            else:
                self.logger.warn(
                    "GitHub CLI not authenticated - run 'gh auth login' inside the session if needed"
                )

        self._enter(SessionState.DOTFILES)
        apply_dotfiles(
            self.runner,
            s.dotfiles_repo,
            s.home,
            self.logger,
            env={"GIT_SSH_COMMAND": transport.git_ssh_command, **agent_env},
        )

        self._enter(SessionState.IDENTITY)
        session.email = setup_git_config(
            self.runner,
            s.git_name,
            s.work_email,
            s.personal_email,
            s.sentinel_host,
            s.probe_timeout,
            self.logger,
        )

        self._enter(SessionState.READY)
        self.logger.success("DevContainer initialization complete!")
        session.github_token = gh_auth_token(self.runner, self.logger)
        return session


def exec_shell(session: SessionEnvironment, shell: str, logger: Logger) -> None:
    """Replace the current process with the interactive *shell*."""
    logger.info(f"Starting {os.path.basename(shell)} shell...")
    env = {**os.environ, **session.as_env()}
    os.execvpe(shell, [shell], env)
