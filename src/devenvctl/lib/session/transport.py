"""SSH transport configuration for the promoted key."""

import os
import re
from dataclasses import dataclass
from pathlib import Path

from ..util.logging_utils import Logger
from ..util.process import CommandRunner
from ..util.template_utils import render_packaged_template
from .keys import PromotedKey

CONFIG_MODE = 0o600

_AGENT_VAR_RE = re.compile(r"^(SSH_AUTH_SOCK|SSH_AGENT_PID)=([^;]+);", re.MULTILINE)


@dataclass(frozen=True)
class TransportConfig:
    config_path: Path
    identity_file: Path

    @property
    def git_ssh_command(self) -> str:
        return f"ssh -F {self.config_path}"


def write_transport_config(promoted: PromotedKey, identity_host: str) -> TransportConfig:
    """Write an ssh config using the promoted key for *identity_host* and as fallback."""
    config_path = promoted.directory / "config"
    text = render_packaged_template(
        "ssh_config.template",
        {"IDENTITY_HOST": identity_host, "IDENTITY_FILE": promoted.private_path},
    )
    config_path.write_text(text, encoding="utf-8")
    os.chmod(config_path, CONFIG_MODE)
    return TransportConfig(config_path, promoted.private_path)


def parse_agent_output(output: str) -> dict[str, str]:
    """Extract ``SSH_AUTH_SOCK`` and ``SSH_AGENT_PID`` from ``ssh-agent -s`` output."""
    return {m.group(1): m.group(2).strip() for m in _AGENT_VAR_RE.finditer(output)}


def start_agent(runner: CommandRunner, key_path: Path, logger: Logger) -> dict[str, str]:
    """Start an ssh-agent and add *key_path* to it.

    Returns the agent environment variables (empty if the agent did not
    start). Never raises: git can still use the key file directly.
    """
    started = runner.run(["ssh-agent", "-s"])
    agent_env = parse_agent_output(started.output) if started.succeeded else {}
    if "SSH_AUTH_SOCK" not in agent_env:
        logger.warn("Could not start ssh-agent; git will use the key file directly")
        return {}

    if runner.run(["ssh-add", str(key_path)], env=agent_env).succeeded:
        logger.success("Host SSH key added to agent")
    else:
        logger.warn("Could not add key to agent (may require passphrase)")
    return agent_env
