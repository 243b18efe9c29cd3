import stat
import tempfile
import unittest
from pathlib import Path

from devenvctl.lib.session.keys import discover_key, promote_key
from devenvctl.lib.session.transport import (
    parse_agent_output,
    start_agent,
    write_transport_config,
)
from test_utils import FakeRunner, fail, ok, quiet_logger, write_key_pair

AGENT_OUTPUT = (
    "SSH_AUTH_SOCK=/tmp/ssh-XXXXabcd/agent.41; export SSH_AUTH_SOCK;\n"
    "SSH_AGENT_PID=42; export SSH_AGENT_PID;\n"
    "echo Agent pid 42;\n"
)


class TransportConfigTests(unittest.TestCase):
    def test_config_points_host_and_fallback_at_promoted_key(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            base = Path(td)
            write_key_pair(base / "ssh", "id_ed25519")
            promoted = promote_key(discover_key(base / "ssh", ("id_ed25519",)), base / "w")

            transport = write_transport_config(promoted, "github.com")

            text = transport.config_path.read_text(encoding="utf-8")
            self.assertIn("Host github.com", text)
            self.assertIn("User git", text)
            self.assertIn("Host *", text)
            self.assertEqual(text.count(f"IdentityFile {promoted.private_path}"), 2)
            self.assertNotIn("{{", text)
            self.assertEqual(transport.config_path, base / "w" / "config")
            self.assertEqual(stat.S_IMODE(transport.config_path.stat().st_mode), 0o600)
            self.assertEqual(transport.git_ssh_command, f"ssh -F {base / 'w' / 'config'}")


class AgentTests(unittest.TestCase):
    def test_parse_agent_output(self) -> None:
        self.assertEqual(
            parse_agent_output(AGENT_OUTPUT),
            {"SSH_AUTH_SOCK": "/tmp/ssh-XXXXabcd/agent.41", "SSH_AGENT_PID": "42"},
        )

    def test_key_added_with_agent_environment(self) -> None:
        runner = FakeRunner({("ssh-agent",): ok(AGENT_OUTPUT)})
        env = start_agent(runner, Path("/k/id_ed25519"), quiet_logger())

        self.assertEqual(env["SSH_AGENT_PID"], "42")
        add_call = runner.calls[-1]
        self.assertEqual(add_call.cmd, ["ssh-add", "/k/id_ed25519"])
        self.assertEqual(add_call.env["SSH_AUTH_SOCK"], "/tmp/ssh-XXXXabcd/agent.41")

    def test_ssh_add_failure_is_a_warning(self) -> None:
        runner = FakeRunner({("ssh-agent",): ok(AGENT_OUTPUT), ("ssh-add",): fail(1)})
        logger = quiet_logger()
        env = start_agent(runner, Path("/k/id_rsa"), logger)

        self.assertIn("SSH_AUTH_SOCK", env)
        self.assertIn("Could not add key to agent", logger.stream.getvalue())

    def test_agent_start_failure_returns_empty_env(self) -> None:
        runner = FakeRunner({("ssh-agent",): fail(127)})
        logger = quiet_logger()
        self.assertEqual(start_agent(runner, Path("/k/id_rsa"), logger), {})
        self.assertFalse(runner.ran("ssh-add"))
        self.assertIn("[WARN]", logger.stream.getvalue())
