import tempfile
import unittest
from pathlib import Path

from devenvctl.lib.errors import KeyNotRegistered
from devenvctl.lib.session.github import (
    authenticate_github,
    check_gh_auth,
    gh_auth_token,
    has_success_marker,
    ssh_probe_command,
    validate_key,
)
from devenvctl.lib.session.keys import discover_key
from test_utils import GITHUB_GREETING, FakeRunner, fail, ok, quiet_logger, write_key_pair


class SuccessMarkerTests(unittest.TestCase):
    def test_greeting_is_success(self) -> None:
        self.assertTrue(has_success_marker(GITHUB_GREETING))

    def test_denied_is_failure(self) -> None:
        self.assertFalse(has_success_marker("git@github.com: Permission denied (publickey)."))
        self.assertFalse(has_success_marker(""))


class ValidateKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.addCleanup(self._td.cleanup)
        source = Path(self._td.name) / "ssh"
        write_key_pair(source, "id_ed25519")
        self.candidate = discover_key(source, ("id_ed25519",))

    def _validate(self, runner: FakeRunner) -> None:
        validate_key(
            runner,
            self.candidate,
            "github.com",
            10,
            "https://github.com/settings/keys",
            quiet_logger(),
        )

    def test_marker_with_nonzero_exit_passes(self) -> None:
        runner = FakeRunner({("ssh",): fail(1, GITHUB_GREETING)})
        self._validate(runner)

    def test_zero_exit_without_marker_fails(self) -> None:
        runner = FakeRunner({("ssh",): ok("welcome")})
        with self.assertRaises(KeyNotRegistered) as ctx:
            self._validate(runner)
        remediation = "\n".join(ctx.exception.remediation)
        self.assertIn("https://github.com/settings/keys", remediation)
        self.assertIn("SKIP_GITHUB_CHECK=true", remediation)
        self.assertEqual(ctx.exception.details, ["ssh-ed25519 AAAAid_ed25519 dev@host"])

    def test_reported_public_key_is_untagged(self) -> None:
        runner = FakeRunner({("ssh",): fail(255, "Permission denied (publickey).")})
        with self.assertRaises(KeyNotRegistered) as ctx:
            self._validate(runner)

        logger = quiet_logger()
        ctx.exception.report(logger)

        lines = logger.stream.getvalue().splitlines()
        self.assertEqual(lines[-1], "ssh-ed25519 AAAAid_ed25519 dev@host")
        self.assertTrue(all("[ERROR]" in line for line in lines[:-1]))

    def test_timeout_counts_as_rejection(self) -> None:
        runner = FakeRunner({("ssh",): fail(None, "ssh: timed out after 15s")})
        with self.assertRaises(KeyNotRegistered):
            self._validate(runner)

    def test_single_bounded_attempt_with_candidate_key(self) -> None:
        runner = FakeRunner({("ssh",): fail(1, GITHUB_GREETING)})
        self._validate(runner)

        self.assertEqual(len(runner.calls), 1)
        call = runner.calls[0]
        self.assertEqual(
            call.cmd, ssh_probe_command(self.candidate.private_path, "github.com", 10)
        )
        self.assertIn("BatchMode=yes", call.cmd)
        self.assertIn("ConnectTimeout=10", call.cmd)
        self.assertEqual(call.cmd[-1], "git@github.com")
        self.assertIsNotNone(call.timeout)


class GhCliTests(unittest.TestCase):
    def test_auth_status(self) -> None:
        self.assertTrue(check_gh_auth(FakeRunner(), quiet_logger()))
        self.assertFalse(check_gh_auth(FakeRunner({("gh", "auth", "status"): fail()}), quiet_logger()))

    def test_token_is_stripped(self) -> None:
        runner = FakeRunner({("gh", "auth", "token"): ok("gho_abc123\n")})
        self.assertEqual(gh_auth_token(runner, quiet_logger()), "gho_abc123")

    def test_token_failure_yields_empty_string_and_warns(self) -> None:
        runner = FakeRunner({("gh", "auth", "token"): fail(1, "not logged in")})
        logger = quiet_logger()
        self.assertEqual(gh_auth_token(runner, logger), "")
        self.assertIn("[WARN]", logger.stream.getvalue())

    def test_login_uses_ssh_protocol_and_host(self) -> None:
        runner = FakeRunner()
        self.assertTrue(authenticate_github(runner, "github.example.com", quiet_logger()))
        cmd = runner.interactive_calls[0].cmd
        self.assertEqual(cmd[:3], ["gh", "auth", "login"])
        self.assertIn("github.example.com", cmd)
        self.assertIn("ssh", cmd)

    def test_login_failure_is_soft(self) -> None:
        runner = FakeRunner({("gh", "auth", "login"): fail(1)})
        self.assertFalse(authenticate_github(runner, "github.com", quiet_logger()))
