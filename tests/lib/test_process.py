import tempfile
import unittest
from pathlib import Path

from devenvctl.lib.util.process import CommandRunner


class CommandRunnerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CommandRunner()

    def test_output_combines_stdout_and_stderr(self) -> None:
        result = self.runner.run(["sh", "-c", "echo out; echo err 1>&2; exit 3"])
        self.assertFalse(result.succeeded)
        self.assertEqual(result.returncode, 3)
        self.assertIn("out", result.output)
        self.assertIn("err", result.output)

    def test_env_is_overlaid_and_cwd_applied(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            result = self.runner.run(
                ["sh", "-c", 'echo "$PROJECT_NAME"; pwd'], env={"PROJECT_NAME": "alpha"}, cwd=Path(td)
            )
        self.assertTrue(result.succeeded)
        lines = result.output.splitlines()
        self.assertEqual(lines[0], "alpha")
        self.assertEqual(Path(lines[1]).resolve(), Path(td).resolve())

    def test_missing_binary(self) -> None:
        result = self.runner.run(["devenvctl-no-such-binary"])
        self.assertEqual(result.returncode, 127)
        self.assertFalse(result.succeeded)
        self.assertEqual(self.runner.interactive(["devenvctl-no-such-binary"]), 127)

    def test_timeout_has_no_exit_code(self) -> None:
        result = self.runner.run(["sleep", "5"], timeout=0.2)
        self.assertFalse(result.succeeded)
        self.assertIsNone(result.returncode)
        self.assertIn("timed out", result.output)

    def test_interactive_returns_exit_code(self) -> None:
        self.assertEqual(self.runner.interactive(["sh", "-c", "exit 4"]), 4)

    def test_which(self) -> None:
        self.assertIsNotNone(self.runner.which("sh"))
        self.assertIsNone(self.runner.which("devenvctl-no-such-binary"))
