"""Thin wrapper around ``subprocess`` used by every external tool call.

Components receive a ``CommandRunner`` instead of calling ``subprocess``
directly, which keeps the decision logic (marker matching, exit-code
checks) testable against a fake runner.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command.

    ``output`` holds stdout and stderr combined (empty when not captured).
    ``returncode`` is None when the command timed out.
    """

    succeeded: bool
    returncode: int | None
    output: str = ""


class CommandRunner:
    """Run external commands and report their outcome as ``CommandResult``."""

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    def run(
        self,
        cmd: list[str],
        *,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
        cwd: Path | None = None,
        capture: bool = True,
    ) -> CommandResult:
        """Run *cmd* and wait for it.

        *env* is overlaid on the current process environment. With
        ``capture=False`` output goes straight to the terminal.
        """
        full_env = None
        if env:
            full_env = {**os.environ, **env}
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE if capture else None,
                stderr=subprocess.STDOUT if capture else None,
                text=True,
                timeout=timeout,
                env=full_env,
                cwd=str(cwd) if cwd is not None else None,
                check=False,
            )
        except FileNotFoundError:
            return CommandResult(False, 127, f"{cmd[0]}: command not found")
        except subprocess.TimeoutExpired:
            return CommandResult(False, None, f"{cmd[0]}: timed out after {timeout}s")
        return CommandResult(proc.returncode == 0, proc.returncode, proc.stdout or "")

    def interactive(
        self,
        cmd: list[str],
        *,
        env: dict[str, str] | None = None,
        cwd: Path | None = None,
        stdin: IO[Any] | None = None,
    ) -> int:
        """Run *cmd* attached to the terminal and return its exit code.

        *stdin* replaces the inherited standard input when given.
        """
        full_env = {**os.environ, **env} if env else None
        try:
            proc = subprocess.run(
                cmd,
                stdin=stdin,
                env=full_env,
                cwd=str(cwd) if cwd is not None else None,
                check=False,
            )
        except FileNotFoundError:
            return 127
        return proc.returncode
