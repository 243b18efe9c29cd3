"""Console logging for the bootstrap and entrypoint tools.

Every line is timestamped and tagged with its severity::

    [2026-01-31 12:00:00] [INFO] Cloning devcontainer project...

The tag is coloured when the target stream supports it. Warnings and errors
are also appended to the library debug log so that a failed session can be
inspected after the container is gone.
"""

import sys
import time
from typing import TextIO

from .._util.ansi import blue, green, red, supports_color, yellow


def _log_debug(message: str) -> None:
    """Append a simple debug line to the devenvctl library log.

    Writes timestamped lines to ``state_root()/devenvctl.log``. Fully
    exception-safe: any IO error is silently ignored so this function never
    raises or affects callers.
    """
    try:
        from ..core.paths import state_root

        log_path = state_root() / "devenvctl.log"
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] {message}\n")
    except Exception:
        pass


class Logger:
    """Severity-tagged console logger.

    Host-side tools pass ``sys.stderr`` so their stdout stays clean; the
    in-container entrypoint logs to stdout like the shell it precedes.
    """

    def __init__(self, stream: TextIO | None = None, color_enabled: bool | None = None):
        self.stream = stream if stream is not None else sys.stdout
        if color_enabled is None:
            color_enabled = supports_color(self.stream)
        self.color_enabled = color_enabled

    def _emit(self, label: str, paint, message: str) -> None:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        tag = paint(f"[{timestamp}] [{label}]", self.color_enabled)
        print(f"{tag} {message}", file=self.stream, flush=True)

    def info(self, message: str) -> None:
        self._emit("INFO", blue, message)

    def warn(self, message: str) -> None:
        self._emit("WARN", yellow, message)
        _log_debug(f"WARN {message}")

    def error(self, message: str) -> None:
        self._emit("ERROR", red, message)
        _log_debug(f"ERROR {message}")

    def success(self, message: str) -> None:
        self._emit("SUCCESS", green, message)

    def raw(self, text: str) -> None:
        """Write *text* without a tag (used for public key material)."""
        print(text, file=self.stream, flush=True)
