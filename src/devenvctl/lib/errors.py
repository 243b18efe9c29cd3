# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Fatal error types raised by the bootstrap and session setup steps.

Every fatal step raises a ``FatalError`` subclass carrying a one-line message
and the remediation lines shown to the operator. The CLI entry points catch
``FatalError`` and log both; since it is a ``SystemExit``, an uncaught one
still terminates the process with a non-zero status.
"""

from collections.abc import Iterable


class FatalError(SystemExit):
    """A step failed and the run cannot continue.

    ``details`` are printed verbatim after the remediation lines, without a
    timestamp or level tag, so they can be copied as-is (e.g. a public key).
    """

    exit_code = 1

    def __init__(
        self, message: str, remediation: Iterable[str] = (), details: Iterable[str] = ()
    ):
        super().__init__(self.exit_code)
        self.message = message
        self.remediation = list(remediation)
        self.details = list(details)

    def __str__(self) -> str:
        return self.message

    def report(self, logger) -> None:
        """Log the message and each remediation line at error level, then the details."""
        logger.error(self.message)
        for line in self.remediation:
            logger.error(line)
        for line in self.details:
            logger.raw(line)


# ---------- host preflight ----------


class RuntimeMissing(FatalError):
    pass


class DaemonUnreachable(FatalError):
    pass


class ComposeMissing(FatalError):
    pass


class WorkspaceError(FatalError):
    pass


# ---------- fetch / build ----------


class FetchFailed(FatalError):
    pass


class BuildFailed(FatalError):
    pass


# ---------- session identity ----------


class NoMountedKeys(FatalError):
    pass


class NoUsableKeyPair(FatalError):
    pass


class KeyNotRegistered(FatalError):
    pass


class KeyPromotionFailed(FatalError):
    pass


class DotfilesFailed(FatalError):
    pass
