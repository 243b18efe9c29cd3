# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Keep the debug log and global config of test runs out of the real user dirs."""

import pytest


@pytest.fixture(autouse=True)
def _isolated_dirs(tmp_path, monkeypatch):
    monkeypatch.setenv("DEVENVCTL_STATE_DIR", str(tmp_path / "state"))
    monkeypatch.setenv("DEVENVCTL_CONFIG_FILE", str(tmp_path / "config" / "config.yml"))
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
