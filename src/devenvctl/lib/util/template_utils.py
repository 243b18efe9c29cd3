# SPDX-FileCopyrightText: 2026 Jiri Vyskocil
# SPDX-License-Identifier: Apache-2.0

"""Minimal template rendering via ``{{VAR}}`` token replacement."""

from importlib import resources


def render_text(content: str, variables: dict) -> str:
    """Replace ``{{KEY}}`` tokens in *content* with *variables* values."""
    for k, v in variables.items():
        content = content.replace(f"{{{{{k}}}}}", str(v))
    return content


def render_packaged_template(name: str, variables: dict) -> str:
    """Render ``devenvctl/resources/templates/<name>`` (works from wheels/zip)."""
    template = resources.files("devenvctl") / "resources" / "templates" / name
    return render_text(template.read_text(encoding="utf-8"), variables)
