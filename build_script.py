#!/usr/bin/env python3
"""
Record the git branch into ``src/devenvctl/_branch_info.py`` before packaging.

``pip install`` from a git checkout copies the sources without the ``.git``
directory, so the branch shown by ``devenvctl --version`` has to be captured
here, while the checkout is still available. Called by setup.py.
"""

import subprocess
from pathlib import Path

BRANCH_INFO = Path("src/devenvctl/_branch_info.py")


def current_branch() -> str | None:
    """Return the checked-out branch, or None outside a git work tree."""
    try:
        result = subprocess.run(
            ["git", "branch", "--show-current"],
            capture_output=True,
            text=True,
            timeout=1,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    branch = result.stdout.strip()
    return branch if result.returncode == 0 and branch else None


def main() -> int:
    branch = current_branch()
    if branch is None:
        print("Not in a git repository or could not detect branch")
        return 0
    BRANCH_INFO.write_text(
        "# Generated by build_script.py during pip/pipx install\n"
        f"BRANCH_NAME = {branch!r}\n"
    )
    print(f"Preserved branch information: {branch}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
