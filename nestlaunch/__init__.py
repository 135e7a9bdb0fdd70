"""
nestlaunch: build-and-run harness for window manager development
Builds the project, then starts it inside a nested Xephyr session
"""

import subprocess
from pathlib import Path


def _get_git_hash() -> str:
    """Get short git hash, or 'dev' if not in git repo"""
    try:
        repo_path = Path(__file__).parent.parent
        result = subprocess.run(
            ["git", "rev-parse", "--short=4", "HEAD"],
            cwd=repo_path,
            capture_output=True,
            text=True,
            timeout=1,
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (OSError, subprocess.SubprocessError):
        pass
    return "dev"


__version__ = f"0.3.0.{_get_git_hash()}"
__author__ = "nestlaunch contributors"
