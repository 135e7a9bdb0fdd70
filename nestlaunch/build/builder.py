"""Project build step.

Runs the build toolchain once, synchronously, and folds every outcome into a
`BuildResult`. Toolchain output goes straight to the operator's terminal.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Optional, Sequence

from nestlaunch.common.types import BuildResult

logger = logging.getLogger(__name__)

RunFunc = Callable[..., "subprocess.CompletedProcess[bytes]"]

__all__ = ["Builder"]


class Builder:
    """Invokes the project build toolchain and reports the build gate."""

    def __init__(
        self,
        command: Sequence[str],
        directory: Optional[str] = None,
        run_func: RunFunc = subprocess.run,
    ) -> None:
        """
        Initialize builder.

        Args:
            command: Toolchain argument list (for example `cargo build`).
            directory: Project directory, None for the current directory.
            run_func: Process runner with the `subprocess.run` signature.

        Raises:
            ValueError: If command is empty.
        """
        if not command:
            raise ValueError("Build command must not be empty")
        self._command: list[str] = list(command)
        self._directory: Optional[Path] = Path(directory) if directory else None
        self._run_func: RunFunc = run_func

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def build(self) -> BuildResult:
        """
        Run one build attempt.

        Returns:
            BuildResult, `success=False` both for compile errors and for a
            toolchain that could not be started.
        """
        command_text: str = shlex.join(self._command)
        logger.info("Building: %s", command_text)
        try:
            completed = self._run_func(self._command, cwd=self._directory, check=False)
        except OSError as e:
            logger.error("Build toolchain could not be started (%s): %s", self._command[0], e)
            return BuildResult(success=False, returncode=None, error=str(e))

        if completed.returncode != 0:
            logger.error("Build failed with exit status %d", completed.returncode)
            return BuildResult(success=False, returncode=completed.returncode)

        logger.info("Build succeeded")
        return BuildResult(success=True, returncode=0)
