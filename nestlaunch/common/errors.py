"""Harness error kinds.

Each error carries the exit code the harness reports when it ends a run.
A failed build is not an exception: it is a `BuildResult` with
`success=False`.
"""

from __future__ import annotations

from nestlaunch.common.types import ExitCode


class HarnessError(Exception):
    """Base class for terminal harness failures."""

    exit_code: ExitCode = ExitCode.LAUNCH_FAILED


class ResolutionError(HarnessError):
    """Nested display server binary could not be located."""

    exit_code = ExitCode.RESOLUTION_FAILED


class PreflightError(HarnessError):
    """Host display environment cannot host a nested session."""

    exit_code = ExitCode.PREFLIGHT_FAILED


class LaunchError(HarnessError):
    """Session process failed to start or exited abnormally."""

    exit_code = ExitCode.LAUNCH_FAILED
