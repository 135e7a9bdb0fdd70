"""Build-gate-launch sequence and exit code mapping."""

from __future__ import annotations

import logging
import shlex
from typing import Optional

from nestlaunch.build.builder import Builder
from nestlaunch.common.errors import HarnessError
from nestlaunch.common.types import BuildResult, ExitCode, SessionParameters
from nestlaunch.session.launcher import SessionLauncher
from nestlaunch.x11.display import DisplayProbe

logger = logging.getLogger(__name__)

__all__ = ["harness_run"]


def harness_run(
    builder: Builder,
    launcher: SessionLauncher,
    params: SessionParameters,
    server_name: str,
    probe: Optional[DisplayProbe] = None,
    dry_run: bool = False,
) -> ExitCode:
    """
    Build the project and, when the build succeeds, run the nested session.

    Args:
        builder: Project builder.
        launcher: Session launcher (fresh, state INIT).
        params: Fixed session parameters.
        server_name: Nested server executable name.
        probe: Optional display preflight run before launching.
        dry_run: Print the session command instead of running it.

    Returns:
        Exit code for the harness process.
    """
    build_result: BuildResult = builder.build()
    if not build_result.success:
        launcher.session_start(build_result, server_name, params)
        return ExitCode.BUILD_FAILED

    try:
        command = launcher.session_start(
            build_result,
            server_name,
            params,
            preflight=probe.preflight_run if probe is not None else None,
            dry_run=dry_run,
        )
    except HarnessError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return e.exit_code

    if dry_run and command is not None:
        print(shlex.join(command))
    return ExitCode.OK
