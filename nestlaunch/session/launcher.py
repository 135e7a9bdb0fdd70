"""Nested session launcher.

Resolves the nested display server, composes the session-initialization
command line and runs it in the foreground. The harness stays alive for
exactly as long as the session does.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Optional

from nestlaunch.common.errors import LaunchError, ResolutionError
from nestlaunch.common.settings import settings
from nestlaunch.common.types import BuildResult, LaunchState, SessionParameters
from nestlaunch.session.locator import BinaryLocator

logger = logging.getLogger(__name__)

RunFunc = Callable[..., "subprocess.CompletedProcess[bytes]"]
PreflightFunc = Callable[[SessionParameters], None]

__all__ = ["SessionLauncher"]


class SessionLauncher:
    """Starts an interactive session inside a nested display server."""

    def __init__(
        self,
        locator: BinaryLocator,
        script: str,
        init_command: str = "xinit",
        directory: Optional[str] = None,
        run_func: RunFunc = subprocess.run,
    ) -> None:
        """
        Initialize session launcher.

        Args:
            locator: Host binary locator used to find the nested server.
            script: Session script run by the init command inside the nested display.
            init_command: Session-initialization program.
            directory: Project directory the session runs in, None for the
                current directory. A relative script is resolved against it.
            run_func: Process runner with the `subprocess.run` signature.
        """
        self._locator: BinaryLocator = locator
        self._script: str = script
        self._init_command: str = init_command
        self._directory: Optional[Path] = Path(directory) if directory else None
        self._run_func: RunFunc = run_func
        self.state: LaunchState = LaunchState.INIT

    def path_resolve(self, name: str) -> str:
        """
        Resolve the nested display server executable.

        Args:
            name: Executable name, e.g. `Xephyr`.

        Returns:
            First path reported by the locator.

        Raises:
            ResolutionError: If the locator reports no match.
        """
        path: Optional[str] = self._locator.resolve(name)
        if not path:
            raise ResolutionError(f"Could not locate '{name}' on this host; is it installed?")
        logger.info("Resolved %s -> %s", name, path)
        return path

    def command_compose(self, server_path: str, params: SessionParameters) -> list[str]:
        """
        Compose the session-initialization command line.

        Args:
            server_path: Resolved nested server path.
            params: Fixed session parameters.

        Returns:
            `[init, script, --, server, display, -ac, -screen, WxH, -host-cursor]`
        """
        if not server_path:
            raise ResolutionError("Refusing to compose a session with an empty server path")
        return [
            self._init_command,
            self._script,
            settings.ARGUMENT_SEPARATOR,
            server_path,
            *params.arguments_render(),
        ]

    def scriptPath_get(self) -> Path:
        """
        Locate the session script on disk.

        Returns:
            Script path, relative scripts joined to the project directory.
        """
        script = Path(self._script)
        if self._directory is None or script.is_absolute():
            return script
        return self._directory / script

    def launch(self, server_path: str, params: SessionParameters) -> None:
        """
        Run the nested session and wait for it to exit.

        Args:
            server_path: Resolved nested server path.
            params: Fixed session parameters.

        Raises:
            LaunchError: If the script is missing, the session cannot start,
                or it exits with a nonzero status.
        """
        command: list[str] = self.command_compose(server_path, params)
        script_path: Path = self.scriptPath_get()
        if not script_path.is_file():
            raise LaunchError(f"Session script not found: {script_path}")

        logger.info("Starting nested session: %s", shlex.join(command))
        try:
            completed = self._run_func(command, cwd=self._directory, check=False)
        except OSError as e:
            raise LaunchError(f"Could not start '{self._init_command}': {e}") from e

        if completed.returncode < 0:
            raise LaunchError(f"Nested session killed by signal {-completed.returncode}")
        if completed.returncode != 0:
            raise LaunchError(f"Nested session exited with status {completed.returncode}")
        logger.info("Nested session ended")

    def session_start(
        self,
        build_result: BuildResult,
        server_name: str,
        params: SessionParameters,
        preflight: Optional[PreflightFunc] = None,
        dry_run: bool = False,
    ) -> Optional[list[str]]:
        """
        Gate on the build result, then resolve and launch.

        Args:
            build_result: Outcome of the build step.
            server_name: Nested server executable name.
            params: Fixed session parameters.
            preflight: Optional check run after resolution, before launch.
            dry_run: Compose the command without running it or the preflight.

        Returns:
            The composed command, or None when the build gate aborted.

        Raises:
            ResolutionError: If the nested server cannot be located.
            PreflightError: If the preflight check fails.
            LaunchError: If the session fails.
        """
        if self.state is not LaunchState.INIT:
            raise RuntimeError(f"Session launcher already used (state: {self.state.value})")

        if not build_result.success:
            self.state = LaunchState.ABORTED
            logger.warning("Build failed; nested session not started")
            return None

        try:
            server_path: str = self.path_resolve(server_name)
            if preflight is not None and not dry_run:
                preflight(params)
        except Exception:
            self.state = LaunchState.ABORTED
            raise

        command: list[str] = self.command_compose(server_path, params)
        self.state = LaunchState.LAUNCHING
        if dry_run:
            logger.info("Dry run: %s", shlex.join(command))
            return command

        self.launch(server_path, params)
        return command
