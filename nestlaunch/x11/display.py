"""X11 display preflight checks"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from Xlib import display as xdisplay
from Xlib import error as xerror

from nestlaunch.common.errors import PreflightError
from nestlaunch.common.settings import settings
from nestlaunch.common.types import SessionParameters

logger = logging.getLogger(__name__)

DisplayFactory = Callable[[Optional[str]], Any]


def displayNumber_parse(display_name: str) -> int:
    """
    Extract display number from an X11 display name

    Args:
        display_name: Display name such as ':1', 'host:1' or ':1.0'

    Returns:
        Display number

    Raises:
        ValueError: If the name carries no display number
    """
    _, sep, rest = display_name.rpartition(":")
    number = rest.split(".", 1)[0]
    if not sep or not number.isdigit():
        raise ValueError(f"Invalid X11 display name: {display_name!r}")
    return int(number)


class DisplayProbe:
    """Checks that the host can run a nested X server"""

    def __init__(
        self,
        host_display: Optional[str] = None,
        display_factory: DisplayFactory = xdisplay.Display,
        socket_dir: Optional[str] = None,
        lock_dir: Optional[str] = None,
    ) -> None:
        """
        Initialize display probe

        Args:
            host_display: Outer X11 display name, None for $DISPLAY
            display_factory: Callable opening an Xlib display connection
            socket_dir: X11 unix socket directory (default from settings)
            lock_dir: X11 lock file directory (default from settings)
        """
        self._host_display: Optional[str] = host_display
        self._display_factory: DisplayFactory = display_factory
        self._socket_dir: Path = Path(socket_dir or settings.X11_SOCKET_DIR)
        self._lock_dir: Path = Path(lock_dir or settings.X11_LOCK_DIR)

    def hostDisplay_check(self) -> None:
        """
        Verify the outer display accepts connections

        Raises:
            PreflightError: If no connection can be established
        """
        try:
            connection = self._display_factory(self._host_display)
        except (xerror.DisplayError, xerror.ConnectionClosedError, OSError) as e:
            target = self._host_display or "$DISPLAY"
            raise PreflightError(f"Cannot connect to host display {target}: {e}") from e

        logger.debug("Host display reachable: %s", connection.get_display_name())
        connection.close()

    def nestedDisplay_isFree(self, display_name: str) -> bool:
        """
        Check whether no X server already owns the display number

        A display counts as taken when either its unix socket or its
        lock file exists.

        Args:
            display_name: Nested display name, e.g. ':1'

        Returns:
            True if the display number is free
        """
        number = displayNumber_parse(display_name)
        socket_path = self._socket_dir / f"X{number}"
        lock_path = self._lock_dir / f".X{number}-lock"
        return not socket_path.exists() and not lock_path.exists()

    def preflight_run(self, params: SessionParameters) -> None:
        """
        Run all preflight checks for a nested session

        Args:
            params: Session parameters naming the nested display

        Raises:
            PreflightError: If any check fails
        """
        self.hostDisplay_check()
        if not self.nestedDisplay_isFree(params.display):
            raise PreflightError(
                f"Display {params.display} is already in use; "
                f"stop the server holding it or remove its stale lock file"
            )
        logger.info("Preflight passed for display %s", params.display)
