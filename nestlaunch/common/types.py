"""Common types and data structures for nestlaunch"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class LaunchState(Enum):
    """Session launcher lifecycle"""
    INIT = "init"
    LAUNCHING = "launching"
    ABORTED = "aborted"


class ExitCode(IntEnum):
    """Process exit codes reported by the harness"""
    OK = 0
    BUILD_FAILED = 1
    RESOLUTION_FAILED = 2
    LAUNCH_FAILED = 3
    PREFLIGHT_FAILED = 4
    INTERRUPTED = 130


@dataclass(frozen=True)
class BuildResult:
    """Outcome of one build attempt"""
    success: bool
    returncode: Optional[int] = None
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class ScreenGeometry:
    """Nested screen dimensions"""
    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class SessionParameters:
    """Fixed display parameters handed to the nested server

    Rendered in a fixed order: display, access-control flag,
    screen geometry, host-cursor flag.
    """
    display: str
    access_control_disabled: bool
    geometry: ScreenGeometry
    host_cursor: bool

    def arguments_render(self) -> list[str]:
        """
        Render parameters as nested server arguments

        Returns:
            Argument list in display, -ac, -screen WxH, -host-cursor order
        """
        args: list[str] = [self.display]
        if self.access_control_disabled:
            args.append("-ac")
        args.extend(["-screen", str(self.geometry)])
        if self.host_cursor:
            args.append("-host-cursor")
        return args
