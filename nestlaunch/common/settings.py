"""Application settings singleton - single source of truth for configuration

This module provides a singleton Settings class that consolidates:
1. Nested session constants (display, geometry, server flags)
2. Host X11 layout constants
3. Runtime configuration from the YAML config file

Usage:
    from nestlaunch.common.settings import settings

    # Initialize once at startup with loaded config
    config = ConfigLoader.config_load()
    settings.initialize(config)

    # Use anywhere in the application
    params = settings.sessionParameters_get()
"""

from typing import Optional

from nestlaunch.common.config import Config
from nestlaunch.common.types import ScreenGeometry, SessionParameters


class Settings:
    """Singleton settings manager combining the config file and session constants

    This class provides:
    - Session constants that are never taken from user input
    - Host X11 layout constants used by the display preflight
    - Access to runtime configuration loaded from the config file

    The singleton pattern ensures all parts of the harness use the same
    configuration values and session constants.
    """

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        """Ensure only one Settings instance exists"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize settings singleton (only runs once)"""
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        self._config: Optional[Config] = None

    def initialize(self, config: Config) -> None:
        """
        Initialize with loaded configuration

        Args:
            config: Loaded harness configuration
        """
        self._config = config

    # =========================================================================
    # Nested Session Constants
    # =========================================================================

    NESTED_DISPLAY: str = ":1"
    """Display the nested server claims"""

    SCREEN_WIDTH: int = 1920
    SCREEN_HEIGHT: int = 1080
    """Nested screen geometry, passed as -screen WIDTHxHEIGHT"""

    ACCESS_CONTROL_DISABLED: bool = True
    """Pass -ac so the window manager under test can connect without xauth"""

    HOST_CURSOR: bool = True
    """Pass -host-cursor so the nested server reuses the host cursor"""

    ARGUMENT_SEPARATOR: str = "--"
    """Separates the session script from the server command line for xinit"""

    # =========================================================================
    # Host X11 Layout
    # =========================================================================

    X11_SOCKET_DIR: str = "/tmp/.X11-unix"
    """Directory holding X<n> unix sockets of running servers"""

    X11_LOCK_DIR: str = "/tmp"
    """Directory holding .X<n>-lock files of running servers"""

    def sessionParameters_get(self) -> SessionParameters:
        """
        Build the fixed session parameter tuple

        Returns:
            Session parameters from the constants above
        """
        return SessionParameters(
            display=self.NESTED_DISPLAY,
            access_control_disabled=self.ACCESS_CONTROL_DISABLED,
            geometry=ScreenGeometry(width=self.SCREEN_WIDTH, height=self.SCREEN_HEIGHT),
            host_cursor=self.HOST_CURSOR,
        )

    # =========================================================================
    # Runtime Configuration Access
    # =========================================================================

    @property
    def config(self) -> Config:
        """
        Get loaded configuration object

        Returns:
            Loaded configuration

        Raises:
            RuntimeError: If initialize() was never called
        """
        if self._config is None:
            raise RuntimeError("Settings not initialized. Call settings.initialize(config) first.")
        return self._config


# Global singleton instance
settings = Settings()
"""Global settings singleton instance

Import this anywhere in the application:
    from nestlaunch.common.settings import settings
"""
