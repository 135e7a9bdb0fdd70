"""Harness bootstrap helpers for config, logging, and component wiring."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from nestlaunch.build.builder import Builder
from nestlaunch.common.config import Config, ConfigLoader
from nestlaunch.common.settings import settings
from nestlaunch.session.launcher import SessionLauncher
from nestlaunch.session.locator import locator_create
from nestlaunch.x11.display import DisplayProbe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HarnessComponents:
    """Wired components for one harness run."""

    builder: Builder
    launcher: SessionLauncher
    probe: Optional[DisplayProbe]


def configWithSettings_load(args: argparse.Namespace) -> Config:
    """
    Load configuration and initialize settings singleton.

    Exits with status 1 on configuration errors, before any build starts.

    Args:
        args: Parsed CLI args.

    Returns:
        Loaded config.
    """
    config_path: Path | None = Path(args.config) if getattr(args, "config", None) else None
    try:
        config: Config = ConfigLoader.config_load(file_path=config_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Check the path given with --config", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)
    settings.initialize(config)
    return config


def loggingWithConfig_setup(
    args: argparse.Namespace,
    config: Config,
    logging_setup_func: Callable[[str, str, Optional[str]], None],
) -> None:
    """
    Setup logging from config and CLI override.

    Args:
        args: Parsed CLI args.
        config: Loaded config.
        logging_setup_func: Logging setup callback.
    """
    log_level: str = getattr(args, "log_level", None) or config.logging.level
    try:
        logging_setup_func(log_level, config.logging.format, config.logging.file)
    except (ValueError, OSError) as e:
        print(f"Error configuring logging: {e}", file=sys.stderr)
        sys.exit(1)


def components_create(config: Config) -> HarnessComponents:
    """
    Build the harness components described by the config.

    Args:
        config: Loaded config.

    Returns:
        Builder, launcher and optional display probe.
    """
    builder = Builder(command=config.build.command, directory=config.build.directory)
    launcher = SessionLauncher(
        locator=locator_create(config.session.locator),
        script=config.session.script,
        init_command=config.session.init_command,
        directory=config.build.directory,
    )
    probe: Optional[DisplayProbe] = None
    if config.preflight.enabled:
        probe = DisplayProbe(host_display=config.preflight.host_display)
    else:
        logger.debug("Display preflight disabled by config")
    return HarnessComponents(builder=builder, launcher=launcher, probe=probe)
