"""nestlaunch command-line interface"""

import argparse
import sys
from typing import NoReturn

from nestlaunch import __version__
from nestlaunch.common.types import ExitCode


def arguments_parse(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments

    Args:
        argv: Argument list, None for sys.argv.

    Returns:
        Parsed CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="nestlaunch",
        description="Build the window manager and run it inside a nested Xephyr session",
    )

    parser.add_argument("--version", action="version", version=f"nestlaunch {__version__}")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: search standard locations, else built-in defaults)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="Build and resolve, then print the session command instead of running it",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (overrides config)"
    )

    parser.add_argument(
        "--info", action="store_true", help="Enable info logging (overrides config)"
    )

    parser.add_argument(
        "--warning", action="store_true", help="Enable warning logging (overrides config)"
    )

    parser.add_argument(
        "--error", action="store_true", help="Enable error logging (overrides config)"
    )

    parser.add_argument(
        "--critical", action="store_true", help="Enable critical logging (overrides config)"
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> NoReturn:
    """
    Main entry point for the nestlaunch command

    Args:
        argv: Argument list, None for sys.argv.
    """
    args = arguments_parse(argv)
    argsWithLogLevel_apply(args, logLevelOverride_get(args))

    try:
        exit_code: ExitCode = harness_main(args)
    except KeyboardInterrupt:
        print("\nInterrupted, shutting down...", file=sys.stderr)
        sys.exit(ExitCode.INTERRUPTED)
    sys.exit(int(exit_code))


def harness_main(args: argparse.Namespace) -> ExitCode:
    """
    Load config, set up logging, and run the harness.

    Args:
        args: Parsed CLI args.

    Returns:
        Harness exit code.
    """
    from nestlaunch.common.settings import settings
    from nestlaunch.harness.bootstrap import (
        components_create,
        configWithSettings_load,
        loggingWithConfig_setup,
    )
    from nestlaunch.harness.harness_logging import logging_setup
    from nestlaunch.harness.runner import harness_run

    config = configWithSettings_load(args)
    loggingWithConfig_setup(args, config, logging_setup)
    components = components_create(config)
    return harness_run(
        builder=components.builder,
        launcher=components.launcher,
        params=settings.sessionParameters_get(),
        server_name=config.session.server_name,
        probe=components.probe,
        dry_run=args.dry_run,
    )


def logLevelOverride_get(args: argparse.Namespace) -> str | None:
    """
    Resolve explicit log level override flags.

    Args:
        args: Parsed CLI args.

    Returns:
        Selected log level or None.
    """
    if args.critical:
        return "CRITICAL"
    if args.error:
        return "ERROR"
    if args.warning:
        return "WARNING"
    if args.info:
        return "INFO"
    if args.debug:
        return "DEBUG"
    return None


def argsWithLogLevel_apply(args: argparse.Namespace, log_level: str | None) -> None:
    """
    Apply optional log level override to args.

    Args:
        args: Parsed CLI args.
        log_level: Optional log level string.
    """
    if log_level is not None:
        setattr(args, "log_level", log_level)


if __name__ == "__main__":
    main()
