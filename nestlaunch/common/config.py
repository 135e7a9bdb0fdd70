"""Configuration file loading and management"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_BUILD_COMMAND: List[str] = ["cargo", "build"]
DEFAULT_LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SUPPORTED_LOCATORS = ("whereis", "path")


@dataclass
class BuildConfig:
    """Build toolchain settings"""
    command: List[str] = field(default_factory=lambda: list(DEFAULT_BUILD_COMMAND))
    directory: Optional[str] = None  # None means current working directory


@dataclass
class SessionConfig:
    """Nested session settings"""
    init_command: str = "xinit"
    script: str = "./hack/xinitrc"
    server_name: str = "Xephyr"
    locator: str = "whereis"


@dataclass
class PreflightConfig:
    """Display preflight settings"""
    enabled: bool = True
    host_display: Optional[str] = None  # None means $DISPLAY


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class Config:
    """Complete harness configuration"""
    build: BuildConfig = field(default_factory=BuildConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    preflight: PreflightConfig = field(default_factory=PreflightConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "nestlaunch.yml",
        "~/.config/nestlaunch/config.yml",
        "/etc/nestlaunch/config.yml",
    ]

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        # An empty file is a valid "all defaults" config
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def _section_get(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        """Return a config section, treating absent or null as empty"""
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{name}' must be a dictionary")
        return section

    @staticmethod
    def buildCommand_parse(raw: Any) -> List[str]:
        """
        Normalize build command to an argument list

        Args:
            raw: List of arguments, or a single string split on whitespace

        Returns:
            Non-empty argument list

        Raises:
            ValueError: If command is empty or of the wrong type
        """
        if isinstance(raw, str):
            command = raw.split()
        elif isinstance(raw, list):
            command = [str(part) for part in raw]
        else:
            raise ValueError("build.command must be a string or a list of strings")
        if not command:
            raise ValueError("build.command must not be empty")
        return command

    @staticmethod
    def text_get(section: Dict[str, Any], section_name: str, key: str, default: str) -> str:
        """
        Read a required text value

        Args:
            section: Config section dictionary
            section_name: Section name for error messages
            key: Key within the section
            default: Value used when the key is absent

        Returns:
            Non-empty string

        Raises:
            ValueError: If the value is present but not a non-empty string
        """
        value = section.get(key, default)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{section_name}.{key} must be a non-empty string, got {value!r}")
        return value

    @staticmethod
    def optionalText_get(section: Dict[str, Any], section_name: str, key: str) -> Optional[str]:
        """Read a text value that may be absent or null"""
        value = section.get(key)
        if value is None:
            return None
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{section_name}.{key} must be a non-empty string or null, got {value!r}")
        return value

    @staticmethod
    def flag_get(section: Dict[str, Any], section_name: str, key: str, default: bool) -> bool:
        """Read a YAML boolean; quoted strings such as "false" are rejected"""
        value = section.get(key, default)
        if not isinstance(value, bool):
            raise ValueError(f"{section_name}.{key} must be true or false, got {value!r}")
        return value

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object with defaults for absent keys

        Raises:
            ValueError: If a value is invalid
        """
        defaults = Config()

        build_data = ConfigLoader._section_get(data, "build")
        build = BuildConfig(
            command=ConfigLoader.buildCommand_parse(
                build_data.get("command", defaults.build.command)
            ),
            directory=ConfigLoader.optionalText_get(build_data, "build", "directory"),
        )

        session_data = ConfigLoader._section_get(data, "session")
        session = SessionConfig(
            init_command=ConfigLoader.text_get(
                session_data, "session", "init_command", defaults.session.init_command
            ),
            script=ConfigLoader.text_get(session_data, "session", "script", defaults.session.script),
            server_name=ConfigLoader.text_get(
                session_data, "session", "server_name", defaults.session.server_name
            ),
            locator=ConfigLoader.text_get(
                session_data, "session", "locator", defaults.session.locator
            ).lower(),
        )
        if session.locator not in SUPPORTED_LOCATORS:
            raise ValueError(
                f"Unsupported locator '{session.locator}'. "
                f"Supported: {', '.join(SUPPORTED_LOCATORS)}."
            )

        preflight_data = ConfigLoader._section_get(data, "preflight")
        preflight = PreflightConfig(
            enabled=ConfigLoader.flag_get(
                preflight_data, "preflight", "enabled", defaults.preflight.enabled
            ),
            host_display=ConfigLoader.optionalText_get(preflight_data, "preflight", "host_display"),
        )

        logging_data = ConfigLoader._section_get(data, "logging")
        logging = LoggingConfig(
            level=ConfigLoader.text_get(logging_data, "logging", "level", defaults.logging.level),
            file=ConfigLoader.optionalText_get(logging_data, "logging", "file"),
            format=ConfigLoader.text_get(logging_data, "logging", "format", defaults.logging.format),
        )

        return Config(
            build=build,
            session=session,
            preflight=preflight,
            logging=logging,
        )

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard
                locations and falls back to built-in defaults.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If an explicit config file does not exist
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                return Config()

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)
