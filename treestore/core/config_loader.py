"""
treestore Configuration Loader

Configuration management for the tree store:
- JSON configuration file loading
- Configuration validation
- Default value handling
- Runtime configuration updates

Author: YSNRFD
Version: 1.0.0
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional
import threading

from treestore.exceptions import ConfigError, ConfigValidationError
from treestore.logger import Logger, LogLevel


@dataclass
class FilesystemConfig:
    """Tree store settings."""
    separator: str = "/"
    root_name: str = "/"
    default_owner: str = "root"
    default_group: str = "root"
    default_mime_type: str = "text/plain"
    directory_mime_type: str = "directory"
    guess_mime_type: bool = False
    track_size: bool = True
    persist_access_time: bool = True


@dataclass
class SearchConfig:
    """Search settings."""
    full_paths: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the tree store.
    """
    filesystem: FilesystemConfig = field(default_factory=FilesystemConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Handles loading configuration from JSON files, validating
    settings, and providing runtime configuration access.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('treestore.json')
        >>> print(config.filesystem.default_owner)
        root
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigError: If the file cannot be loaded or parsed
            ConfigValidationError: If a section holds an unknown key
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file: {e}")
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file: {e}")

        self._config = self.parse(data)
        self._loaded = True
        return self._config

    def parse(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into a Config object."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration root must be an object")

        config = Config()

        for section in fields(Config):
            if section.name not in data:
                continue
            section_data = data[section.name]
            if not isinstance(section_data, dict):
                raise ConfigValidationError(
                    f"Configuration section must be an object: {section.name}",
                    key=section.name
                )
            current = getattr(config, section.name)
            known = {f.name for f in fields(current)}
            unknown = set(section_data) - known
            if unknown:
                key = f"{section.name}.{sorted(unknown)[0]}"
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)
            setattr(config, section.name, type(current)(**section_data))

        unknown_sections = set(data) - {f.name for f in fields(Config)}
        if unknown_sections:
            key = sorted(unknown_sections)[0]
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        self._validate(config)
        return config

    @staticmethod
    def _validate(config: Config) -> None:
        sep = config.filesystem.separator
        if len(sep) != 1:
            raise ConfigValidationError(
                "Path separator must be a single character",
                key="filesystem.separator"
            )
        try:
            LogLevel.from_name(config.logging.level)
        except ValueError:
            raise ConfigValidationError(
                f"Unknown log level: {config.logging.level}",
                key="logging.level"
            )

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'filesystem.default_owner')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Args:
            key: Dot-notation key (e.g., 'search.full_paths')
            value: Value to set

        Note:
            Stores created afterwards pick the value up; existing stores
            keep the configuration they were built with.
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if hasattr(obj, final_key):
            setattr(obj, final_key, value)
        else:
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

    def reset(self) -> None:
        """Return to the built-in defaults."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: dataclass_to_dict(v) for k, v in obj.items()}
            else:
                return obj

        return dataclass_to_dict(self._config)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    loader = ConfigLoader()
    return loader.config


def configure_logging(config: Optional[Config] = None) -> None:
    """Initialize the logging system from the ``logging`` section."""
    log_config = (config or get_config()).logging
    Logger.initialize(
        level=LogLevel.from_name(log_config.level),
        log_file=log_config.log_file,
        use_colors=log_config.use_colors,
        console_output=log_config.console_output,
    )
