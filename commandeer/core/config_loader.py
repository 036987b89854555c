"""
Commandeer Configuration Loader

Configuration management:
- JSON configuration file loading
- Type checking of loaded values
- Default value handling
- Runtime configuration updates via dot-notation keys

Author: Commandeer Developers
Version: 1.0.0
"""

import json
import threading
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Optional, List

from commandeer.exceptions import ConfigError, ConfigValidationError


# Counts that must be at least 1
POSITIVE_KEYS = frozenset({"shell.history_size", "search.limit"})


@dataclass
class FilesystemConfig:
    """Filesystem configuration settings."""
    seed_sample: bool = True
    protected_paths: List[str] = field(default_factory=lambda: ["/home"])


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    user: str = "user"
    hostname: str = "commandeer"
    history_size: int = 1000


@dataclass
class SearchConfig:
    """File search configuration settings."""
    limit: int = 200


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the application.
    """
    filesystem: FilesystemConfig = field(default_factory=FilesystemConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)
    search: SearchConfig = field(default_factory=SearchConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Handles loading configuration from JSON files, validating
    settings, and providing runtime configuration access.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('commandeer.json')
        >>> config.shell.hostname
        'commandeer'
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
                cls._instance._source = None
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
            ConfigValidationError: If a value has the wrong type
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                source=config_path
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file: {e}",
                source=config_path
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Cannot read configuration file: {e}",
                source=config_path
            ) from e

        if not isinstance(data, dict):
            raise ConfigValidationError(
                "Configuration root must be a JSON object",
                source=config_path
            )

        self._config = self._parse_config(data, config_path)
        self._loaded = True
        self._source = config_path
        return self._config

    def _parse_config(self, data: dict[str, Any], source: str) -> Config:
        """Parse configuration data into Config object."""
        config = Config()

        for section in fields(Config):
            if section.name not in data:
                continue
            section_data = data[section.name]
            if not isinstance(section_data, dict):
                raise ConfigValidationError(
                    f"Section '{section.name}' must be an object",
                    key=section.name,
                    source=source
                )
            current = getattr(config, section.name)
            for key, value in section_data.items():
                dotted = f"{section.name}.{key}"
                if not hasattr(current, key):
                    raise ConfigValidationError(
                        f"Unknown configuration key: {dotted}",
                        key=dotted,
                        source=source
                    )
                self._check_type(dotted, getattr(current, key), value, source)
                setattr(current, key, value)

        return config

    @staticmethod
    def _check_type(key: str, default: Any, value: Any, source: Optional[str] = None) -> None:
        """Reject values whose type disagrees with the default, and non-positive counts."""
        if default is None:
            if value is not None and not isinstance(value, str):
                raise ConfigValidationError(
                    f"Expected string or null for {key}", key=key, source=source
                )
            return

        expected = type(default)
        # bool is an int subclass; keep them apart
        if isinstance(value, bool) != isinstance(default, bool) or not isinstance(value, expected):
            raise ConfigValidationError(
                f"Expected {expected.__name__} for {key}, got {type(value).__name__}",
                key=key,
                source=source
            )
        if key in POSITIVE_KEYS and value < 1:
            raise ConfigValidationError(
                f"Expected a positive value for {key}, got {value}",
                key=key,
                source=source
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
            key: Dot-notation key (e.g., 'shell.hostname')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Changes are not written back to disk.

        Args:
            key: Dot-notation key (e.g., 'search.limit')
            value: Value to set
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if not is_dataclass(obj) or not hasattr(obj, final_key):
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        self._check_type(key, getattr(obj, final_key), value)
        setattr(obj, final_key, value)

    def reset(self) -> None:
        """Drop any loaded settings and return to defaults."""
        self._config = Config()
        self._loaded = False
        self._source = None

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if is_dataclass(obj):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            return obj

        return dataclass_to_dict(self._config)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    return ConfigLoader().config
