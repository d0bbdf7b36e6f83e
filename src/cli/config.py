"""YAML configuration loading and validation.

The organizer reads optional settings from .label-organizer/config.yaml.
A missing file means defaults; a malformed one is an error.
"""

from typing import Any, Dict

import yaml

from src.label_operations.models import OrganizerConfig

from .errors import ConfigError, ConfigFilesystemError


class ConfigLoader:
    """Handles configuration file loading and validation.

    Configuration file structure (every field optional):
        fallback_space_key: "DEV"
        page_size: 100
        max_workers: 1
        request_timeout: 30
    """

    DEFAULT_CONFIG_PATH = '.label-organizer/config.yaml'

    INT_FIELDS = ('page_size', 'max_workers', 'request_timeout')

    KNOWN_FIELDS = {'fallback_space_key', *INT_FIELDS}

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> OrganizerConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            OrganizerConfig (defaults when the file does not exist)

        Raises:
            ConfigFilesystemError: If the file exists but cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return OrganizerConfig()
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise ConfigFilesystemError(config_path, 'read', str(e))

        if not content.strip():
            return OrganizerConfig()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return OrganizerConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> OrganizerConfig:
        """Parse and validate configuration dictionary.

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown = set(config_dict) - cls.KNOWN_FIELDS
        if unknown:
            raise ConfigError(f"Unknown fields: {', '.join(sorted(unknown))}")

        defaults = OrganizerConfig()
        values: Dict[str, Any] = {}

        fallback = config_dict.get('fallback_space_key', defaults.fallback_space_key)
        if not isinstance(fallback, str) or not fallback.strip():
            raise ConfigError("Must be a non-empty string", 'fallback_space_key')
        values['fallback_space_key'] = fallback.strip()

        for name in cls.INT_FIELDS:
            value = config_dict.get(name, getattr(defaults, name))
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(
                    f"Must be an integer, got {type(value).__name__}", name
                )
            if value < 1:
                raise ConfigError(f"Must be at least 1, got {value}", name)
            values[name] = value

        return OrganizerConfig(**values)
