"""
Layered configuration: built-in defaults, an optional file, the environment.
"""
import os
import json
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from copy import deepcopy
from utils.logging_config import get_logger
from utils.exceptions import ConfigurationError, ValidationError
from validation.schema import Schema, SettingsSchema
from .defaults import ENV_PREFIX, default_settings

ENV_LITERALS = {'true': True, 'false': False, 'null': None}

logger = get_logger(__name__)


class Config:
    """Configuration container with dot notation access."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data = data or {}

    def __getattr__(self, key: str) -> Any:
        """Get config value using dot notation."""
        if key.startswith('_'):
            return object.__getattribute__(self, key)

        if key not in self._data:
            raise AttributeError(f"Config has no attribute '{key}'")

        value = self._data[key]
        if isinstance(value, dict):
            return Config(value)
        return value

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any):
        self._data[key] = value

    def __contains__(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dotted path, with default."""
        try:
            value = self._data
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any):
        """Set config value by dotted path."""
        keys = key.split('.')
        data = self._data
        for k in keys[:-1]:
            if not isinstance(data.get(k), dict):
                data[k] = {}
            data = data[k]
        data[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        return deepcopy(self._data)

    def update(self, other: Dict[str, Any]):
        """Update configuration with another dict."""
        self._deep_update(self._data, other)

    @staticmethod
    def _deep_update(base: Dict, update: Dict):
        """Recursively update nested dictionaries."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                Config._deep_update(base[key], value)
            else:
                base[key] = deepcopy(value)


_MISSING = object()


class ConfigManager:
    """
    Configuration assembled from several sources, later sources winning.
    """

    def __init__(self):
        self._config = Config()
        self._schemas: Dict[str, Schema] = {}
        self.logger = get_logger(self.__class__.__name__)

    def load_from_file(self, filepath: str, validate: bool = True):
        """
        Load configuration from file (JSON or YAML).

        Args:
            filepath: Path to configuration file
            validate: Whether to validate against a schema registered under
                the file's stem
        """
        path = Path(filepath)

        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {filepath}",
                details={'filepath': str(path)}
            )

        if path.suffix not in ('.yaml', '.yml', '.json'):
            raise ConfigurationError(
                f"Unsupported file format: {path.suffix}",
                details={'filepath': str(path)}
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {filepath}: {e}",
                details={'filepath': str(path), 'error': str(e)}
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {filepath}",
                details={'filepath': str(path), 'actual_type': type(data).__name__}
            )

        if validate and path.stem in self._schemas:
            data = self._schemas[path.stem].validate(data)

        self._config.update(data)
        self.logger.info(f"Loaded configuration from {filepath}")

    def load_from_env(self, prefix: str = ENV_PREFIX, environ: Optional[Dict[str, str]] = None):
        """
        Load configuration from environment variables.

        ``PATTERN_CATALOG_CATALOG__DOCS_DIR`` maps to ``catalog.docs_dir``:
        the prefix is dropped, the rest lower-cased and double underscores
        separate nesting levels. Values stay strings except the literals
        ``true``, ``false`` and ``null``.

        Args:
            prefix: Prefix for environment variables
            environ: Mapping to read instead of ``os.environ``
        """
        environ = os.environ if environ is None else environ
        loaded = 0

        for key, value in environ.items():
            if not key.startswith(prefix):
                continue

            config_key = key[len(prefix):].lower().replace('__', '.')
            if not config_key:
                continue

            # Only true, false and null are decoded; "2024" stays a string
            self._config.set(config_key, ENV_LITERALS.get(value.strip().lower(), value))
            loaded += 1

        self.logger.info(f"Loaded {loaded} configuration values from environment")

    def load_from_dict(self, data: Dict[str, Any], validate: bool = False, schema_name: Optional[str] = None):
        """
        Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            validate: Whether to validate against schema
            schema_name: Name of schema to use for validation
        """
        if validate and schema_name and schema_name in self._schemas:
            data = self._schemas[schema_name].validate(data)

        self._config.update(data)
        self.logger.debug("Loaded configuration from dictionary")

    def save_to_file(self, filepath: str, format: str = 'yaml'):
        """
        Save configuration to file.

        Args:
            filepath: Path to save configuration
            format: File format ('yaml' or 'json')
        """
        if format not in ('yaml', 'json'):
            raise ConfigurationError(f"Unsupported format: {format}")

        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            if format == 'yaml':
                yaml.safe_dump(self._config.to_dict(), f, default_flow_style=False)
            else:
                json.dump(self._config.to_dict(), f, indent=2)

        self.logger.info(f"Saved configuration to {filepath}")

    def register_schema(self, name: str, schema: Schema):
        """Register a validation schema."""
        self._schemas[name] = schema
        self.logger.debug(f"Registered schema: {name}")

    def validate(self, schema_name: str):
        """Validate the merged configuration against a registered schema."""
        if schema_name not in self._schemas:
            raise ConfigurationError(
                f"Unknown schema: {schema_name}",
                details={'available': sorted(self._schemas)}
            )
        self._config = Config(self._schemas[schema_name].validate(self._config.to_dict()))

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        self._config.set(key, value)
        self.logger.debug(f"Set config: {key} = {value}")

    def get_config(self) -> Config:
        """Get the full configuration object."""
        return self._config

    def clear(self):
        """Clear all configuration."""
        self._config = Config()
        self.logger.debug("Cleared all configuration")


def load_settings(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Dict[str, str]] = None
) -> Config:
    """
    Build the catalog settings: defaults, then file, then environment, then
    explicit overrides, validated against ``SettingsSchema``.
    """
    manager = ConfigManager()
    manager.register_schema('settings', SettingsSchema())
    manager.load_from_dict(default_settings())

    if config_file:
        manager.load_from_file(config_file, validate=False)

    manager.load_from_env(environ=environ)

    if overrides:
        manager.load_from_dict(overrides)

    level = manager.get('logging.log_level')
    if isinstance(level, str):
        manager.set('logging.log_level', level.upper())

    try:
        manager.validate('settings')
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid catalog settings",
            details={'errors': e.details.get('errors', [e.message])}
        ) from e

    return manager.get_config()
