"""
Configuration management for the pattern catalog.
"""
from .config_manager import (
    Config,
    ConfigManager,
    load_settings
)
from .defaults import DEFAULT_DOCS_DIR, ENV_PREFIX, default_settings

__all__ = [
    'Config',
    'ConfigManager',
    'load_settings',
    'DEFAULT_DOCS_DIR',
    'ENV_PREFIX',
    'default_settings',
]
