"""
Default settings for the pattern catalog.
"""
from pathlib import Path
from typing import Any, Dict

REPOSITORY_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_DOCS_DIR = REPOSITORY_ROOT / "docs" / "patterns"

ENV_PREFIX = "PATTERN_CATALOG_"


def default_settings() -> Dict[str, Any]:
    """Fresh copy of the built-in settings tree."""
    return {
        'catalog': {
            'docs_dir': str(DEFAULT_DOCS_DIR),
            'strict': False,
        },
        'logging': {
            'log_level': 'WARNING',
            'log_dir': 'logs',
            'enable_file': False,
            'enable_structured': False,
        },
    }
