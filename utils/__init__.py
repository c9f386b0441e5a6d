"""
Utility modules for the pattern catalog.
"""
from .logging_config import get_logger, LoggerFactory, LogContext
from .exceptions import *
from .error_handlers import (
    handle_errors
)

__all__ = [
    'get_logger',
    'LoggerFactory',
    'LogContext',
    'handle_errors',
    'PatternCatalogError',
    'ConfigurationError',
    'UnknownTypeError',
    'ValidationError',
    'CatalogError',
    'DocumentError',
    'DocumentNotFoundError',
    'ExampleError',
]
