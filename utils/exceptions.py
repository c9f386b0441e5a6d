"""
Exception hierarchy for the pattern catalog.
"""
from typing import Any, Dict, Optional


class PatternCatalogError(Exception):
    """Base exception for all pattern catalog errors."""
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'details': self.details
        }


# Configuration Exceptions
class ConfigurationError(PatternCatalogError):
    """Raised when configuration or wiring is invalid."""
    pass


class UnknownTypeError(ConfigurationError):
    """Raised when a factory is asked for a name it does not know."""
    pass


# Data Exceptions
class ValidationError(PatternCatalogError):
    """Raised when a record or value fails validation."""
    pass


# Catalog Exceptions
class CatalogError(PatternCatalogError):
    """Base exception for catalog errors."""
    pass


class DocumentError(CatalogError):
    """Raised when a pattern document cannot be parsed."""
    pass


class DocumentNotFoundError(CatalogError):
    """Raised when a pattern document is not in the catalog."""
    pass


# Example Exceptions
class ExampleError(PatternCatalogError):
    """Raised when a runnable example fails."""
    pass
