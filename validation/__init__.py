"""
Validation utilities for the pattern catalog.
"""
from .validators import (
    Validator,
    NumberValidator,
    RangeValidator,
    ChoiceValidator,
    validate_positive,
    validate_non_negative
)
from .schema import (
    Schema,
    SettingsSchema
)

__all__ = [
    'Validator',
    'NumberValidator',
    'RangeValidator',
    'ChoiceValidator',
    'validate_positive',
    'validate_non_negative',
    'Schema',
    'SettingsSchema',
]
