"""
Input validation utilities for example records and settings.
"""
from numbers import Real
from typing import Any, Iterable, Optional, Union
from utils.logging_config import get_logger
from utils.exceptions import ValidationError

logger = get_logger(__name__)


class Validator:
    """Base validator class."""

    def __init__(self, name: str = "value"):
        self.name = name

    def validate(self, value: Any) -> Any:
        """Validate and return the value."""
        return value

    def __call__(self, value: Any) -> Any:
        return self.validate(value)


class NumberValidator(Validator):
    """Validates value is a real number (booleans are rejected)."""

    def validate(self, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValidationError(
                f"{self.name} must be a number, got {type(value).__name__}",
                details={'field': self.name, 'actual': repr(value)}
            )
        return value


class RangeValidator(Validator):
    """Validates a number lies within optional lower and upper bounds."""

    def __init__(
        self,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        inclusive: bool = True,
        name: str = "value"
    ):
        super().__init__(name)
        self.min_value = min_value
        self.max_value = max_value
        self.inclusive = inclusive

    def _violation(self, value: Union[int, float]) -> Optional[str]:
        low, high = self.min_value, self.max_value
        if self.inclusive:
            if low is not None and value < low:
                return f">= {low}"
            if high is not None and value > high:
                return f"<= {high}"
        else:
            if low is not None and value <= low:
                return f"> {low}"
            if high is not None and value >= high:
                return f"< {high}"
        return None

    def validate(self, value: Union[int, float]) -> Union[int, float]:
        NumberValidator(name=self.name).validate(value)
        bound = self._violation(value)
        if bound is not None:
            raise ValidationError(
                f"{self.name} must be {bound}, got {value}",
                details={'field': self.name, 'actual': value}
            )
        return value


class ChoiceValidator(Validator):
    """Validates value is one of a fixed set, e.g. a log level name."""

    def __init__(self, choices: Iterable[Any], name: str = "value"):
        super().__init__(name)
        self.choices = list(choices)

    def validate(self, value: Any) -> Any:
        if value not in self.choices:
            raise ValidationError(
                f"{self.name} must be one of {', '.join(map(str, self.choices))}, got {value}",
                details={'field': self.name, 'allowed': self.choices, 'actual': value}
            )
        return value


def validate_positive(value: Union[int, float], name: str = "value") -> Union[int, float]:
    """Validate value is strictly greater than zero."""
    return RangeValidator(min_value=0, inclusive=False, name=name).validate(value)


def validate_non_negative(value: Union[int, float], name: str = "value") -> Union[int, float]:
    return RangeValidator(min_value=0, inclusive=True, name=name).validate(value)
