"""
Error handling helpers shared by the catalog and the command line.
"""
import functools
from typing import Any, Callable
from .logging_config import get_logger
from .exceptions import PatternCatalogError


logger = get_logger(__name__)


def handle_errors(
    default_return: Any = None,
    raise_on_error: bool = True,
    log_level: str = "ERROR"
):
    """
    Decorator that logs failures of the wrapped function.

    Catalog errors are logged with their structured details, anything else
    with a traceback.

    Args:
        default_return: Value to return on error when not re-raising
        raise_on_error: Whether to re-raise the exception
        log_level: Logging level for errors
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log_method = getattr(logger, log_level.lower())
            try:
                return func(*args, **kwargs)
            except PatternCatalogError as e:
                log_method(
                    f"Catalog error in {func.__name__}: {e.message}",
                    extra={'extra_fields': {'error_details': e.to_dict()}}
                )
                if raise_on_error:
                    raise
                return default_return
            except Exception as e:
                log_method(
                    f"Unexpected error in {func.__name__}: {e}",
                    exc_info=True
                )
                if raise_on_error:
                    raise
                return default_return

        return wrapper
    return decorator

