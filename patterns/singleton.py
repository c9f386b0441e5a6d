"""
Singleton pattern for single-instance classes, plus the shared-state
(Borg) variant where instances differ but their state does not.
"""
from typing import Any, Dict, List
import threading
from utils.logging_config import get_logger
from .factory import register_example

logger = get_logger(__name__)


class SingletonMeta(type):
    """
    Thread-safe Singleton metaclass.
    """
    _instances: Dict[type, Any] = {}
    _lock: threading.Lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        """Create or return existing instance."""
        if cls not in cls._instances:
            with cls._lock:
                # Double-checked locking
                if cls not in cls._instances:
                    instance = super().__call__(*args, **kwargs)
                    cls._instances[cls] = instance
                    logger.debug(f"Created singleton instance of {cls.__name__}")

        return cls._instances[cls]

    def reset(cls):
        """Forget the instance of this class; the next call creates a new one."""
        with cls._lock:
            cls._instances.pop(cls, None)


class Singleton(metaclass=SingletonMeta):
    """Base class for singleton objects."""
    pass


class PrintSpooler(Singleton):
    """The one print queue every part of the program shares."""

    def __init__(self):
        self._jobs: List[str] = []
        self.logger = get_logger(self.__class__.__name__)

    def submit(self, document: str) -> int:
        """Queue a document and return the number of pending jobs."""
        self._jobs.append(document)
        self.logger.debug(f"Queued {document}")
        return len(self._jobs)

    def pending(self) -> List[str]:
        return list(self._jobs)

    def clear(self):
        self._jobs.clear()


class SharedState:
    """Borg: every instance shares one attribute dictionary."""

    _shared_state: Dict[str, Any] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._shared_state = {}

    def __init__(self):
        self.__dict__ = self._shared_state


class Preferences(SharedState):
    """User preferences visible through any instance."""

    def __init__(self, **values):
        super().__init__()
        self.__dict__.update(values)


@register_example('singleton')
def singleton_example() -> List[str]:
    PrintSpooler.reset()

    spooler_a = PrintSpooler()
    spooler_b = PrintSpooler()
    lines = [f"spooler_a is spooler_b: {spooler_a is spooler_b}"]

    count = spooler_a.submit('report.pdf')
    lines.append(f"Queued 'report.pdf' ({count} job pending)")
    count = spooler_b.submit('invoice.pdf')
    lines.append(f"Queued 'invoice.pdf' ({count} jobs pending)")
    lines.append(f"Pending jobs seen from spooler_a: {', '.join(spooler_a.pending())}")

    Preferences._shared_state.clear()
    first = Preferences(theme='dark')
    second = Preferences()
    lines.append(f"first is second: {first is second}")
    lines.append(f"second.theme: {second.theme}")

    PrintSpooler.reset()
    return lines
