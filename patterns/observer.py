"""
Observer pattern: subjects notify attached observers of events.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List
from utils.logging_config import get_logger
from .factory import register_example

logger = get_logger(__name__)

WILDCARD = '*'


class Observer(ABC):
    """Abstract observer base class."""

    @abstractmethod
    def update(self, subject: 'Subject', event: str, data: Any):
        """Called when subject state changes."""
        pass


class Subject:
    """Subject that notifies observers of changes."""

    def __init__(self):
        self._observers: Dict[str, List[Observer]] = {}
        self.logger = get_logger(self.__class__.__name__)

    def attach(self, observer: Observer, event: str = WILDCARD):
        """Attach an observer for specific event or all events."""
        observers = self._observers.setdefault(event, [])
        if observer not in observers:
            observers.append(observer)
            self.logger.debug(f"Attached observer {observer.__class__.__name__} for event '{event}'")

    def detach(self, observer: Observer, event: str = WILDCARD):
        """Detach an observer from specific event or all events."""
        if observer in self._observers.get(event, []):
            self._observers[event].remove(observer)
            self.logger.debug(f"Detached observer {observer.__class__.__name__} from event '{event}'")

    def observers(self, event: str = WILDCARD) -> List[Observer]:
        return list(self._observers.get(event, []))

    def notify(self, event: str, data: Any = None):
        """Notify event observers, then wildcard observers, in attach order."""
        self.logger.debug(f"Notifying observers of event '{event}'")

        targets = list(self._observers.get(event, []))
        if event != WILDCARD:
            targets += self._observers.get(WILDCARD, [])

        for observer in targets:
            try:
                observer.update(self, event, data)
            except Exception as e:
                self.logger.error(f"Error notifying observer: {e}", exc_info=True)


class CallbackObserver(Observer):
    """Observer that calls a callback function."""

    def __init__(self, callback: Callable):
        self.callback = callback

    def update(self, subject: Subject, event: str, data: Any):
        self.callback(subject, event, data)


class NewsAgency(Subject):
    """Publishes headlines under a topic."""

    def publish(self, topic: str, headline: str):
        self.notify(topic, headline)


class Subscriber(Observer):
    """Reader who keeps every headline delivered to them."""

    def __init__(self, name: str, inbox: List[str] = None):
        self.name = name
        self.received: List[str] = inbox if inbox is not None else []

    def update(self, subject: Subject, event: str, data: Any):
        self.received.append(f"{self.name} received [{event}]: {data}")


@register_example('observer')
def observer_example() -> List[str]:
    lines: List[str] = []
    agency = NewsAgency()

    # One inbox for everyone keeps deliveries in order
    alice = Subscriber('alice', inbox=lines)
    bob = Subscriber('bob', inbox=lines)
    agency.attach(alice, 'sports')
    agency.attach(bob)
    agency.attach(CallbackObserver(lambda subject, event, data: lines.append(f"ticker: {data}")), 'weather')

    agency.publish('sports', 'Local team wins the cup')
    agency.publish('weather', 'Storm expected tonight')

    agency.detach(alice, 'sports')
    agency.publish('sports', 'Transfer window opens')

    return lines
