"""
Chain of Responsibility: pass a request along a linear chain of handlers.

Each handler either handles the request or hands it to its successor. When
the tail cannot handle it either, the chain's default action runs. Worked
examples: expense approval (three approver levels) and support tickets
routed by priority.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Iterable, List, Optional
from utils.logging_config import get_logger
from utils.exceptions import ConfigurationError, ValidationError
from validation.validators import validate_non_negative
from .factory import register_example

logger = get_logger(__name__)


@dataclass(frozen=True)
class HandlerResult:
    """Outcome of sending a request down a chain."""
    handled_by: Optional[str]
    request: Any
    message: str

    @property
    def handled(self) -> bool:
        """False when the default action ran."""
        return self.handled_by is not None


def _default_action(request: Any) -> HandlerResult:
    return HandlerResult(None, request, f"No handler accepted {request!r}")


class Handler(ABC):
    """Abstract handler holding an optional link to the next handler."""

    def __init__(self, name: str, successor: Optional['Handler'] = None):
        self.name = name
        self._successor = None
        self._default: Callable[[Any], HandlerResult] = _default_action
        self.logger = get_logger(self.__class__.__name__)
        if successor is not None:
            self.set_next(successor)

    @property
    def successor(self) -> Optional['Handler']:
        return self._successor

    def set_next(self, handler: 'Handler') -> 'Handler':
        """Link ``handler`` after this one and return it for fluent linking."""
        node = handler
        while node is not None:
            if node is self:
                raise ConfigurationError(
                    f"Linking {handler.name} after {self.name} would create a cycle",
                    details={'handler': self.name, 'successor': handler.name}
                )
            node = node.successor

        self._successor = handler
        self.logger.debug(f"Linked {handler.name} after {self.name}")
        return handler

    def set_default(self, action: Callable[[Any], HandlerResult]) -> 'Handler':
        """Install the action taken when this handler is the tail and passes."""
        self._default = action
        return self

    @abstractmethod
    def can_handle(self, request: Any) -> bool:
        """Whether this handler accepts the request."""
        pass

    @abstractmethod
    def process(self, request: Any) -> HandlerResult:
        """Handle an accepted request."""
        pass

    def fallback(self, request: Any) -> HandlerResult:
        """Default action at the end of the chain."""
        self.logger.debug(f"No handler accepted {request!r}; taking default action")
        return self._default(request)

    def handle(self, request: Any) -> HandlerResult:
        """Walk the chain from this handler and return the first result."""
        handler = self
        while True:
            if handler.can_handle(request):
                handler.logger.debug(f"{handler.name} accepted {request!r}")
                return handler.process(request)
            if handler.successor is None:
                return handler.fallback(request)
            handler = handler.successor

    def chain(self) -> List['Handler']:
        """Handlers from this one to the tail, in order."""
        handlers = []
        node = self
        while node is not None:
            handlers.append(node)
            node = node.successor
        return handlers

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name!r})"


class ThresholdHandler(Handler):
    """Handler accepting requests whose magnitude is at most its threshold."""

    def __init__(self, name: str, threshold: float, successor: Optional[Handler] = None):
        self.threshold = threshold
        super().__init__(name, successor)

    def can_handle(self, request: Any) -> bool:
        return request.magnitude <= self.threshold

    def process(self, request: Any) -> HandlerResult:
        return HandlerResult(self.name, request, f"{self.name} handled {request!r}")

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name!r}, threshold={self.threshold!r})"


def build_chain(
    handlers: Iterable[Handler],
    default: Optional[Callable[[Any], HandlerResult]] = None
) -> Handler:
    """Link handlers front-to-back and return the head."""
    handlers = list(handlers)
    if not handlers:
        raise ConfigurationError("A chain needs at least one handler")

    for current, following in zip(handlers, handlers[1:]):
        current.set_next(following)

    if default is not None:
        handlers[-1].set_default(default)

    return handlers[0]


def handler_chain(*funcs: Callable[[Any], Any], default: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """
    Function-based chain. Each function returns a result, or ``None`` to pass
    the request on; when every function passes, ``default(request)`` is
    returned.
    """
    def handle(request):
        for func in funcs:
            result = func(request)
            if result is not None:
                return result
        return default(request)

    return handle


# Expense approval

@dataclass(frozen=True)
class Expense:
    """An amount of money that needs approval."""
    amount: float
    description: str = ''

    def __post_init__(self):
        validate_non_negative(self.amount, name='amount')

    @property
    def magnitude(self) -> float:
        return self.amount


class Approver(ThresholdHandler):
    """An approver who signs off expenses up to a limit."""

    def process(self, request: Expense) -> HandlerResult:
        return HandlerResult(
            self.name, request, f"{self.name} approved expense of {format_amount(request.amount)}"
        )


def format_amount(amount: float) -> str:
    return f"${amount:,.2f}"


def board_approval(expense: Expense) -> HandlerResult:
    return HandlerResult(
        None, expense, f"Expense of {format_amount(expense.amount)} requires board approval"
    )


APPROVAL_LIMITS = (
    ('Manager', 1000),
    ('Director', 5000),
    ('Vice President', 20000),
)


def expense_approval_chain() -> Handler:
    """Manager, then Director, then Vice President; beyond that, the board."""
    return build_chain(
        [Approver(name, limit) for name, limit in APPROVAL_LIMITS],
        default=board_approval
    )


# Support tickets

class Priority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


@dataclass(frozen=True)
class SupportTicket:
    """A support request with an id and a priority."""
    ticket_id: int
    priority: Priority
    subject: str = ''

    def __post_init__(self):
        if isinstance(self.ticket_id, bool) or not isinstance(self.ticket_id, int) or self.ticket_id < 1:
            raise ValidationError(
                f"ticket_id must be a positive integer, got {self.ticket_id!r}",
                details={'ticket_id': self.ticket_id}
            )
        try:
            object.__setattr__(self, 'priority', Priority(self.priority))
        except ValueError as e:
            raise ValidationError(
                f"Unknown priority: {self.priority!r}",
                details={'allowed': [p.name for p in Priority]}
            ) from e

    @property
    def magnitude(self) -> int:
        return int(self.priority)


class SupportLevel(ThresholdHandler):
    """A support team that takes tickets up to a priority."""

    def process(self, request: SupportTicket) -> HandlerResult:
        return HandlerResult(
            self.name,
            request,
            f"{self.name} resolved ticket #{request.ticket_id} ({request.priority.name})"
        )


def incident_escalation(ticket: SupportTicket) -> HandlerResult:
    return HandlerResult(
        None,
        ticket,
        f"Ticket #{ticket.ticket_id} ({ticket.priority.name}) escalated to incident management"
    )


def support_chain() -> Handler:
    return build_chain(
        [
            SupportLevel('Front Desk', Priority.LOW),
            SupportLevel('Technical Support', Priority.MEDIUM),
            SupportLevel('Engineering', Priority.HIGH),
        ],
        default=incident_escalation
    )


@register_example('chain_of_responsibility')
def chain_example() -> List[str]:
    lines = []

    approvers = expense_approval_chain()
    for amount in (500, 4500, 12000, 25000):
        lines.append(approvers.handle(Expense(amount)).message)

    lines.append('')

    support = support_chain()
    tickets = [
        SupportTicket(101, Priority.LOW, 'Password reset'),
        SupportTicket(102, Priority.MEDIUM, 'VPN drops'),
        SupportTicket(103, Priority.HIGH, 'Database timeout'),
        SupportTicket(104, Priority.CRITICAL, 'Site down'),
    ]
    for ticket in tickets:
        lines.append(support.handle(ticket).message)

    return lines
