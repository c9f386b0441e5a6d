"""
Strategy pattern for interchangeable algorithms.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional
from utils.logging_config import get_logger
from validation.validators import validate_non_negative, validate_positive
from .factory import register_example

logger = get_logger(__name__)


class Strategy(ABC):
    """Abstract strategy base class."""

    @abstractmethod
    def execute(self, *args, **kwargs) -> Any:
        """Execute the strategy."""
        pass


class Context:
    """Context that uses a strategy."""

    def __init__(self, strategy: Strategy):
        self._strategy = strategy
        self.logger = get_logger(self.__class__.__name__)

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @strategy.setter
    def strategy(self, strategy: Strategy):
        self.logger.debug(f"Switching strategy to {strategy.__class__.__name__}")
        self._strategy = strategy

    def execute(self, *args, **kwargs) -> Any:
        """Execute the current strategy."""
        return self._strategy.execute(*args, **kwargs)


@dataclass(frozen=True)
class Parcel:
    weight_kg: float
    order_total: float

    def __post_init__(self):
        validate_positive(self.weight_kg, name='weight_kg')
        validate_non_negative(self.order_total, name='order_total')


class ShippingStrategy(Strategy):
    """Prices the delivery of a parcel."""

    label = 'shipping'

    @abstractmethod
    def execute(self, parcel: Parcel) -> float:
        pass


class FlatRateShipping(ShippingStrategy):

    label = 'Flat rate'

    def __init__(self, rate: float = 5.0):
        self.rate = validate_non_negative(rate, name='rate')

    def execute(self, parcel: Parcel) -> float:
        return self.rate


class WeightBasedShipping(ShippingStrategy):

    label = 'Weight based'

    def __init__(self, per_kg: float = 1.5):
        self.per_kg = validate_non_negative(per_kg, name='per_kg')

    def execute(self, parcel: Parcel) -> float:
        return round(parcel.weight_kg * self.per_kg, 2)


class FreeShippingOver(ShippingStrategy):
    """Free above an order total, otherwise priced by another strategy."""

    def __init__(self, threshold: float = 50.0, otherwise: Optional[ShippingStrategy] = None):
        self.threshold = validate_non_negative(threshold, name='threshold')
        self.otherwise = otherwise or FlatRateShipping()

    @property
    def label(self) -> str:
        return f"Free over ${self.threshold:,.2f}"

    def execute(self, parcel: Parcel) -> float:
        if parcel.order_total >= self.threshold:
            return 0.0
        return self.otherwise.execute(parcel)


class ShippingCalculator(Context):
    """Quotes shipping with whichever strategy is plugged in."""

    def quote(self, parcel: Parcel) -> float:
        return self.execute(parcel)


@register_example('strategy')
def strategy_example() -> List[str]:
    parcel = Parcel(weight_kg=4.5, order_total=80.0)
    small_order = Parcel(weight_kg=1.0, order_total=30.0)

    calculator = ShippingCalculator(FlatRateShipping())
    lines = []
    for strategy in (FlatRateShipping(), WeightBasedShipping(), FreeShippingOver()):
        calculator.strategy = strategy
        lines.append(f"{strategy.label}: ${calculator.quote(parcel):,.2f}")

    lines.append(
        f"{calculator.strategy.label} (order ${small_order.order_total:,.2f}): "
        f"${calculator.quote(small_order):,.2f}"
    )
    return lines
