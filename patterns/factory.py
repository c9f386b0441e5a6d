"""
Factory pattern: create objects by registered name.

Worked example: three bikes, each with a fuel capacity and a mileage, built
by ``BikeFactory``. The same registry mechanism backs ``ExampleFactory``,
which maps example names to the functions that produce their transcripts.
"""
from abc import ABC
from typing import Any, Dict, List
from utils.logging_config import get_logger
from utils.exceptions import UnknownTypeError, ExampleError
from validation.validators import validate_positive

logger = get_logger(__name__)


class Factory(ABC):
    """Abstract factory base class. Each subclass gets its own registry."""

    _registry: Dict[str, Any] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._registry = {}

    @classmethod
    def register(cls, name: str, implementation: Any):
        """Register an implementation with a name."""
        if name in cls._registry and cls._registry[name] is not implementation:
            logger.warning(f"Replacing {name} in {cls.__name__}")
        cls._registry[name] = implementation
        logger.debug(f"Registered {name} in {cls.__name__}")

    @classmethod
    def create(cls, name: str, **kwargs) -> Any:
        """Create an instance by name."""
        if name not in cls._registry:
            raise UnknownTypeError(
                f"Unknown type: {name}",
                details={'available_types': cls.list_available()}
            )

        implementation = cls._registry[name]
        return implementation(**kwargs)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._registry

    @classmethod
    def list_available(cls) -> List[str]:
        """List all registered names, sorted."""
        return sorted(cls._registry)


class Bike:
    """A bike with a tank and a fuel economy."""

    kind = 'bike'
    default_fuel_capacity: float = 0.0
    default_mileage: float = 0.0

    def __init__(self, fuel_capacity: float = None, mileage: float = None):
        if fuel_capacity is None:
            fuel_capacity = self.default_fuel_capacity
        if mileage is None:
            mileage = self.default_mileage
        self._fuel_capacity = validate_positive(fuel_capacity, name='fuel_capacity')
        self._mileage = validate_positive(mileage, name='mileage')

    @property
    def fuel_capacity(self) -> float:
        """Tank size in litres."""
        return self._fuel_capacity

    @property
    def mileage(self) -> float:
        """Kilometres per litre."""
        return self._mileage

    @property
    def range_km(self) -> float:
        return self._fuel_capacity * self._mileage

    def describe(self) -> str:
        return (
            f"{self.kind}: fuel capacity {self.fuel_capacity:g} L, "
            f"mileage {self.mileage:g} km/L, range {self.range_km:g} km"
        )

    def __repr__(self):
        return f"{self.__class__.__name__}(fuel_capacity={self.fuel_capacity!r}, mileage={self.mileage!r})"


class BikeFactory(Factory):
    """Factory for creating bikes."""


def register_bike(name: str):
    """Decorator for registering bikes."""
    def decorator(cls):
        cls.kind = name
        BikeFactory.register(name, cls)
        return cls
    return decorator


@register_bike('standard')
class StandardBike(Bike):
    default_fuel_capacity = 12
    default_mileage = 45


@register_bike('sport')
class SportBike(Bike):
    default_fuel_capacity = 15
    default_mileage = 30


@register_bike('cruiser')
class CruiserBike(Bike):
    default_fuel_capacity = 20
    default_mileage = 25


class ExampleFactory(Factory):
    """Registry of runnable examples; each returns its transcript lines."""


def register_example(name: str):
    """Decorator for registering a runnable example."""
    def decorator(func):
        ExampleFactory.register(name, func)
        return func
    return decorator


def run_example(name: str) -> List[str]:
    """Run a registered example and return the lines it prints."""
    example = ExampleFactory._registry.get(name)
    if example is None:
        raise UnknownTypeError(
            f"Unknown example: {name}",
            details={'available_types': ExampleFactory.list_available()}
        )

    try:
        lines = example()
    except Exception as e:
        raise ExampleError(
            f"Example {name} failed: {e}",
            details={'example': name, 'error': str(e)}
        ) from e

    logger.debug(f"Example {name} produced {len(lines)} lines")
    return list(lines)


@register_example('factory')
def bike_factory_example() -> List[str]:
    lines = []
    for name in ('standard', 'sport', 'cruiser'):
        bike = BikeFactory.create(name)
        lines.append(bike.describe())

    custom = BikeFactory.create('sport', fuel_capacity=18)
    lines.append(f"custom {custom.describe()}")

    try:
        BikeFactory.create('scooter')
    except UnknownTypeError as e:
        available = ', '.join(e.details['available_types'])
        lines.append(f"Unknown bike type 'scooter'; available: {available}")

    return lines
