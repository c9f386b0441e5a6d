"""
Runnable worked examples of classic design patterns.

Importing the package registers every example with ``ExampleFactory``.
"""
from .factory import (
    Factory,
    Bike,
    BikeFactory,
    StandardBike,
    SportBike,
    CruiserBike,
    ExampleFactory,
    register_bike,
    register_example,
    run_example
)
from .chain import (
    Handler,
    ThresholdHandler,
    HandlerResult,
    build_chain,
    handler_chain,
    Expense,
    Approver,
    expense_approval_chain,
    Priority,
    SupportTicket,
    SupportLevel,
    support_chain
)
from .singleton import (
    Singleton,
    SingletonMeta,
    PrintSpooler,
    SharedState,
    Preferences
)
from .observer import (
    Observer,
    Subject,
    CallbackObserver,
    NewsAgency,
    Subscriber
)
from .strategy import (
    Strategy,
    Context,
    Parcel,
    ShippingStrategy,
    FlatRateShipping,
    WeightBasedShipping,
    FreeShippingOver,
    ShippingCalculator
)
from .builder import (
    Builder,
    Computer,
    ComputerBuilder,
    ComputerAssembler
)


def available_examples() -> list:
    """Names of every runnable example."""
    return ExampleFactory.list_available()


__all__ = [
    'Factory',
    'Bike',
    'BikeFactory',
    'StandardBike',
    'SportBike',
    'CruiserBike',
    'ExampleFactory',
    'register_bike',
    'register_example',
    'run_example',
    'available_examples',
    'Handler',
    'ThresholdHandler',
    'HandlerResult',
    'build_chain',
    'handler_chain',
    'Expense',
    'Approver',
    'expense_approval_chain',
    'Priority',
    'SupportTicket',
    'SupportLevel',
    'support_chain',
    'Singleton',
    'SingletonMeta',
    'PrintSpooler',
    'SharedState',
    'Preferences',
    'Observer',
    'Subject',
    'CallbackObserver',
    'NewsAgency',
    'Subscriber',
    'Strategy',
    'Context',
    'Parcel',
    'ShippingStrategy',
    'FlatRateShipping',
    'WeightBasedShipping',
    'FreeShippingOver',
    'ShippingCalculator',
    'Builder',
    'Computer',
    'ComputerBuilder',
    'ComputerAssembler',
]
