"""
Shared observer types and errors.
"""

from .observer_types import (
    Event,
    Observer,
    Subscription,
    Observable,
    ObservableRegistry,
    FunctionObserver,
    RegistryStats,
)
from .errors import (
    ObserverRegistryError,
    UnsupportedSourceError,
    InvalidObserverError,
)

__all__ = [
    "Event",
    "Observer",
    "Subscription",
    "Observable",
    "ObservableRegistry",
    "FunctionObserver",
    "RegistryStats",
    "ObserverRegistryError",
    "UnsupportedSourceError",
    "InvalidObserverError",
]
