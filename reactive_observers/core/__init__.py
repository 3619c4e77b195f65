"""
Core

Observer registry, event sources and shared types.
"""

from .events import (
    DefaultObservableRegistry,
    EventSource,
    ObserverSubscription,
)
from .types import (
    Event,
    Observer,
    Subscription,
    Observable,
    ObservableRegistry,
    FunctionObserver,
    RegistryStats,
    ObserverRegistryError,
    UnsupportedSourceError,
    InvalidObserverError,
)

__all__ = [
    "DefaultObservableRegistry",
    "EventSource",
    "ObserverSubscription",
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
