"""
Reactive Observers

Unified import layer for the reactive_observers package.
"""

from reactive_observers.config.settings import (
    get_settings,
    initialize_settings,
    reset_settings,
)
from reactive_observers.core.events import (
    DefaultObservableRegistry,
    EventSource,
    ObserverSubscription,
)
from reactive_observers.core.types import (
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
    "get_settings",
    "initialize_settings",
    "reset_settings",
]
