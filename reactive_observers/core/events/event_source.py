from __future__ import annotations
import asyncio
from typing import List, Optional, TYPE_CHECKING

from reactive_observers.core.types.observer_types import Event, Observer, Subscription

if TYPE_CHECKING:
    from reactive_observers.core.events.registry import DefaultObservableRegistry


class EventSource:
    """
    An observable view of a single source object.

    Every operation delegates to the registry with the bound source filled in.
    Without arguments the handle is its own source and owns a private registry.
    """

    def __init__(
        self,
        source: Optional[object] = None,
        registry: Optional["DefaultObservableRegistry"] = None,
    ):
        if registry is None:
            from reactive_observers.core.events.registry import (
                DefaultObservableRegistry,
            )

            registry = DefaultObservableRegistry()
        self._source = source if source is not None else self
        self._registry = registry

    @property
    def source(self) -> object:
        return self._source

    @property
    def registry(self) -> "DefaultObservableRegistry":
        return self._registry

    def get_observers(self, event_type: str) -> List[Observer]:
        return self._registry.get_observers(self._source, event_type)

    def has_observers(self, event_type: str) -> bool:
        return self._registry.has_observers(self._source, event_type)

    def subscribe(self, event_type: str, observer: Observer) -> Subscription:
        return self._registry.subscribe(self._source, event_type, observer)

    def unsubscribe(self, event_type: str, observer: Observer) -> bool:
        return self._registry.unsubscribe(self._source, event_type, observer)

    def publish(self, event_type: str, event: Event) -> "asyncio.Future[None]":
        return self._registry.publish(self._source, event_type, event)

    def notify(self, event_type: str, event: Event) -> "asyncio.Future[None]":
        return self._registry.notify(self._source, event_type, event)

    def __repr__(self) -> str:
        source = "self" if self._source is self else type(self._source).__name__
        return f"EventSource({source})"
