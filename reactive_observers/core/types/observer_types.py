from __future__ import annotations
import asyncio
import inspect
from typing import (
    Any,
    Awaitable,
    Callable,
    List,
    Optional,
    Protocol,
    runtime_checkable,
    TYPE_CHECKING,
)
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from reactive_observers.core.events.event_source import EventSource

# Event payloads are opaque to the registry
Event = Any


# Protocol definitions for observers and subscriptions
@runtime_checkable
class Observer(Protocol):
    """
    Protocol for asynchronous observers of an event type.

    Observers may also carry an optional ``name`` attribute, which is used in
    log messages. It is not part of the runtime check.
    """

    def observe(self, event_type: str, event: Event) -> Awaitable[None]: ...


@runtime_checkable
class Subscription(Protocol):
    """A cancellable registration of one observer"""

    def cancel(self) -> bool: ...


class Observable(Protocol):
    """An object whose observers can be managed without naming a source"""

    def get_observers(self, event_type: str) -> List[Observer]: ...

    def subscribe(self, event_type: str, observer: Observer) -> Subscription: ...

    def unsubscribe(self, event_type: str, observer: Observer) -> bool: ...

    def publish(self, event_type: str, event: Event) -> "asyncio.Future[None]": ...

    def notify(self, event_type: str, event: Event) -> "asyncio.Future[None]": ...


class ObservableRegistry(Protocol):
    """A registry of observers keyed by source object and event type"""

    def get_observers(self, source: object, event_type: str) -> List[Observer]: ...

    def subscribe(
        self, source: object, event_type: str, observer: Observer
    ) -> Subscription: ...

    def unsubscribe(self, source: object, event_type: str, observer: Observer) -> bool: ...

    def publish(
        self, source: object, event_type: str, event: Event
    ) -> "asyncio.Future[None]": ...

    def notify(
        self, source: object, event_type: str, event: Event
    ) -> "asyncio.Future[None]": ...

    def create_observable(self, source: object) -> "EventSource": ...


class FunctionObserver:
    """
    Adapts a plain callable into an Observer.

    The callable receives ``(event_type, event)``. Coroutine functions are
    awaited; for regular functions the result is awaited only if it is
    awaitable, so synchronous callbacks work as well.
    """

    def __init__(
        self,
        fn: Callable[[str, Event], Any],
        name: Optional[str] = None,
    ):
        if not callable(fn):
            raise TypeError(f"FunctionObserver requires a callable, got {fn!r}")
        self.fn = fn
        self.name = name if name is not None else getattr(fn, "__name__", None)

    async def observe(self, event_type: str, event: Event) -> None:
        result = self.fn(event_type, event)
        if inspect.isawaitable(result):
            await result

    def __repr__(self) -> str:
        return f"FunctionObserver({self.name!r})"


class RegistryStats(BaseModel):
    """Delivery counters for a registry."""

    publishes: int = Field(default=0, description="Number of publish calls.")
    notifications: int = Field(default=0, description="Number of notify calls.")
    deliveries: int = Field(
        default=0, description="Observer invocations started by publish or notify."
    )
    failures: int = Field(default=0, description="Observer invocations that raised.")
    last_event_time: Optional[float] = Field(
        default=None, description="Epoch seconds of the last publish or notify."
    )
    tracked_sources: int = Field(
        default=0, description="Live sources with at least one registry entry."
    )
