"""
Observable Registry

Keeps observers per (source, event type) and delivers events to them.

Features:
- Sources are held weakly and compared by identity; a source's entry
  disappears as soon as the source is reclaimed
- Observer lists are attached to the source, so observers may reference
  their own source without keeping it alive
- Concurrent delivery with ``publish`` and sequential delivery with ``notify``
- Observer snapshots taken at call time
- Delivery statistics for debugging
"""

from __future__ import annotations
import asyncio
import threading
import time
import weakref
from typing import Dict, List, Optional, Set, Tuple

from reactive_observers.config.settings import get_settings
from reactive_observers.core.events.event_source import EventSource
from reactive_observers.core.types.errors import (
    InvalidObserverError,
    UnsupportedSourceError,
)
from reactive_observers.core.types.observer_types import (
    Event,
    Observer,
    RegistryStats,
)
from reactive_observers.utils.logging import Logger

ObserverMap = Dict[str, List[Observer]]

# Instance attribute holding the observer maps attached to a source
SOURCE_ATTRIBUTE = "__observer_maps__"


def _observer_name(observer: Observer) -> str:
    return getattr(observer, "name", None) or repr(observer)


class ObserverSubscription:
    """
    Subscription returned by ``DefaultObservableRegistry.subscribe``.

    The source is referenced weakly so an outstanding subscription does not
    keep it alive. Cancelling is idempotent.
    """

    def __init__(
        self,
        registry: "DefaultObservableRegistry",
        source: object,
        event_type: str,
        observer: Observer,
    ):
        self.registry = registry
        self.event_type = event_type
        self.observer = observer
        self._source_ref = weakref.ref(source)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def cancel(self) -> bool:
        """Unsubscribe the observer. Returns False if it was already gone."""
        if self._closed:
            return False
        self._closed = True
        source = self._source_ref()
        if source is None:
            return False
        return self.registry.unsubscribe(source, self.event_type, self.observer)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return (
            f"ObserverSubscription[{self.event_type}]"
            f"({_observer_name(self.observer)}, {state})"
        )


class SourceObserverMaps(weakref.WeakKeyDictionary):
    """
    Observer maps attached to a source, keyed weakly by registry.

    Stored in the source's ``__dict__`` so the observers are owned by the
    source rather than by the registry. An observer that refers back to its
    source then forms an ordinary collectable cycle. Copies and pickles of the
    source get an empty, unowned container.
    """

    def __init__(self, source: Optional[object] = None):
        super().__init__()
        self._owner_ref = weakref.ref(source) if source is not None else None

    def owned_by(self, source: object) -> bool:
        return self._owner_ref is not None and self._owner_ref() is source

    def __copy__(self) -> "SourceObserverMaps":
        return type(self)()

    def __deepcopy__(self, memo) -> "SourceObserverMaps":
        return type(self)()

    def __reduce__(self):
        return (type(self), ())


def _attached_maps(
    source: object, create: bool = False
) -> Optional[SourceObserverMaps]:
    attributes = getattr(source, "__dict__", None)
    if not isinstance(attributes, dict):
        return None
    maps = attributes.get(SOURCE_ATTRIBUTE)
    if isinstance(maps, SourceObserverMaps) and maps.owned_by(source):
        return maps
    if not create:
        return None
    maps = SourceObserverMaps(source)
    attributes[SOURCE_ATTRIBUTE] = maps
    return maps


class DefaultObservableRegistry:
    """
    Default registry for observable objects.

    Sources are tracked in an identity-keyed weak map:
    ``id(source) -> (weakref to source, local observer map or None)``.
    The weak reference callback drops the entry when the source is collected.

    The ``{event_type: [observer, ...]}`` map itself lives on the source under
    ``SOURCE_ATTRIBUTE``, so observers that close over their source do not
    keep it alive. Sources without an instance ``__dict__`` (``__slots__``
    classes with ``__weakref__``) keep their map in the registry instead; for
    those, an observer holding a strong reference to its source keeps the
    source alive until it is unsubscribed.
    """

    def __init__(self) -> None:
        self._sources: Dict[int, Tuple[weakref.ref, Optional[ObserverMap]]] = {}
        self._lock = threading.RLock()

        # Delivery tasks stay referenced until they finish
        self._pending: Set[asyncio.Future] = set()

        self._stats = RegistryStats()
        self.logger = Logger("reactive_observers.registry", "registry")

    # === Storage ===

    def _find_observer_map(self, source: object) -> Optional[ObserverMap]:
        entry = self._sources.get(id(source))
        if entry is None:
            return None
        source_ref, observer_map = entry
        if source_ref() is not source:
            return None
        if observer_map is not None:
            return observer_map
        maps = _attached_maps(source)
        return maps.get(self) if maps is not None else None

    def _ensure_observer_map(self, source: object) -> ObserverMap:
        observer_map = self._find_observer_map(source)
        if observer_map is not None:
            return observer_map

        key = id(source)
        registry_ref = weakref.ref(self)

        def discard(ref: weakref.ref) -> None:
            registry = registry_ref()
            if registry is not None:
                registry._discard(key, ref)

        try:
            source_ref = weakref.ref(source, discard)
        except TypeError as e:
            raise UnsupportedSourceError(source) from e

        observer_map: ObserverMap = {}
        maps = _attached_maps(source, create=True)
        if maps is not None:
            maps[self] = observer_map
            self._sources[key] = (source_ref, None)
        else:
            self._sources[key] = (source_ref, observer_map)
        return observer_map

    def _discard(self, key: int, source_ref: weakref.ref) -> None:
        """Weak reference callback: forget a reclaimed source"""
        with self._lock:
            entry = self._sources.get(key)
            if entry is not None and entry[0] is source_ref:
                del self._sources[key]

    # === Queries ===

    def get_observers(self, source: object, event_type: str) -> List[Observer]:
        """Get a copy of the observers for the given source and event type."""
        with self._lock:
            observer_map = self._find_observer_map(source)
            if observer_map is None:
                return []
            return list(observer_map.get(event_type, ()))

    def has_observers(self, source: object, event_type: str) -> bool:
        """Check if the given source and event type have any observers."""
        with self._lock:
            observer_map = self._find_observer_map(source)
            return bool(observer_map and observer_map.get(event_type))

    # === Registration ===

    def subscribe(
        self, source: object, event_type: str, observer: Observer
    ) -> ObserverSubscription:
        """Append an observer for the given source and event type."""
        if not callable(getattr(observer, "observe", None)):
            raise InvalidObserverError(observer)

        with self._lock:
            observer_map = self._ensure_observer_map(source)
            observer_map.setdefault(event_type, []).append(observer)

        self.logger.debug(
            f"Subscribed {_observer_name(observer)} to '{event_type}' "
            f"on {type(source).__name__}"
        )
        return ObserverSubscription(self, source, event_type, observer)

    def unsubscribe(self, source: object, event_type: str, observer: Observer) -> bool:
        """Remove the first matching observer. Returns whether one was removed."""
        with self._lock:
            observer_map = self._find_observer_map(source)
            if observer_map is None:
                return False
            observers = observer_map.get(event_type, [])
            for index, registered in enumerate(observers):
                if registered is observer:
                    del observers[index]
                    break
            else:
                return False

        self.logger.debug(
            f"Unsubscribed {_observer_name(observer)} from '{event_type}' "
            f"on {type(source).__name__}"
        )
        return True

    # === Delivery ===

    def publish(
        self, source: object, event_type: str, event: Event
    ) -> "asyncio.Future[None]":
        """
        Publish an event to all observers concurrently.

        Observers are captured when this is called and started together on
        the running loop. The returned future resolves when all of them have
        settled and fails with the first failure in subscription order.
        """
        loop = asyncio.get_running_loop()
        observers = self._snapshot(source, event_type, "publishes")
        self._log_delivery("Publishing", event_type, observers)
        return self._schedule(
            loop, self._deliver_concurrently(observers, event_type, event)
        )

    def notify(
        self, source: object, event_type: str, event: Event
    ) -> "asyncio.Future[None]":
        """
        Notify observers one by one in subscription order.

        Each observer is awaited before the next starts. The first failure
        stops delivery and fails the returned future.
        """
        loop = asyncio.get_running_loop()
        observers = self._snapshot(source, event_type, "notifications")
        self._log_delivery("Notifying", event_type, observers)
        return self._schedule(
            loop, self._deliver_sequentially(observers, event_type, event)
        )

    def _snapshot(self, source: object, event_type: str, counter: str) -> List[Observer]:
        with self._lock:
            setattr(self._stats, counter, getattr(self._stats, counter) + 1)
            self._stats.last_event_time = time.time()
            return self.get_observers(source, event_type)

    def _schedule(self, loop: asyncio.AbstractEventLoop, coro) -> "asyncio.Future[None]":
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver_concurrently(
        self, observers: List[Observer], event_type: str, event: Event
    ) -> None:
        if not observers:
            return
        results = await asyncio.gather(
            *(self._invoke(observer, event_type, event) for observer in observers),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

    async def _deliver_sequentially(
        self, observers: List[Observer], event_type: str, event: Event
    ) -> None:
        for observer in observers:
            await self._invoke(observer, event_type, event)

    async def _invoke(self, observer: Observer, event_type: str, event: Event) -> None:
        with self._lock:
            self._stats.deliveries += 1
        try:
            await observer.observe(event_type, event)
        except Exception as e:
            with self._lock:
                self._stats.failures += 1
            if self.logger.is_enabled_for("debug"):
                self.logger.debug(
                    f"Observer {_observer_name(observer)} failed on '{event_type}': {e}",
                    exc_info=e,
                )
            raise

    def _log_delivery(self, action: str, event_type: str, observers: List[Observer]) -> None:
        level = "info" if get_settings().events.log_deliveries else "debug"
        if self.logger.is_enabled_for(level):
            self.logger.log(
                f"{action} '{event_type}' to {len(observers)} observer(s)", level
            )

    # === Factories ===

    def create_observable(self, source: object) -> EventSource:
        """Create an event source bound to this registry and the given source."""
        return EventSource(source, self)

    # === Statistics ===

    def get_stats(self) -> RegistryStats:
        """Get a copy of the delivery statistics."""
        with self._lock:
            live = sum(
                1
                for source_ref, _ in list(self._sources.values())
                if source_ref() is not None
            )
            return self._stats.model_copy(update={"tracked_sources": live})

    def reset_stats(self) -> None:
        """Clear delivery statistics."""
        with self._lock:
            self._stats = RegistryStats()

    def __repr__(self) -> str:
        return f"DefaultObservableRegistry({len(self._sources)} sources)"
