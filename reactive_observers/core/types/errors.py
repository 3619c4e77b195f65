"""Exceptions raised by the observer registry itself.

Observer failures are never wrapped; they reach the caller of ``publish`` or
``notify`` unchanged. The classes below only cover misuse at subscribe time.
"""


class ObserverRegistryError(Exception):
    """Base class for registry errors."""


class UnsupportedSourceError(ObserverRegistryError, TypeError):
    """Raised when a source object cannot be weakly referenced."""

    def __init__(self, source: object):
        self.source = source
        super().__init__(
            f"Cannot subscribe to {type(source).__name__!r} instances: "
            "sources must support weak references"
        )


class InvalidObserverError(ObserverRegistryError, TypeError):
    """Raised when an observer has no callable ``observe`` method."""

    def __init__(self, observer: object):
        self.observer = observer
        super().__init__(f"{observer!r} does not define a callable observe()")
