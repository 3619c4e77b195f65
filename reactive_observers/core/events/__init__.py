"""
Event System

Observer registry and bound event sources.
"""

from .event_source import EventSource
from .registry import DefaultObservableRegistry, ObserverSubscription

__all__ = [
    "DefaultObservableRegistry",
    "EventSource",
    "ObserverSubscription",
]
