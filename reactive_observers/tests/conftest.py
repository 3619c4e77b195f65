"""
Global pytest configuration and fixtures.

This file configures pytest behavior for all tests in the project.
"""

import asyncio
from typing import Any, List

import pytest

from reactive_observers.config.settings import reset_settings

ENV_VARS = (
    "REACTIVE_OBSERVERS_DEBUG",
    "REACTIVE_OBSERVERS_LOG_LEVEL",
    "REACTIVE_OBSERVERS_LOG_DELIVERIES",
)


class Source:
    """A plain weakly referenceable source object."""


class RecordingObserver:
    """Observer that records deliveries into a shared list after a delay."""

    def __init__(self, events: List[str], name: str = "", wait: float = 0):
        self.name = name
        self.events = events
        self.wait = wait

    async def observe(self, event_type: str, event: Any) -> None:
        await asyncio.sleep(self.wait)
        prefix = f"{self.name}: " if self.name else ""
        self.events.append(f"{prefix}{event_type}-{event}")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from global settings and environment overrides."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def source():
    return Source()


@pytest.fixture
def events() -> List[str]:
    return []


@pytest.fixture
def given_observer(events):
    """Factory for recording observers sharing the ``events`` list."""

    def factory(name: str = "", wait: float = 0) -> RecordingObserver:
        return RecordingObserver(events, name=name, wait=wait)

    return factory
