"""Shared test fixtures for buildeta."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

import pytest

from buildeta.models.progress import Progress


@pytest.fixture
def make_progress() -> Callable[..., Progress]:
    """Factory fixture: build a Progress with zero defaults."""

    def _factory(**overrides: Any) -> Progress:
        return Progress(**overrides)

    return _factory


@pytest.fixture
def linear_build() -> list[Progress]:
    """Ten rules of ten seconds each, one finishing per tick.

    Tick 1 has nothing built; tick 11 has everything built.
    """
    return [
        Progress(
            count_built=i,
            count_todo=10 - i,
            time_built=10.0 * i,
            time_todo=(100.0 - 10.0 * i, 0),
        )
        for i in range(11)
    ]


@pytest.fixture
def stop_event() -> threading.Event:
    """Provide a fresh stop token."""
    return threading.Event()


class RecordingSink:
    """A display sink that keeps every line it is shown."""

    def __init__(self, name: str = "recording") -> None:
        self._name = name
        self.received: list[str] = []

    @property
    def sink_name(self) -> str:
        return self._name

    def __call__(self, message: str) -> None:
        self.received.append(message)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


def feed(snapshots: list[Progress], stop: threading.Event) -> Callable[[], Progress]:
    """An accessor that returns ``snapshots`` in order and sets ``stop`` after the last."""
    pending = list(snapshots)

    def _next() -> Progress:
        snapshot = pending.pop(0)
        if not pending:
            stop.set()
        return snapshot

    return _next


@pytest.fixture
def make_feed() -> Callable[[list[Progress], threading.Event], Callable[[], Progress]]:
    return feed
