"""
Pytest configuration for pay station tests.
"""

import asyncio

import pytest

from paystation.domain.pay_station import PayStation
from paystation.event_system import EventPublisher


@pytest.fixture
def station():
    """Create a fresh pay station for each test."""
    return PayStation()


@pytest.fixture
def event_queue():
    return asyncio.Queue()


@pytest.fixture
def publisher(event_queue):
    return EventPublisher(event_queue)


@pytest.fixture
def drain(event_queue):
    """Pop every queued event without waiting."""

    def _drain() -> list[dict]:
        events = []
        while not event_queue.empty():
            events.append(event_queue.get_nowait())
        return events

    return _drain
