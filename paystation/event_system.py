"""
Station events.

The service queues an event for every state change; an ``EventForwarder``
drains the queue in the background and hands each event to a sink, which
in production publishes it on the Redis events channel.
"""

import asyncio
import json
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from redis.asyncio import Redis

from paystation.loggers import logger


class EventType(str, Enum):
    """Kinds of station state change."""

    COIN_ACCEPTED = "coin_accepted"
    COIN_REJECTED = "coin_rejected"
    RECEIPT_ISSUED = "receipt_issued"
    TRANSACTION_CANCELLED = "transaction_cancelled"
    STATION_EMPTIED = "station_emptied"


# Receives one {"event": ..., "data": ...} message
EventSink = Callable[[dict[str, Any]], Awaitable[None]]


class EventPublisher:
    """Queues station events as ``{"event": name, "data": {...}}`` messages."""

    def __init__(self, event_queue: asyncio.Queue) -> None:
        self.event_queue = event_queue

    async def publish(self, event_type: EventType, **data: Any) -> None:
        await self.event_queue.put({"event": EventType(event_type).value, "data": data})


class EventForwarder:
    """
    Background task delivering queued events to a sink.

    A failing sink loses only the event it failed on.
    """

    def __init__(self, event_queue: asyncio.Queue, sink: EventSink) -> None:
        self._event_queue = event_queue
        self._sink = sink
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _forward(self) -> None:
        while True:
            message = await self._event_queue.get()
            try:
                await self._sink(message)
            except Exception as e:
                logger.error(f"Failed to forward event {message.get('event')}: {e}")
            finally:
                self._event_queue.task_done()

    def start(self) -> None:
        if not self.is_running:
            self._task = asyncio.create_task(self._forward())

    async def stop(self) -> None:
        """Cancel the forwarding task; undelivered events stay queued."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None


async def send_to_redis(redis: Redis, channel: str, message: dict[str, Any]) -> None:
    """
    Publish an event message as JSON on a Redis channel.

    Example:
        await send_to_redis(
            redis,
            "pay_station_events",
            {"event": "receipt_issued", "data": {"value": 16}},
        )
    """
    await redis.publish(channel, json.dumps(message))
    logger.debug(f"Event sent to {channel}: {message['event']}")
