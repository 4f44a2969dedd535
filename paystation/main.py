"""
Pay Station - Main entry point.

Runs the pay station behind a Redis pub/sub command channel: commands
arrive as JSON on the command channel and responses are published on
the matching response channel. Station events are published as JSON on
the events channel.
"""

import asyncio
import functools
import json
from typing import Any

from redis.asyncio import Redis

from paystation.application.command_handler import CommandHandler
from paystation.application.pay_station_service import PayStationService
from paystation.core.exceptions import CommandError
from paystation.event_system import EventForwarder, EventPublisher, send_to_redis
from paystation.infrastructure.settings import get_settings
from paystation.loggers import logger


# =============================================================================
# Command Parsing
# =============================================================================


def parse_command(raw_data: Any) -> dict[str, Any]:
    """
    Decode a raw pub/sub payload into command data.

    Raises:
        CommandError: If the payload is not a JSON object.
    """
    try:
        command = json.loads(raw_data)
    except (TypeError, json.JSONDecodeError) as e:
        raise CommandError(f"Command parsing error: {e}") from e

    if not isinstance(command, dict):
        raise CommandError("Command must be a JSON object", details={"payload": raw_data})
    return command


# =============================================================================
# Redis Command Listener
# =============================================================================


async def listen_to_redis(redis: Redis, handler: CommandHandler) -> None:
    """
    Listen for commands on Redis pub/sub and process them.

    Args:
        redis: Redis client instance.
        handler: Command handler bound to the pay station service.
    """
    settings = get_settings()
    command_channel = settings.pay_station.command_channel
    response_channel = settings.pay_station.response_channel

    pubsub = redis.pubsub()
    await pubsub.subscribe(command_channel)
    logger.info(f"Listening for commands on channel: {command_channel}")

    async for message in pubsub.listen():
        if message.get("type") != "message":
            continue

        raw_data = message.get("data")
        if raw_data == "ping":
            continue

        try:
            command = parse_command(raw_data)
        except CommandError as e:
            logger.error(e.message)
            continue

        logger.info(f"Received command: {command}")
        try:
            response = await handler.execute(command)
            await redis.publish(response_channel, json.dumps(response))
        except Exception as e:
            logger.error(f"Unexpected error processing command: {e}")
            continue
        logger.info(f"Response sent to {response_channel}: {response}")


# =============================================================================
# Main Entry Point
# =============================================================================


async def main() -> None:
    """
    Main entry point for the pay station service.

    Connects to Redis, starts forwarding station events and serves commands.
    """
    settings = get_settings()

    redis = Redis(
        host=settings.redis.host,
        port=settings.redis.port,
        decode_responses=settings.redis.decode_responses,
    )
    logger.info(
        f"Redis: {settings.redis.host}:{settings.redis.port}, "
        f"Loki enabled: {settings.services.loki_enabled}"
    )

    event_queue: asyncio.Queue = asyncio.Queue()
    forwarder = EventForwarder(
        event_queue,
        functools.partial(send_to_redis, redis, settings.pay_station.events_channel),
    )

    service = PayStationService(EventPublisher(event_queue))
    handler = CommandHandler(service)

    forwarder.start()
    try:
        await listen_to_redis(redis, handler)
    finally:
        await forwarder.stop()
        await redis.aclose()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Application stopped by user")


if __name__ == "__main__":
    run()
