"""
Unit tests for the pay station service, command routing and events.
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from paystation.application.command_handler import (
    CommandHandler,
    CommandResponse,
    pay_station_commands,
)
from paystation.application.pay_station_service import PayStationService
from paystation.domain.pay_station import PayStation
from paystation.event_system import EventForwarder, EventType, send_to_redis


@pytest.fixture
def service(publisher, station):
    return PayStationService(publisher, station)


@pytest.fixture
def handler(service):
    return CommandHandler(service)


# =============================================================================
# Service Tests
# =============================================================================


class TestPayStationService:
    """Tests for PayStationService."""

    @pytest.mark.asyncio
    async def test_add_payment(self, service, drain):
        result = await service.add_payment(25)

        assert result["success"] is True
        assert result["data"] == {"display": 10}
        events = drain()
        assert events == [{"event": "coin_accepted", "data": {"coin_value": 25, "display": 10}}]

    @pytest.mark.asyncio
    async def test_add_invalid_coin(self, service, station, drain):
        result = await service.add_payment(17)

        assert result["success"] is False
        assert result["message"] == "Invalid coin: 17"
        assert result["data"]["error"] == "InvalidCoinError"
        assert station.read_display() == 0
        assert drain() == [{"event": "coin_rejected", "data": {"coin_value": 17}}]

    @pytest.mark.asyncio
    async def test_read_display(self, service):
        await service.add_payment(10)
        await service.add_payment(25)

        result = await service.read_display()
        assert result["data"] == {"display": 14}

    @pytest.mark.asyncio
    async def test_buy(self, service, drain):
        for coin in (5, 10, 25):
            await service.add_payment(coin)
        drain()

        result = await service.buy()

        assert result["success"] is True
        assert result["data"] == {"value": 16}
        assert drain() == [{"event": "receipt_issued", "data": {"value": 16}}]

    @pytest.mark.asyncio
    async def test_cancel(self, service, drain):
        await service.add_payment(25)
        drain()

        result = await service.cancel()

        assert result["data"] == {"coins": {"25": 1}, "total": 25}
        assert drain() == [{"event": "transaction_cancelled", "data": {"coins": {25: 1}}}]

    @pytest.mark.asyncio
    async def test_empty(self, service, drain):
        await service.add_payment(25)
        await service.buy()
        await service.add_payment(5)
        await service.cancel()
        drain()

        result = await service.empty()

        assert result["data"] == {"amount": 25}
        assert drain() == [{"event": "station_emptied", "data": {"amount": 25}}]

    @pytest.mark.asyncio
    async def test_status(self, service):
        await service.add_payment(5)

        result = await service.status()

        assert result["data"]["status"] == "accumulating"
        assert result["data"]["coins"] == {"5": 1, "10": 0, "25": 0}

    @pytest.mark.asyncio
    async def test_add_payment_reports_display_from_same_operation(self, publisher, drain):
        station = MagicMock(spec=PayStation)
        station.add_payment.return_value = 10
        service = PayStationService(publisher, station)

        result = await service.add_payment(25)

        assert result["data"] == {"display": 10}
        assert drain()[0]["data"]["display"] == 10
        station.read_display.assert_not_called()

    def test_default_station(self, publisher):
        service = PayStationService(publisher)
        assert service.station.read_display() == 0


# =============================================================================
# Command Handler Tests
# =============================================================================


class TestCommandHandler:
    """Tests for CommandHandler."""

    def test_available_commands(self, handler):
        names = [cmd["name"] for cmd in handler.get_available_commands()]
        assert names == ["add_payment", "read_display", "buy", "cancel", "empty", "status"]

    @pytest.mark.asyncio
    async def test_full_transaction(self, handler):
        await handler.execute({"command": "add_payment", "command_id": 1, "data": {"coin_value": 25}})
        response = await handler.execute({"command": "buy", "command_id": 2})

        assert response == {
            "command_id": 2,
            "success": True,
            "message": "Parking time: 10 min",
            "data": {"value": 10},
        }

    @pytest.mark.asyncio
    async def test_unknown_command(self, handler):
        response = await handler.execute({"command": "refund", "command_id": 3})
        assert response["success"] is False
        assert response["message"] == "Unknown command: refund"

    @pytest.mark.asyncio
    async def test_missing_argument(self, handler, station):
        response = await handler.execute({"command": "add_payment", "command_id": 4, "data": {}})
        assert response["success"] is False
        assert "coin_value" in response["message"]
        assert station.read_display() == 0

    @pytest.mark.asyncio
    async def test_command_name_not_a_string(self, handler):
        response = await handler.execute({"command": ["buy"], "command_id": 8})
        assert response["success"] is False
        assert response["command_id"] == 8
        assert response["message"] == "Unknown command: ['buy']"

    @pytest.mark.asyncio
    async def test_data_not_an_object(self, handler, station):
        response = await handler.execute({"command": "add_payment", "command_id": 9, "data": "oops"})
        assert response["success"] is False
        assert response["message"] == "Command data must be an object"
        assert station.read_display() == 0

    @pytest.mark.asyncio
    async def test_invalid_coin_response(self, handler):
        response = await handler.execute({"command": "add_payment", "data": {"coin_value": 3}})
        assert response["success"] is False
        assert response["message"] == "Invalid coin: 3"

    @pytest.mark.asyncio
    async def test_handler_exception_becomes_failure(self, service):
        handler = CommandHandler(service)
        handler.register("boom", AsyncMock(side_effect=RuntimeError("broken")), [])

        response = await handler.execute({"command": "boom", "command_id": 5})

        assert response["success"] is False
        assert response["message"] == "Error: broken"

    @pytest.mark.asyncio
    async def test_non_dict_result(self, service):
        handler = CommandHandler(service)
        handler.register("answer", AsyncMock(return_value=42), [])

        response = await handler.execute({"command": "answer"})

        assert response["success"] is True
        assert response["data"] == 42

    @pytest.mark.asyncio
    async def test_pay_station_commands(self, service):
        response = await pay_station_commands({"command": "read_display", "command_id": 6}, service)
        assert response["data"] == {"display": 0}

    def test_command_response_to_dict(self):
        response = CommandResponse(command_id=1, success=True, message="ok")
        assert response.to_dict() == {
            "command_id": 1,
            "success": True,
            "message": "ok",
            "data": None,
        }


# =============================================================================
# Event System Tests
# =============================================================================


class TestEventForwarder:
    """Tests for EventPublisher and EventForwarder."""

    @pytest.mark.asyncio
    async def test_publish_message_shape(self, event_queue, publisher):
        await publisher.publish(EventType.RECEIPT_ISSUED, value=10)
        assert event_queue.get_nowait() == {"event": "receipt_issued", "data": {"value": 10}}

    @pytest.mark.asyncio
    async def test_forward_service_events(self, event_queue, service):
        sink = AsyncMock()
        forwarder = EventForwarder(event_queue, sink)

        forwarder.start()
        assert forwarder.is_running
        await service.add_payment(5)
        await service.buy()
        await asyncio.wait_for(event_queue.join(), timeout=2)
        await forwarder.stop()

        assert [call.args[0] for call in sink.await_args_list] == [
            {"event": "coin_accepted", "data": {"coin_value": 5, "display": 2}},
            {"event": "receipt_issued", "data": {"value": 2}},
        ]
        assert not forwarder.is_running

    @pytest.mark.asyncio
    async def test_failing_sink_does_not_stop_forwarding(self, event_queue, publisher):
        sink = AsyncMock(side_effect=[ConnectionError("redis down"), None])
        forwarder = EventForwarder(event_queue, sink)

        forwarder.start()
        await publisher.publish(EventType.COIN_ACCEPTED, coin_value=5, display=2)
        await publisher.publish(EventType.STATION_EMPTIED, amount=0)
        await asyncio.wait_for(event_queue.join(), timeout=2)
        await forwarder.stop()

        assert sink.await_count == 2
        assert sink.await_args.args[0]["event"] == "station_emptied"

    @pytest.mark.asyncio
    async def test_stop_without_start(self, event_queue):
        forwarder = EventForwarder(event_queue, AsyncMock())
        await forwarder.stop()
        assert not forwarder.is_running

    @pytest.mark.asyncio
    async def test_send_to_redis(self):
        redis = MagicMock()
        redis.publish = AsyncMock()

        await send_to_redis(
            redis,
            "pay_station_events",
            {"event": "transaction_cancelled", "data": {"coins": {25: 1}}},
        )

        channel, payload = redis.publish.await_args.args
        assert channel == "pay_station_events"
        assert json.loads(payload) == {"event": "transaction_cancelled", "data": {"coins": {"25": 1}}}
