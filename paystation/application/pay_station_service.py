"""
Pay Station Service - Application service for pay station operations.

Wraps a single station, publishes station events and returns
standardized response dictionaries for remote callers.
"""

from typing import Any, Optional

from paystation.core.exceptions import InvalidCoinError
from paystation.core.value_objects import CoinReturn
from paystation.domain.pay_station import PayStation
from paystation.event_system import EventPublisher, EventType
from paystation.loggers import logger


class PayStationService:
    """
    Application service for pay station operations.

    Station calls never suspend, so each operation runs as one unit
    before any event is awaited.
    """

    def __init__(
        self,
        event_publisher: EventPublisher,
        station: Optional[PayStation] = None,
    ) -> None:
        """
        Initialize the pay station service.

        Args:
            event_publisher: Publisher for station events.
            station: Station to operate; a fresh one when omitted.
        """
        self._event_publisher = event_publisher
        self._station = station or PayStation()

    @property
    def station(self) -> PayStation:
        return self._station

    async def add_payment(self, coin_value: int) -> dict[str, Any]:
        """
        Insert a coin.

        Args:
            coin_value: Coin value in minor units.

        Returns:
            Dictionary with success status and current display.
        """
        try:
            display = self._station.add_payment(coin_value)
        except InvalidCoinError as e:
            await self._event_publisher.publish(EventType.COIN_REJECTED, coin_value=coin_value)
            return {"success": False, "message": e.message, "data": e.to_dict()}

        await self._event_publisher.publish(
            EventType.COIN_ACCEPTED,
            coin_value=coin_value,
            display=display,
        )
        return {
            "success": True,
            "message": f"Coin accepted: {coin_value}",
            "data": {"display": display},
        }

    async def read_display(self) -> dict[str, Any]:
        """Get the parking minutes bought so far."""
        display = self._station.read_display()
        return {
            "success": True,
            "message": f"Display: {display} min",
            "data": {"display": display},
        }

    async def buy(self) -> dict[str, Any]:
        """
        Finish the transaction and issue a receipt.

        Returns:
            Dictionary with the receipt data.
        """
        receipt = self._station.buy()
        await self._event_publisher.publish(EventType.RECEIPT_ISSUED, value=receipt.value)
        return {
            "success": True,
            "message": str(receipt),
            "data": receipt.to_dict(),
        }

    async def cancel(self) -> dict[str, Any]:
        """
        Cancel the transaction and return the inserted coins.

        Returns:
            Dictionary with returned coins keyed by denomination.
        """
        coins = self._station.cancel()
        returned = CoinReturn.from_counts(coins)
        await self._event_publisher.publish(EventType.TRANSACTION_CANCELLED, coins=coins)
        return {
            "success": True,
            "message": f"Transaction cancelled. Returned: {returned.total}",
            # JSON object keys are strings
            "data": {
                "coins": {str(denomination): count for denomination, count in returned.coins},
                "total": returned.total,
            },
        }

    async def empty(self) -> dict[str, Any]:
        """
        Empty the money store.

        Returns:
            Dictionary with the amount collected since the last empty.
        """
        amount = self._station.empty()
        await self._event_publisher.publish(EventType.STATION_EMPTIED, amount=amount)
        return {
            "success": True,
            "message": f"Station emptied: {amount}",
            "data": {"amount": amount},
        }

    async def status(self) -> dict[str, Any]:
        """Get a snapshot of the station state."""
        snapshot = self._station.status()
        snapshot["coins"] = {str(k): v for k, v in snapshot["coins"].items()}
        return {
            "success": True,
            "message": f"Station {snapshot['status']}",
            "data": snapshot,
        }
