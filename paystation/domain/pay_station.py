"""
Pay Station - coin-operated parking pay station.

Accepts coins, converts the inserted amount into parking time, issues
receipts, returns coins on cancel and tracks the money collected by
completed purchases until the station is emptied.
"""

from __future__ import annotations

import threading
from typing import Any

from paystation.core.exceptions import InvalidCoinError
from paystation.core.value_objects import Coin, Receipt, TransactionStatus
from paystation.domain.transaction import TransactionContext
from paystation.loggers import logger


class PayStation:
    """
    Single pay station with one transaction in progress at a time.

    Every public operation holds the station lock for its whole duration,
    so concurrent callers only ever see complete operations.
    """

    def __init__(self) -> None:
        self._context = TransactionContext()
        self._collected = 0
        self._lock = threading.RLock()

    @property
    def collected(self) -> int:
        """Money moved into the store by purchases since the last empty."""
        return self._collected

    @property
    def transaction_status(self) -> TransactionStatus:
        with self._lock:
            return self._context.status

    def add_payment(self, coin_value: int) -> int:
        """
        Insert a coin.

        Args:
            coin_value: Coin value in minor units; one of 5, 10 or 25.

        Returns:
            Parking minutes shown after this coin.

        Raises:
            InvalidCoinError: If the value is not an accepted denomination.
                The station state is left unchanged.
        """
        if not Coin.is_accepted(coin_value):
            logger.warning(f"Rejected coin: {coin_value}")
            raise InvalidCoinError(coin_value, accepted=Coin.values())

        with self._lock:
            self._context.add_coin(Coin(coin_value))
            logger.info(
                f"Coin accepted: {coin_value}. "
                f"Inserted: {self._context.inserted_so_far}, "
                f"display: {self._context.time_bought} min"
            )
            return self._context.time_bought

    def read_display(self) -> int:
        """Get the parking minutes bought so far in this transaction."""
        with self._lock:
            return self._context.time_bought

    def buy(self) -> Receipt:
        """
        Finish the transaction.

        Moves the inserted amount into the collected store and starts a new
        transaction. Buying with nothing inserted yields a zero receipt.

        Returns:
            Receipt with the parking time bought.
        """
        with self._lock:
            receipt = Receipt(value=self._context.time_bought)
            self._collected += self._context.inserted_so_far
            logger.info(
                f"Receipt issued: {receipt.value} min for "
                f"{self._context.inserted_so_far}. Collected: {self._collected}"
            )
            self._context.reset()
            return receipt

    def cancel(self) -> dict[int, int]:
        """
        Cancel the present transaction and start a new one.

        Returns:
            Mapping of denomination to number of coins returned. Only
            denominations inserted in this transaction are present; the
            mapping is empty when nothing was inserted.
        """
        with self._lock:
            coins = self._context.returned_coins()
            logger.info(f"Transaction cancelled. Returned coins: {coins}")
            self._context.reset()
            return coins

    def empty(self) -> int:
        """
        Empty the money store.

        Returns:
            Total collected by purchases since the previous empty.
        """
        with self._lock:
            amount = self._collected
            self._collected = 0
            if amount:
                logger.info(f"Station emptied: {amount}")
            return amount

    def status(self) -> dict[str, Any]:
        """Snapshot of the station state."""
        with self._lock:
            return {
                "status": self._context.status.name.lower(),
                "inserted": self._context.inserted_so_far,
                "display": self._context.time_bought,
                "coins": dict(self._context.coin_counts),
                "collected": self._collected,
            }
