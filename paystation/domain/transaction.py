"""
Transaction context - state of the coin transaction in progress.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from paystation.configs import MINUTES_PER_INCREMENT, PRICE_INCREMENT
from paystation.core.value_objects import Coin, TransactionStatus


def parking_time(amount: int) -> int:
    """Minutes bought by ``amount`` minor units, truncated to whole increments."""
    return amount // PRICE_INCREMENT * MINUTES_PER_INCREMENT


def _empty_counts() -> dict[int, int]:
    return {coin.value: 0 for coin in Coin}


@dataclass
class TransactionContext:
    """
    Context for a coin transaction.

    Holds all per-transaction state. Parking time is derived from
    ``inserted_so_far`` and never stored.
    """

    inserted_so_far: int = 0
    coin_counts: dict[int, int] = field(default_factory=_empty_counts)

    @property
    def status(self) -> TransactionStatus:
        """IDLE until the first coin is accepted."""
        if any(self.coin_counts.values()):
            return TransactionStatus.ACCUMULATING
        return TransactionStatus.IDLE

    @property
    def time_bought(self) -> int:
        return parking_time(self.inserted_so_far)

    def add_coin(self, coin: Coin) -> None:
        """Record an accepted coin."""
        self.coin_counts[coin.value] += 1
        self.inserted_so_far += coin.value

    def returned_coins(self) -> dict[int, int]:
        """Coins to hand back, only for denominations actually inserted."""
        return {
            denomination: count
            for denomination, count in self.coin_counts.items()
            if count > 0
        }

    def reset(self) -> None:
        """Reset the transaction context."""
        self.inserted_so_far = 0
        self.coin_counts = _empty_counts()
