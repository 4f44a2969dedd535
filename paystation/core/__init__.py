"""
Core module - Foundation layer with no external dependencies.

Contains:
- Exceptions
- Value Objects
"""

from .exceptions import (
    PayStationError,
    CoinError,
    InvalidCoinError,
    CommandError,
)
from .value_objects import (
    Coin,
    TransactionStatus,
    Receipt,
    CoinReturn,
)


__all__ = [
    # Exceptions
    "PayStationError",
    "CoinError",
    "InvalidCoinError",
    "CommandError",
    # Value Objects
    "Coin",
    "TransactionStatus",
    "Receipt",
    "CoinReturn",
]
