"""
Coin-operated parking pay station.
"""

from paystation.core.exceptions import InvalidCoinError
from paystation.core.value_objects import Receipt
from paystation.domain.pay_station import PayStation


__all__ = [
    "PayStation",
    "Receipt",
    "InvalidCoinError",
]
