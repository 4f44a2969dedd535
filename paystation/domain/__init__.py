"""
Domain layer - Business logic and domain models.

Contains:
- Pay station
- Transaction context
"""

from .pay_station import PayStation
from .transaction import TransactionContext, parking_time


__all__ = [
    "PayStation",
    "TransactionContext",
    "parking_time",
]
