"""
Value Objects for the pay station.

Immutable objects that represent values in the domain.
Value objects are compared by value, not by identity.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Any

from paystation import configs


# =============================================================================
# Enums
# =============================================================================


class Coin(IntEnum):
    """Accepted coin denominations, valued in minor currency units."""

    NICKEL = configs.NICKEL
    DIME = configs.DIME
    QUARTER = configs.QUARTER

    @classmethod
    def is_accepted(cls, value: Any) -> bool:
        """Check whether a raw value is an accepted denomination."""
        # bool is an int subclass but never a coin
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return value in cls.values()

    @classmethod
    def values(cls) -> tuple[int, ...]:
        """Get all accepted denominations in ascending order."""
        return tuple(sorted(coin.value for coin in cls))


class TransactionStatus(Enum):
    """Status of the current transaction."""

    IDLE = auto()
    ACCUMULATING = auto()


# =============================================================================
# Receipt Value Object
# =============================================================================


@dataclass(frozen=True)
class Receipt:
    """
    Immutable record of parking time bought by a completed purchase.

    Attributes:
        value: Purchased parking time in minutes.
    """

    value: int = 0

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Parking time cannot be negative")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {"value": self.value}

    def __str__(self) -> str:
        return f"Parking time: {self.value} min"


# =============================================================================
# Coin Return Value Object
# =============================================================================


@dataclass(frozen=True)
class CoinReturn:
    """
    Coins handed back by a cancelled transaction.

    Attributes:
        coins: Pairs of (denomination, count); only nonzero counts.
    """

    coins: tuple[tuple[int, int], ...] = field(default_factory=tuple)

    @classmethod
    def from_counts(cls, counts: dict[int, int]) -> "CoinReturn":
        """Build from a denomination -> count mapping, dropping zero counts."""
        return cls(
            coins=tuple(
                (denomination, count)
                for denomination, count in sorted(counts.items())
                if count > 0
            )
        )

    @property
    def total(self) -> int:
        """Total value returned in minor units."""
        return sum(denomination * count for denomination, count in self.coins)

    def to_dict(self) -> dict[int, int]:
        """Convert to a denomination -> count mapping."""
        return dict(self.coins)
