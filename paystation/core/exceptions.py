"""
Custom exceptions for the pay station.

Provides a hierarchy of typed exceptions with structured details
for API responses.
"""

from typing import Any, Optional


class PayStationError(Exception):
    """Base exception for all pay station errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            code: Optional error code for programmatic handling.
            details: Optional additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Coin Errors
# =============================================================================


class CoinError(PayStationError):
    """Base exception for coin-related errors."""

    def __init__(
        self,
        message: str,
        coin_value: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.coin_value = coin_value
        if coin_value is not None:
            self.details["coin_value"] = coin_value


class InvalidCoinError(CoinError):
    """Coin value is not one of the accepted denominations."""

    def __init__(
        self,
        coin_value: Any,
        accepted: tuple[int, ...] = (),
        **kwargs: Any,
    ) -> None:
        super().__init__(f"Invalid coin: {coin_value}", coin_value=coin_value, **kwargs)
        self.details["accepted"] = list(accepted)


# =============================================================================
# Command Errors
# =============================================================================


class CommandError(PayStationError):
    """Malformed or unsupported remote command."""

    pass
