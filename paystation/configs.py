"""
Configuration module for the pay station.

This module provides centralized constants for the station itself and the
services around it: coin denominations, pricing, Redis, Loki and logging.
"""

import os
from typing import Final


# =============================================================================
# Coin Configuration
# =============================================================================

NICKEL: Final[int] = 5
DIME: Final[int] = 10
QUARTER: Final[int] = 25

ACCEPTED_COINS: Final[tuple[int, ...]] = (NICKEL, DIME, QUARTER)


# =============================================================================
# Pricing Configuration
# =============================================================================

# 5 minor units buy 2 minutes; partial increments buy nothing
PRICE_INCREMENT: Final[int] = 5
MINUTES_PER_INCREMENT: Final[int] = 2


# =============================================================================
# Redis Configuration
# =============================================================================

REDIS_HOST: Final[str] = os.environ.get("PAYSTATION_REDIS_HOST", "localhost")
REDIS_PORT: Final[int] = int(os.environ.get("PAYSTATION_REDIS_PORT", "6379"))

COMMAND_CHANNEL: Final[str] = "pay_station_commands"
EVENTS_CHANNEL: Final[str] = "pay_station_events"


# =============================================================================
# External Services Configuration
# =============================================================================

LOKI_URL: Final[str] = os.environ.get(
    "PAYSTATION_LOKI_URL", "http://localhost:3100/loki/api/v1/push"
)
LOKI_ENABLED: Final[bool] = os.environ.get(
    "PAYSTATION_LOKI_ENABLED", ""
).lower() in ("1", "true", "yes")


# =============================================================================
# Logging Configuration
# =============================================================================

LOG_FILE: Final[str] = os.environ.get("PAYSTATION_LOG_FILE", "logs/pay_station.log")
