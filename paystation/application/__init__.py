"""
Application layer - Application services and command routing.

Contains:
- Pay station service
- Command handlers
"""

from .pay_station_service import PayStationService
from .command_handler import CommandHandler, CommandResponse, pay_station_commands


__all__ = [
    "PayStationService",
    "CommandHandler",
    "CommandResponse",
    "pay_station_commands",
]
