"""
Application settings.

Typed, immutable configuration sections aggregated into one settings object.
"""

from dataclasses import dataclass, field

from paystation import configs


# =============================================================================
# Configuration Classes
# =============================================================================


@dataclass(frozen=True)
class RedisSettings:
    """Redis connection settings."""

    host: str = configs.REDIS_HOST
    port: int = configs.REDIS_PORT
    decode_responses: bool = True


@dataclass(frozen=True)
class ServiceSettings:
    """External service settings."""

    loki_url: str = configs.LOKI_URL
    loki_enabled: bool = configs.LOKI_ENABLED


@dataclass(frozen=True)
class PayStationSettings:
    """Pay station Redis channel settings."""

    command_channel: str = configs.COMMAND_CHANNEL
    events_channel: str = configs.EVENTS_CHANNEL

    @property
    def response_channel(self) -> str:
        """Get response channel name."""
        return f"{self.command_channel}_response"


# =============================================================================
# Main Settings
# =============================================================================


@dataclass
class Settings:
    """
    Main application settings.

    Aggregates all configuration sections.
    """

    redis: RedisSettings = field(default_factory=RedisSettings)
    services: ServiceSettings = field(default_factory=ServiceSettings)
    pay_station: PayStationSettings = field(default_factory=PayStationSettings)


# =============================================================================
# Settings Singleton
# =============================================================================


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
