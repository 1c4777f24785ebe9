"""Type definitions for feed reconnection backoff."""

from dataclasses import dataclass

from postfeed.config import FeedSettings

MINIMUM_DELAY_SECONDS = 0.1


@dataclass(frozen=True)
class BackoffConfig:
    """Configuration for exponential backoff between connection attempts"""

    initial_delay: float = 1.0
    max_delay: float = 60.0
    multiplier: float = 2.0
    jitter_range: float = 0.1  # ±10% randomization
    max_attempts: int = 1

    @classmethod
    def from_settings(cls, settings: FeedSettings) -> "BackoffConfig":
        return cls(
            initial_delay=settings.reconnect_initial_delay_seconds,
            max_delay=settings.reconnect_max_delay_seconds,
            multiplier=settings.reconnect_multiplier,
            jitter_range=settings.reconnect_jitter,
            max_attempts=settings.max_connect_attempts,
        )


# A single attempt and no retry, the historical client behaviour.
SINGLE_ATTEMPT = BackoffConfig(max_attempts=1)
