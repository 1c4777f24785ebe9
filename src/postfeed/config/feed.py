from __future__ import annotations

"""Feed connection settings loaded from the environment."""


from dataclasses import dataclass
from functools import lru_cache

from .errors import ConfigurationError
from .runtime import env_float, env_int, env_str

DEFAULT_FEED_BASE_URL = "ws://127.0.0.1:8080/api/posts"
DEFAULT_CLOSE_TIMEOUT_SECONDS = 5.0
DEFAULT_MAX_FRAME_BYTES = 1024 * 1024
DEFAULT_MAX_CONNECT_ATTEMPTS = 1
DEFAULT_RECONNECT_INITIAL_DELAY_SECONDS = 1.0
DEFAULT_RECONNECT_MAX_DELAY_SECONDS = 60.0
DEFAULT_RECONNECT_MULTIPLIER = 2.0
DEFAULT_RECONNECT_JITTER = 0.1

_WEBSOCKET_SCHEMES = ("ws://", "wss://")


@dataclass(frozen=True)
class FeedSettings:
    base_url: str = DEFAULT_FEED_BASE_URL
    connect_timeout_seconds: float | None = None
    close_timeout_seconds: float = DEFAULT_CLOSE_TIMEOUT_SECONDS
    max_frame_bytes: int = DEFAULT_MAX_FRAME_BYTES
    max_connect_attempts: int = DEFAULT_MAX_CONNECT_ATTEMPTS
    reconnect_initial_delay_seconds: float = DEFAULT_RECONNECT_INITIAL_DELAY_SECONDS
    reconnect_max_delay_seconds: float = DEFAULT_RECONNECT_MAX_DELAY_SECONDS
    reconnect_multiplier: float = DEFAULT_RECONNECT_MULTIPLIER
    reconnect_jitter: float = DEFAULT_RECONNECT_JITTER

    def __post_init__(self) -> None:
        if not self.base_url.startswith(_WEBSOCKET_SCHEMES):
            raise ConfigurationError.invalid_format("POSTFEED_BASE_URL", self.base_url, "a ws:// or wss:// URL")
        if self.connect_timeout_seconds is not None and self.connect_timeout_seconds <= 0:
            raise ConfigurationError.invalid_value(
                "POSTFEED_CONNECT_TIMEOUT_SECONDS", self.connect_timeout_seconds, "Must be positive"
            )
        if self.max_frame_bytes <= 0:
            raise ConfigurationError.invalid_value("POSTFEED_MAX_FRAME_BYTES", self.max_frame_bytes, "Must be positive")
        if self.max_connect_attempts < 1:
            raise ConfigurationError.invalid_value(
                "POSTFEED_MAX_CONNECT_ATTEMPTS", self.max_connect_attempts, "At least one attempt is required"
            )
        if self.reconnect_multiplier < 1.0:
            raise ConfigurationError.invalid_value("POSTFEED_RECONNECT_MULTIPLIER", self.reconnect_multiplier, "Must be >= 1.0")
        if not 0.0 <= self.reconnect_jitter < 1.0:
            raise ConfigurationError.invalid_value("POSTFEED_RECONNECT_JITTER", self.reconnect_jitter, "Must be in [0, 1)")


@lru_cache(maxsize=1)
def get_feed_settings() -> FeedSettings:
    return load_feed_settings()


def load_feed_settings() -> FeedSettings:
    """Build settings from ``POSTFEED_*`` environment variables, bypassing the cache."""
    return FeedSettings(
        base_url=env_str("POSTFEED_BASE_URL", or_value=DEFAULT_FEED_BASE_URL),
        connect_timeout_seconds=env_float("POSTFEED_CONNECT_TIMEOUT_SECONDS"),
        close_timeout_seconds=env_float("POSTFEED_CLOSE_TIMEOUT_SECONDS", or_value=DEFAULT_CLOSE_TIMEOUT_SECONDS),
        max_frame_bytes=env_int("POSTFEED_MAX_FRAME_BYTES", or_value=DEFAULT_MAX_FRAME_BYTES),
        max_connect_attempts=env_int("POSTFEED_MAX_CONNECT_ATTEMPTS", or_value=DEFAULT_MAX_CONNECT_ATTEMPTS),
        reconnect_initial_delay_seconds=env_float(
            "POSTFEED_RECONNECT_INITIAL_DELAY_SECONDS", or_value=DEFAULT_RECONNECT_INITIAL_DELAY_SECONDS
        ),
        reconnect_max_delay_seconds=env_float(
            "POSTFEED_RECONNECT_MAX_DELAY_SECONDS", or_value=DEFAULT_RECONNECT_MAX_DELAY_SECONDS
        ),
        reconnect_multiplier=env_float("POSTFEED_RECONNECT_MULTIPLIER", or_value=DEFAULT_RECONNECT_MULTIPLIER),
        reconnect_jitter=env_float("POSTFEED_RECONNECT_JITTER", or_value=DEFAULT_RECONNECT_JITTER),
    )


__all__ = ["FeedSettings", "get_feed_settings", "load_feed_settings"]
