"""Environment-backed configuration for the feed client."""

from .errors import ConfigurationError
from .runtime import env_bool, env_float, env_int, env_str, reset_default_values
from .feed import FeedSettings, get_feed_settings

__all__ = [
    "ConfigurationError",
    "FeedSettings",
    "env_bool",
    "env_float",
    "env_int",
    "env_str",
    "get_feed_settings",
    "reset_default_values",
]
