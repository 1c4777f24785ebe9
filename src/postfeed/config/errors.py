from __future__ import annotations

"""Configuration errors raised while reading POSTFEED_* settings."""


class ConfigurationError(RuntimeError):
    """A feed setting is unset, unparsable or out of range."""

    @classmethod
    def not_set(cls, name: str) -> "ConfigurationError":
        return cls(f"Required environment variable {name!r} is not set")

    @classmethod
    def invalid_format(cls, name: str, raw: str, expected: str) -> "ConfigurationError":
        """Raw environment text that cannot be coerced to the expected type."""
        return cls(f"Environment variable {name!r} must be {expected} (got {raw!r})")

    @classmethod
    def invalid_value(cls, name: str, value, reason: str = "") -> "ConfigurationError":
        msg = f"Invalid value for {name}: {value!r}"
        if reason:
            msg += f". {reason}"
        return cls(msg)

    @classmethod
    def load_failed(cls, path: str) -> "ConfigurationError":
        return cls(f"Failed to read configuration defaults from {path}")


__all__ = ["ConfigurationError"]
