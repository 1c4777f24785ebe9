"""Helper modules for the reconnection backoff manager."""

from .types import SINGLE_ATTEMPT, BackoffConfig

__all__ = ["BackoffConfig", "SINGLE_ATTEMPT"]
