"""Common exception classes for the feed client.

All custom exceptions inherit from ApplicationError to maintain a consistent
exception hierarchy across the package.

Exception classes support two patterns:
1. No-argument raise: raise FeedDecodeError()
2. Contextual attributes: err = FeedConnectionError(address="abc", attempts=1); raise err
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Application error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class FeedConnectionError(ApplicationError):
    """Feed connection could not be established or was lost."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Feed connection could not be established or was lost"
        super().__init__(message, **kwargs)


class FeedDecodeError(ApplicationError):
    """Inbound frame is not a well-formed feed message."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Inbound frame is not a well-formed feed message"
        super().__init__(message, **kwargs)


class InvalidStateTransitionError(ApplicationError):
    """Subscription state transition is not allowed."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Subscription state transition is not allowed"
        super().__init__(message, **kwargs)


__all__ = [
    "ApplicationError",
    "FeedConnectionError",
    "FeedDecodeError",
    "InvalidStateTransitionError",
]
