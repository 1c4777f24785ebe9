"""Status slot rendering for feed and connection status."""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .feed_events import UNKNOWN_ERROR_MESSAGE, ErrorEvent

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: "


@dataclass
class StatusDisplay:
    """The single status slot: current text plus the error presentation flag."""

    text: str = ""
    is_error: bool = False


def _error_message(error_payload: Any) -> str:
    if isinstance(error_payload, ErrorEvent):
        return error_payload.message
    if isinstance(error_payload, Mapping):
        message = error_payload.get("message")
        return UNKNOWN_ERROR_MESSAGE if message is None else str(message)
    if isinstance(error_payload, BaseException):
        return str(error_payload) or type(error_payload).__name__
    return str(error_payload)


class StatusReporter:
    """
    Projects status messages onto a StatusDisplay.

    The display is owned by whoever composes the subscription and is passed in
    explicitly; the reporter keeps no state of its own.
    """

    def __init__(self, display: StatusDisplay | None = None):
        self.display = display if display is not None else StatusDisplay()

    def report_status(self, message: str) -> None:
        self.display.text = message
        self.display.is_error = False
        logger.info("Feed status: %s", message)

    def report_error(self, error_payload: Any) -> None:
        self.display.text = ERROR_PREFIX + _error_message(error_payload)
        self.display.is_error = True
        logger.warning("Feed status: %s", self.display.text)


__all__ = ["ERROR_PREFIX", "StatusDisplay", "StatusReporter"]
