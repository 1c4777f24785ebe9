"""
Feed event decoding and classification.

Each inbound frame is UTF-8 text holding exactly one JSON object. A decoded
object carrying an ``error`` key is an ErrorEvent; any other object must carry
an ``html`` string and is a PostEvent. Everything else is a decode failure.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Union

import orjson

from .exceptions import FeedDecodeError

logger = logging.getLogger(__name__)

ERROR_KEY = "error"
MESSAGE_KEY = "message"
HTML_KEY = "html"
UNKNOWN_ERROR_MESSAGE = "Unknown error"
_PREVIEW_LENGTH = 100


@dataclass(frozen=True)
class ErrorEvent:
    """Application-level error reported in-band by the feed."""

    message: str
    error: Any = True
    payload: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class PostEvent:
    """A pre-rendered post; ``html`` is treated as opaque markup."""

    html: str
    payload: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


FeedEvent = Union[ErrorEvent, PostEvent]


def _preview(frame: Union[str, bytes]) -> str:
    return repr(frame[:_PREVIEW_LENGTH])


def decode_text(frame: Union[str, bytes, bytearray, memoryview]) -> str:
    """Return the frame as text, decoding binary frames strictly as UTF-8."""
    if isinstance(frame, str):
        return frame
    if isinstance(frame, (bytes, bytearray, memoryview)):
        try:
            return bytes(frame).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FeedDecodeError("Frame is not valid UTF-8 text", frame=bytes(frame)) from exc
    raise FeedDecodeError(f"Unsupported frame type {type(frame).__name__}", frame=frame)


def decode_object(text: str) -> Dict[str, Any]:
    """Parse a frame's text as a single JSON object."""
    try:
        parsed = orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        raise FeedDecodeError(f"Frame is not valid JSON: {_preview(text)}", frame=text) from exc

    if not isinstance(parsed, dict):
        raise FeedDecodeError(f"Frame must hold a JSON object, got {type(parsed).__name__}", frame=text)
    return parsed


def classify(payload: Dict[str, Any]) -> FeedEvent:
    """Map a decoded object to exactly one FeedEvent variant."""
    if ERROR_KEY in payload:
        raw_message = payload.get(MESSAGE_KEY)
        message = UNKNOWN_ERROR_MESSAGE if raw_message is None else str(raw_message)
        return ErrorEvent(message=message, error=payload[ERROR_KEY], payload=payload)

    html = payload.get(HTML_KEY)
    if not isinstance(html, str):
        raise FeedDecodeError("Post frame must carry an 'html' string", frame=payload)
    return PostEvent(html=html, payload=payload)


def decode_frame(frame: Union[str, bytes, bytearray, memoryview]) -> FeedEvent:
    """Decode one inbound frame into a FeedEvent or raise FeedDecodeError."""
    event = classify(decode_object(decode_text(frame)))
    logger.debug("Decoded %s from frame %s", type(event).__name__, _preview(frame))
    return event


__all__ = [
    "ErrorEvent",
    "FeedEvent",
    "PostEvent",
    "classify",
    "decode_frame",
    "decode_object",
    "decode_text",
]
