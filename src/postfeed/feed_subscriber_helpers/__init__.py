"""Helper modules for the feed subscriber."""

from .connection_lifecycle import ConnectionFactory, FeedConnectionLifecycle
from .event_consumer import consume_events
from .frame_reader import StreamEnd, read_frames

__all__ = [
    "ConnectionFactory",
    "FeedConnectionLifecycle",
    "StreamEnd",
    "consume_events",
    "read_frames",
]
