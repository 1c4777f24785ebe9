"""
Client for per-address real-time post feeds.

Subscribes to ``<feed-base-url>/<address>`` over a WebSocket, classifies each
frame as a post or an in-band error, renders posts most-recent-first and keeps
a single status slot up to date.
"""

from .connection_state import ConnectionState
from .dispatch import build_feed_handler
from .exceptions import ApplicationError, FeedConnectionError, FeedDecodeError, InvalidStateTransitionError
from .feed_events import ErrorEvent, FeedEvent, PostEvent, decode_frame
from .feed_page import run_feed
from .feed_subscriber import FeedSubscriber, Subscription, build_feed_url, subscribe
from .post_container import PostContainer, PostEntry
from .status_reporter import StatusDisplay, StatusReporter

__all__ = [
    "ApplicationError",
    "ConnectionState",
    "ErrorEvent",
    "FeedConnectionError",
    "FeedDecodeError",
    "FeedEvent",
    "FeedSubscriber",
    "InvalidStateTransitionError",
    "PostContainer",
    "PostEntry",
    "PostEvent",
    "StatusDisplay",
    "StatusReporter",
    "Subscription",
    "build_feed_handler",
    "build_feed_url",
    "decode_frame",
    "run_feed",
    "subscribe",
]
