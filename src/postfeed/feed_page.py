"""
Composes a feed subscription with its status slot and post container.

The status display and post container are created by the caller (or here, when
omitted) and passed down explicitly; nothing in the package holds them globally.
"""

from __future__ import annotations

import logging
from typing import Optional

from .backoff_manager import BackoffManager
from .config import FeedSettings
from .connection_state import ConnectionState
from .dispatch import PostRenderer, build_feed_handler
from .exceptions import FeedConnectionError, FeedDecodeError
from .feed_subscriber import FeedSubscriber
from .feed_subscriber_helpers import ConnectionFactory
from .post_container import PostContainer
from .status_reporter import StatusReporter

logger = logging.getLogger(__name__)

CONNECTED_STATUS = "Connected"
CLOSED_STATUS = "Feed closed"


def connecting_status(address: str) -> str:
    return f"Connecting to feed {address}..."


async def run_feed(
    address: str,
    *,
    status_reporter: Optional[StatusReporter] = None,
    posts: Optional[PostRenderer] = None,
    settings: Optional[FeedSettings] = None,
    connection_factory: Optional[ConnectionFactory] = None,
    backoff_manager: Optional[BackoffManager] = None,
) -> ConnectionState:
    """Subscribe to ``address`` and render its feed until the subscription ends."""
    reporter = status_reporter if status_reporter is not None else StatusReporter()
    renderer = posts if posts is not None else PostContainer()
    subscriber = FeedSubscriber(settings, connection_factory, backoff_manager)

    reporter.report_status(connecting_status(address))
    try:
        subscription = await subscriber.subscribe(address, build_feed_handler(reporter, renderer))
    except FeedConnectionError as exc:
        reporter.report_error(exc)
        raise

    reporter.report_status(CONNECTED_STATUS)
    try:
        state = await subscription.wait_closed()
    except (FeedConnectionError, FeedDecodeError) as exc:
        reporter.report_error(exc)
        raise
    finally:
        logger.info("Feed subscription finished: %s", subscription.describe())

    reporter.report_status(CLOSED_STATUS)
    return state


__all__ = ["CLOSED_STATUS", "CONNECTED_STATUS", "connecting_status", "run_feed"]
