import pytest

from postfeed.connection_state import ConnectionState
from postfeed.exceptions import FeedConnectionError, FeedDecodeError
from postfeed.feed_page import CLOSED_STATUS, run_feed
from postfeed.post_container import PostContainer
from postfeed.status_reporter import StatusDisplay, StatusReporter
from tests.helpers.feed_doubles import DummyConnectionFactory, DummyWebSocket


@pytest.mark.asyncio
async def test_run_feed_renders_posts_and_reports_close(feed_settings):
    reporter = StatusReporter()
    posts = PostContainer()
    websocket = DummyWebSocket(['{"html":"A"}', '{"html":"B"}'])

    state = await run_feed(
        "abc123",
        status_reporter=reporter,
        posts=posts,
        settings=feed_settings,
        connection_factory=DummyConnectionFactory(websocket),
    )

    assert state is ConnectionState.CLOSED
    assert posts.texts() == ["B", "A"]
    assert reporter.display == StatusDisplay(text=CLOSED_STATUS, is_error=False)


@pytest.mark.asyncio
async def test_run_feed_routes_connection_failure_to_status(feed_settings):
    reporter = StatusReporter()

    with pytest.raises(FeedConnectionError):
        await run_feed(
            "abc123",
            status_reporter=reporter,
            settings=feed_settings,
            connection_factory=DummyConnectionFactory(OSError("unreachable")),
        )

    assert reporter.display.is_error is True
    assert reporter.display.text.startswith("Error: Transport error")


@pytest.mark.asyncio
async def test_run_feed_routes_decode_failure_to_status(feed_settings):
    reporter = StatusReporter()
    posts = PostContainer()

    with pytest.raises(FeedDecodeError):
        await run_feed(
            "abc123",
            status_reporter=reporter,
            posts=posts,
            settings=feed_settings,
            connection_factory=DummyConnectionFactory(DummyWebSocket(["<html>"], hold_open=True)),
        )

    assert reporter.display.is_error is True
    assert len(posts) == 0


@pytest.mark.asyncio
async def test_in_band_error_then_close_ends_with_closed_status(feed_settings):
    websocket = DummyWebSocket(['{"error":true,"message":"feed not found"}'])
    seen = []

    class TrackingReporter(StatusReporter):
        def report_error(self, error_payload):
            super().report_error(error_payload)
            seen.append(self.display.text)

    reporter = TrackingReporter()
    await run_feed("abc123", status_reporter=reporter, settings=feed_settings, connection_factory=DummyConnectionFactory(websocket))

    assert seen == ["Error: feed not found"]
    assert reporter.display.text == CLOSED_STATUS
