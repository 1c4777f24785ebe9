"""Routes decoded feed events to the status slot or the post renderer."""

from typing import Callable, Protocol

from .feed_events import ErrorEvent, FeedEvent, PostEvent
from .status_reporter import StatusReporter


class PostRenderer(Protocol):
    def render_post(self, event: PostEvent) -> object: ...


def build_feed_handler(status_reporter: StatusReporter, post_renderer: PostRenderer) -> Callable[[FeedEvent], None]:
    """Return a handler that classifies each event exactly once."""

    def handle_event(event: FeedEvent) -> None:
        if isinstance(event, ErrorEvent):
            status_reporter.report_error(event)
        elif isinstance(event, PostEvent):
            post_renderer.render_post(event)
        else:
            raise TypeError(f"Unsupported feed event: {type(event).__name__}")

    return handle_event


__all__ = ["PostRenderer", "build_feed_handler"]
