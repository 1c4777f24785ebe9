"""In-memory render target for feed posts, most-recent-first."""

import logging
from dataclasses import dataclass
from typing import List

from .feed_events import PostEvent

logger = logging.getLogger(__name__)

POST_CSS_CLASS = "feed-post"


@dataclass(frozen=True)
class PostEntry:
    """A rendered post; ``text`` is the post markup as literal text."""

    text: str
    css_class: str = POST_CSS_CLASS


class PostContainer:
    """Ordered list of rendered posts. New entries go to the front."""

    def __init__(self):
        self._entries: List[PostEntry] = []

    def render_post(self, event: PostEvent) -> PostEntry:
        entry = PostEntry(text=event.html)
        self._entries.insert(0, entry)
        logger.debug("Rendered post (%s entries)", len(self._entries))
        return entry

    @property
    def first(self) -> PostEntry | None:
        return self._entries[0] if self._entries else None

    def texts(self) -> List[str]:
        return [entry.text for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["POST_CSS_CLASS", "PostContainer", "PostEntry"]
