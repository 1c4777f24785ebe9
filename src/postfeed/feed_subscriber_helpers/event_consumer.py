"""Drains queued feed events strictly in order, one handler call at a time."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable

from .frame_reader import QueueItem, StreamEnd


async def consume_events(
    queue: "asyncio.Queue[QueueItem]",
    handler: Callable[[Any], Any],
    *,
    is_active: Callable[[], bool],
    on_dispatched: Callable[[], None],
) -> StreamEnd:
    """
    Invoke ``handler`` once per queued event until a StreamEnd arrives.

    Coroutine results are awaited before the next event is taken, so the
    handler never runs concurrently with itself. Exceptions raised by the
    handler propagate to the caller.
    """
    while True:
        item = await queue.get()
        if isinstance(item, StreamEnd):
            return item
        if not is_active():
            continue
        result = handler(item)
        if inspect.isawaitable(result):
            await result
        on_dispatched()


__all__ = ["consume_events"]
