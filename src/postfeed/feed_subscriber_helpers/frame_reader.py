"""Reads frames off a feed connection and queues decoded events in arrival order."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from websockets import WebSocketException
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK

from postfeed.connection_state import ConnectionState
from postfeed.exceptions import FeedConnectionError, FeedDecodeError
from postfeed.feed_events import FeedEvent, decode_frame


@dataclass(frozen=True)
class StreamEnd:
    """Queued after the last event; tells the consumer how the stream ended."""

    state: ConnectionState
    error: Optional[BaseException] = None


QueueItem = Union[FeedEvent, StreamEnd]


def _describe_close(exc: ConnectionClosed) -> str:
    received = getattr(exc, "rcvd", None)
    if received is None:
        return "no close frame received"
    return f"code {received.code}" + (f" ({received.reason})" if received.reason else "")


async def read_frames(
    connection: Any,
    queue: "asyncio.Queue[QueueItem]",
    *,
    address: str,
    on_frame: Callable[[], None],
    logger: logging.Logger,
) -> None:
    """Receive until the stream ends; always finishes by queueing a StreamEnd."""
    while True:
        try:
            raw_frame = await connection.recv()
        except ConnectionClosedOK:
            logger.info("Feed closed by remote end")
            await queue.put(StreamEnd(ConnectionState.CLOSED))
            return
        except ConnectionClosed as exc:
            logger.warning("Feed connection lost: %s", _describe_close(exc))
            error = FeedConnectionError(f"Feed connection lost: {_describe_close(exc)}", address=address)
            error.__cause__ = exc
            await queue.put(StreamEnd(ConnectionState.FAILED, error))
            return
        except (WebSocketException, OSError) as exc:
            logger.warning("Transport error while reading feed: %s", exc)
            error = FeedConnectionError(f"Transport error while reading feed: {exc}", address=address)
            error.__cause__ = exc
            await queue.put(StreamEnd(ConnectionState.FAILED, error))
            return

        on_frame()
        try:
            event = decode_frame(raw_frame)
        except FeedDecodeError as exc:
            logger.error("Dropping subscription after undecodable frame: %s", exc)
            await queue.put(StreamEnd(ConnectionState.FAILED, exc))
            return
        await queue.put(event)


__all__ = ["QueueItem", "StreamEnd", "read_frames"]
