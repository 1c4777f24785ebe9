"""
Feed subscriber: one persistent WebSocket connection per feed address.

A subscription moves through CONNECTING -> OPEN -> CLOSED/FAILED. While open,
a reader task decodes frames and queues them in arrival order; a consumer task
drains the queue and calls the subscription handler once per frame, never
concurrently. ``subscribe`` returns once the connection is open and raises
FeedConnectionError if it cannot be established.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

from .backoff_manager import BackoffManager
from .config import FeedSettings, get_feed_settings
from .connection_state import ConnectionState, can_transition
from .exceptions import FeedConnectionError, InvalidStateTransitionError
from .feed_subscriber_helpers import (
    ConnectionFactory,
    FeedConnectionLifecycle,
    StreamEnd,
    consume_events,
    read_frames,
)

logger = logging.getLogger(__name__)

FeedHandler = Callable[[Any], Any]


def build_feed_url(base_url: str, address: str) -> str:
    """Return ``<base_url>/<address>`` with the address quoted as one path segment."""
    return f"{base_url.rstrip('/')}/{quote(address, safe='')}"


def _validate_address(address: str) -> str:
    if not isinstance(address, str) or not address.strip():
        raise ValueError("Feed address must be a non-empty string")
    return address


class Subscription:
    """Handle for one feed connection scoped to one address."""

    def __init__(self, address: str, handler: FeedHandler, lifecycle: FeedConnectionLifecycle):
        self.address = address
        self.handler = handler
        self.lifecycle = lifecycle
        self.error: Optional[BaseException] = None
        self.frames_received = 0
        self.events_dispatched = 0
        self._state = ConnectionState.CONNECTING
        self._queue: "asyncio.Queue[Any]" = asyncio.Queue()
        self._run_task: Optional[asyncio.Task] = None
        self._terminated = asyncio.Event()
        self.logger = logging.getLogger(f"{__name__}.{address}")

    @property
    def url(self) -> str:
        return self.lifecycle.url

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is ConnectionState.OPEN

    def _transition(self, target: ConnectionState, error: Optional[BaseException] = None) -> None:
        if not can_transition(self._state, target):
            raise InvalidStateTransitionError(
                f"Cannot move subscription {self.address} from {self._state.value} to {target.value}",
                address=self.address,
                current=self._state,
                target=target,
            )
        self.logger.info("Subscription state %s -> %s", self._state.value, target.value)
        self._state = target
        if target.is_terminal:
            self.error = error
            self._terminated.set()

    async def _connect(self, backoff_manager: BackoffManager) -> None:
        try:
            while True:
                try:
                    connection = await self.lifecycle.establish_connection()
                except FeedConnectionError as exc:
                    attempt = backoff_manager.record_failure(self.address)
                    if backoff_manager.should_retry(self.address):
                        delay = backoff_manager.calculate_delay(self.address, attempt)
                        self.logger.info("Retrying feed connection in %.2fs", delay)
                        await asyncio.sleep(delay)
                        continue
                    backoff_manager.reset_backoff(self.address)
                    exc.attempts = attempt
                    exc.subscription = self
                    self._transition(ConnectionState.FAILED, exc)
                    raise
                break
        except asyncio.CancelledError:
            backoff_manager.reset_backoff(self.address)
            if not self._state.is_terminal:
                self._transition(ConnectionState.CLOSED)
            raise

        backoff_manager.reset_backoff(self.address)
        self._transition(ConnectionState.OPEN)
        self._run_task = asyncio.create_task(self._run(connection), name=f"feed-subscription-{self.address}")

    async def _run(self, connection: Any) -> None:
        reader = asyncio.create_task(
            read_frames(
                connection,
                self._queue,
                address=self.address,
                on_frame=self._record_frame,
                logger=self.logger,
            ),
            name=f"feed-reader-{self.address}",
        )
        reader.add_done_callback(self._on_reader_done)
        try:
            end = await consume_events(
                self._queue,
                self.handler,
                is_active=lambda: self.is_open,
                on_dispatched=self._record_dispatch,
            )
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.logger.exception("Feed handler failed")
            end = StreamEnd(ConnectionState.FAILED, exc)
        finally:
            reader.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reader
            await self.lifecycle.cleanup_connection()

        if not self._state.is_terminal:
            self._transition(end.state, end.error)

    def _on_reader_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error("Feed reader stopped unexpectedly: %r", exc)
            self._queue.put_nowait(StreamEnd(ConnectionState.FAILED, exc))

    def _record_frame(self) -> None:
        self.frames_received += 1

    def _record_dispatch(self) -> None:
        self.events_dispatched += 1

    async def close(self) -> None:
        """Tear the subscription down. Safe to call more than once."""
        if self._state.is_terminal:
            return
        self._transition(ConnectionState.CLOSED)

        task = self._run_task
        if task is not None and not task.done():
            task.cancel()
            if task is asyncio.current_task():
                return
            with contextlib.suppress(asyncio.CancelledError):
                await task
        # A task cancelled before its first step never reaches its cleanup.
        await self.lifecycle.cleanup_connection()

    async def wait_closed(self) -> ConnectionState:
        """Wait for a terminal state; raise the recorded error if the subscription failed."""
        await self._terminated.wait()
        if self._run_task is not None and self._run_task is not asyncio.current_task():
            with contextlib.suppress(asyncio.CancelledError):
                await self._run_task
        if self._state is ConnectionState.FAILED and self.error is not None:
            raise self.error
        return self._state

    def describe(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "url": self.url,
            "state": self._state.value,
            "frames_received": self.frames_received,
            "events_dispatched": self.events_dispatched,
            "error": None if self.error is None else str(self.error),
        }

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"Subscription(address={self.address!r}, state={self._state.value})"


class FeedSubscriber:
    """Creates subscriptions against the configured feed endpoint."""

    def __init__(
        self,
        settings: Optional[FeedSettings] = None,
        connection_factory: Optional[ConnectionFactory] = None,
        backoff_manager: Optional[BackoffManager] = None,
    ):
        self.settings = settings if settings is not None else get_feed_settings()
        self.connection_factory = connection_factory
        self.backoff_manager = backoff_manager if backoff_manager is not None else BackoffManager.from_settings(self.settings)

    async def subscribe(self, address: str, handler: FeedHandler) -> Subscription:
        _validate_address(address)
        if not callable(handler):
            raise TypeError("Feed handler must be callable")

        lifecycle = FeedConnectionLifecycle(
            address,
            build_feed_url(self.settings.base_url, address),
            connect_timeout=self.settings.connect_timeout_seconds,
            close_timeout=self.settings.close_timeout_seconds,
            max_frame_bytes=self.settings.max_frame_bytes,
            connection_factory=self.connection_factory,
        )
        subscription = Subscription(address, handler, lifecycle)
        await subscription._connect(self.backoff_manager)
        logger.info("Subscribed to feed %s", address)
        return subscription


async def subscribe(
    address: str,
    handler: FeedHandler,
    *,
    settings: Optional[FeedSettings] = None,
    connection_factory: Optional[ConnectionFactory] = None,
    backoff_manager: Optional[BackoffManager] = None,
) -> Subscription:
    """Open a feed subscription for ``address`` and deliver every frame to ``handler``."""
    subscriber = FeedSubscriber(settings, connection_factory, backoff_manager)
    return await subscriber.subscribe(address, handler)


__all__ = ["FeedHandler", "FeedSubscriber", "Subscription", "build_feed_url", "subscribe"]
