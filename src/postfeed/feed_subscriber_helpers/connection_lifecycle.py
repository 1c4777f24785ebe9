"""WebSocket connection lifecycle management for a single feed address."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import websockets
from websockets import WebSocketException

from postfeed.exceptions import FeedConnectionError

ConnectionFactory = Callable[[str], Awaitable[Any]]


class FeedConnectionLifecycle:
    """Opens and closes the WebSocket behind one subscription."""

    def __init__(
        self,
        address: str,
        url: str,
        *,
        connect_timeout: Optional[float] = None,
        close_timeout: float = 5.0,
        max_frame_bytes: int = 1024 * 1024,
        connection_factory: Optional[ConnectionFactory] = None,
    ):
        self.address = address
        self.url = url
        self.connect_timeout = connect_timeout
        self.close_timeout = close_timeout
        self.max_frame_bytes = max_frame_bytes
        self.connection_factory = connection_factory
        self.websocket_connection: Any = None
        self.logger = logging.getLogger(f"{__name__}.{address}")

    async def establish_connection(self) -> Any:
        """Open the connection; raise FeedConnectionError when the handshake fails."""
        connected = False
        try:
            self.logger.info("Establishing feed connection to %s", self.url)
            self.websocket_connection = await _open_websocket(self)
            _validate_connection(self.websocket_connection, self.url)
            self.logger.info("Feed connection established")
            connected = True
        except asyncio.TimeoutError as exc:
            self.logger.warning("Feed connection timeout after %ss", self.connect_timeout)
            raise FeedConnectionError(f"Feed connection timeout for {self.url}", address=self.address) from exc
        except WebSocketException as exc:
            self.logger.warning("Feed handshake failed: %s", exc)
            raise FeedConnectionError(f"Feed handshake failed for {self.url}", address=self.address) from exc
        except OSError as exc:
            self.logger.warning("Transport error: %s", exc)
            raise FeedConnectionError(f"Transport error for {self.url}", address=self.address) from exc
        else:
            return self.websocket_connection
        finally:
            if not connected:
                await self.cleanup_connection()

    async def cleanup_connection(self) -> None:
        if self.websocket_connection is None:
            return
        try:
            if _close_code(self.websocket_connection) is None:
                self.logger.info("Closing feed connection")
                await asyncio.wait_for(self.websocket_connection.close(), timeout=self.close_timeout)
            else:
                self.logger.debug("Feed connection already closed (code: %s)", _close_code(self.websocket_connection))
        except (asyncio.TimeoutError, WebSocketException, OSError) as exc:
            self.logger.warning("Error closing feed connection: %s", exc)
        finally:
            self.websocket_connection = None


def _close_code(connection: Any) -> Optional[int]:
    return getattr(connection, "close_code", None)


def _default_connector(lifecycle: FeedConnectionLifecycle) -> Awaitable[Any]:
    return websockets.connect(
        lifecycle.url,
        open_timeout=None,
        ping_interval=None,
        ping_timeout=None,
        close_timeout=lifecycle.close_timeout,
        max_size=lifecycle.max_frame_bytes,
    )


async def _open_websocket(lifecycle: FeedConnectionLifecycle) -> Any:
    """Open a websocket via the injected factory or the default connector."""
    if lifecycle.connection_factory is not None:
        pending = lifecycle.connection_factory(lifecycle.url)
    else:
        pending = _default_connector(lifecycle)
    if lifecycle.connect_timeout is None:
        return await pending
    return await asyncio.wait_for(pending, timeout=lifecycle.connect_timeout)


def _validate_connection(connection: Any, url: str) -> None:
    if connection is None:
        raise FeedConnectionError(f"Connection factory returned no connection for {url}")
    if _close_code(connection) is not None:
        raise FeedConnectionError(f"Feed connection closed during handshake (code: {_close_code(connection)})")


__all__ = ["ConnectionFactory", "FeedConnectionLifecycle"]
