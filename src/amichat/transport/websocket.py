"""STOMP-over-WebSocket transport.

Uses the `websockets` asyncio client. The transport keeps reopening the
socket at a fixed delay until `deactivate()` is called.
"""

import asyncio
import itertools
import logging
from urllib.parse import urlparse

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import WebSocketException

from ..config import RECONNECT_DELAY
from ..errors import PublishError, TransportConnectionError
from .base import MessageHandler, PubSubTransport, TransportListener
from .stomp import StompFrame, StompProtocolError, parse_frames

logger = logging.getLogger(__name__)

STOMP_SUBPROTOCOLS = ["v12.stomp", "v11.stomp", "v10.stomp"]
HANDSHAKE_TIMEOUT = 10.0  # Seconds to wait for CONNECTED


class StompWebSocketTransport(PubSubTransport):
    """STOMP 1.2 client over a WebSocket.

    Hidden design decisions:
    - Socket library and STOMP handshake
    - Reconnect loop (fixed delay, no backoff, no retry ceiling)
    - Per-session subscription ids
    - Fire-and-forget sends scheduled on the event loop
    """

    def __init__(
        self,
        url: str,
        reconnect_delay: float = RECONNECT_DELAY,
        host: str | None = None,
    ):
        """Initialize the transport.

        Args:
            url: WebSocket endpoint (ws:// or wss://)
            reconnect_delay: Seconds between reopen attempts
            host: Virtual host sent in the CONNECT frame (default: URL host)
        """
        self._url = url
        self._reconnect_delay = reconnect_delay
        self._host = host or urlparse(url).hostname or "localhost"
        self._listener: TransportListener | None = None
        self._task: asyncio.Task[None] | None = None
        self._ws: ClientConnection | None = None
        self._active = False
        self._connected = False
        self._subscriptions: dict[str, MessageHandler] = {}
        self._subscription_ids = itertools.count()
        self._sends: set[asyncio.Task[None]] = set()

    @property
    def url(self) -> str:
        return self._url

    @property
    def connected(self) -> bool:
        return self._connected

    def activate(self, listener: TransportListener) -> None:
        if self._active:
            return
        loop = asyncio.get_running_loop()
        self._listener = listener
        self._active = True
        self._task = loop.create_task(self._run())

    def deactivate(self) -> None:
        self._active = False
        self._connected = False
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def subscribe(self, destination: str, handler: MessageHandler) -> str:
        if not self._connected:
            raise TransportConnectionError("Cannot subscribe: transport is not connected")

        sub_id = f"sub-{next(self._subscription_ids)}"
        self._subscriptions[sub_id] = handler
        self._send(StompFrame("SUBSCRIBE", {
            "id": sub_id,
            "destination": destination,
        }))
        logger.debug("Subscribed %s to %s", sub_id, destination)
        return sub_id

    def publish(self, destination: str, body: str) -> None:
        if not self._connected:
            raise PublishError("Cannot publish: transport is not connected")

        self._send(StompFrame("SEND", {
            "destination": destination,
            "content-type": "application/json",
        }, body))

    def _send(self, frame: StompFrame) -> None:
        """Schedule a frame for sending without awaiting it."""
        if self._ws is None:
            raise PublishError("No open socket")

        task = asyncio.get_running_loop().create_task(self._ws.send(frame.encode()))
        self._sends.add(task)
        task.add_done_callback(self._send_done)

    def _send_done(self, task: asyncio.Task[None]) -> None:
        self._sends.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Failed to send frame: %s", exc)

    async def _run(self) -> None:
        """Keep a session open until deactivated."""
        while self._active:
            error: Exception | None = None
            try:
                await self._session()
            except asyncio.CancelledError:
                raise
            except TransportConnectionError as exc:
                error = exc
            except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
                error = TransportConnectionError(f"{type(exc).__name__}: {exc}")
            except Exception as exc:
                logger.exception("Unexpected failure in transport session")
                error = TransportConnectionError(f"{type(exc).__name__}: {exc}")

            if not self._active:
                break

            if error is not None:
                logger.warning("Transport to %s closed: %s", self._url, error)
            else:
                logger.info("Transport to %s closed by server", self._url)
            if self._listener is not None:
                self._listener.transport_closed(self, error)

            logger.debug("Reconnecting in %.1fs", self._reconnect_delay)
            await asyncio.sleep(self._reconnect_delay)

    async def _session(self) -> None:
        """Open one socket, complete the STOMP handshake and pump frames."""
        async with connect(self._url, subprotocols=STOMP_SUBPROTOCOLS) as ws:
            self._ws = ws
            try:
                await ws.send(StompFrame("CONNECT", {
                    "accept-version": "1.2,1.1,1.0",
                    "host": self._host,
                    "heart-beat": "0,0",
                }).encode())
                await asyncio.wait_for(self._await_connected(ws), HANDSHAKE_TIMEOUT)

                self._subscriptions.clear()
                self._connected = True
                logger.info("Transport connected to %s", self._url)
                if self._listener is not None:
                    self._listener.transport_connected(self)

                async for message in ws:
                    try:
                        frames = parse_frames(message)
                    except StompProtocolError as e:
                        logger.warning("Dropping malformed message: %s", e)
                        continue
                    for frame in frames:
                        self._dispatch(frame)
            finally:
                self._connected = False
                self._ws = None
                if not self._active:
                    # Cancelled by deactivate(): say goodbye politely
                    try:
                        await ws.send(StompFrame("DISCONNECT").encode())
                    except WebSocketException:
                        pass

    async def _await_connected(self, ws: ClientConnection) -> None:
        while True:
            for frame in parse_frames(await ws.recv()):
                if frame.command == "CONNECTED":
                    return
                if frame.command == "ERROR":
                    raise TransportConnectionError(
                        frame.headers.get("message", "STOMP ERROR frame during handshake")
                    )
                raise TransportConnectionError(
                    f"Unexpected {frame.command} frame during handshake"
                )

    def _dispatch(self, frame: StompFrame) -> None:
        if frame.command == "MESSAGE":
            handler = self._subscriptions.get(frame.headers.get("subscription", ""))
            if handler is None:
                logger.debug("Dropping frame for unknown subscription: %s", frame.headers)
                return
            try:
                handler(frame.body)
            except Exception:
                logger.exception(
                    "Handler for %s failed", frame.headers.get("subscription")
                )
        elif frame.command == "ERROR":
            raise TransportConnectionError(frame.headers.get("message", "STOMP ERROR frame"))
        elif frame.command == "RECEIPT":
            logger.debug("Receipt %s", frame.headers.get("receipt-id"))
        else:
            logger.debug("Ignoring %s frame", frame.command)
