"""WebSocket upgrade and connection over ASGI.

``upgrade()`` turns a request whose handshake the server already
performed into an open ``Connection``. Plain HTTP requests fail with
``HandshakeError``; anything else that goes wrong fails with
``UpgradeError``. The connection wraps the ASGI ``receive``/``send``
pair and reports every transport failure as ``SessionIOError``.
"""

import contextlib
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from warble._internal.asgi import (
    WS_ACCEPT,
    WS_CLOSE,
    WS_CONNECT,
    WS_DISCONNECT,
    WS_RECEIVE,
    WS_SEND,
    Receive,
    Send,
)
from warble.errors import HandshakeError, SessionIOError, UpgradeError
from warble.http.request import Request

logger = logging.getLogger("warble.server")

# Close codes (RFC 6455 §7.4.1)
CLOSE_NORMAL = 1000
CLOSE_GOING_AWAY = 1001
CLOSE_NO_STATUS = 1005
CLOSE_INTERNAL_ERROR = 1011


class MessageKind(Enum):
    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True, slots=True)
class Message:
    """One unit of data on a connection.

    Text messages carry ``str`` payloads, binary messages ``bytes``.
    """

    kind: MessageKind
    payload: str | bytes

    @classmethod
    def text_message(cls, payload: str) -> "Message":
        return cls(MessageKind.TEXT, payload)

    @classmethod
    def binary_message(cls, payload: bytes) -> "Message":
        return cls(MessageKind.BINARY, payload)

    @property
    def text(self) -> str:
        """The payload rendered as text."""
        if isinstance(self.payload, bytes):
            return self.payload.decode("utf-8", errors="replace")
        return self.payload

    @property
    def data(self) -> bytes:
        """The payload as raw bytes."""
        if isinstance(self.payload, str):
            return self.payload.encode("utf-8")
        return self.payload


class ConnectionState(Enum):
    OPEN = "open"
    CLOSED = "closed"


class Connection:
    """An upgraded, bidirectional websocket connection.

    Owned by exactly one session. ``receive()`` and ``send()`` raise
    ``SessionIOError`` on any failure, including the peer closing.
    """

    __slots__ = ("_peer_closed", "_receive", "_send", "_state", "close_code", "remote")

    def __init__(
        self,
        receive: Receive,
        send: Send,
        *,
        remote: tuple[str, int] | None = None,
    ) -> None:
        self._receive = receive
        self._send = send
        self._state = ConnectionState.OPEN
        self._peer_closed = False
        self.close_code: int | None = None
        self.remote = remote

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is ConnectionState.OPEN

    async def receive(self) -> Message:
        """Block until the next message arrives."""
        if not self.is_open:
            raise SessionIOError("connection is closed")
        try:
            event = await self._receive()
        except Exception as exc:
            raise SessionIOError(f"receive failed: {exc}") from exc

        event_type = event.get("type")
        if event_type == WS_DISCONNECT:
            self._peer_closed = True
            code = event.get("code", CLOSE_NO_STATUS)
            self.close_code = code
            raise SessionIOError(f"peer closed the connection (code {code})", code=code)
        if event_type != WS_RECEIVE:
            raise SessionIOError(f"unexpected event {event_type!r}")

        text = event.get("text")
        if text is not None:
            return Message.text_message(text)
        return Message.binary_message(event.get("bytes") or b"")

    async def send(self, message: Message) -> None:
        """Send one message. No retry on failure."""
        if not self.is_open:
            raise SessionIOError("connection is closed")
        if message.kind is MessageKind.TEXT:
            event = {"type": WS_SEND, "text": message.text}
        else:
            event = {"type": WS_SEND, "bytes": message.data}
        try:
            await self._send(event)
        except Exception as exc:
            raise SessionIOError(f"send failed: {exc}") from exc

    async def close(self, code: int = CLOSE_NORMAL, reason: str = "") -> None:
        """Release the connection. Idempotent.

        Sends a close frame unless the peer already closed.
        """
        if self._state is ConnectionState.CLOSED:
            return
        self._state = ConnectionState.CLOSED
        if self._peer_closed:
            return
        self.close_code = code
        # The transport may already be gone; the session is over either way
        with contextlib.suppress(Exception):
            await self._send({"type": WS_CLOSE, "code": code, "reason": reason})


def handshake_problem(request: Request) -> str | None:
    """Describe why *request* is not a websocket opening handshake, or return ``None``."""
    headers = request.headers
    if request.method != "GET":
        return "request method is not GET"
    if "upgrade" not in headers.tokens("connection"):
        return "'upgrade' token not found in 'Connection' header"
    if "websocket" not in headers.tokens("upgrade"):
        return "'websocket' token not found in 'Upgrade' header"
    if "13" not in headers.tokens("sec-websocket-version"):
        return "websocket version 13 not found in 'Sec-WebSocket-Version' header"
    if not (headers.get("sec-websocket-key") or "").strip():
        return "'Sec-WebSocket-Key' header is missing or blank"
    return None


async def upgrade(request: Request, *, subprotocol: str | None = None) -> Connection:
    """Accept the websocket handshake carried by *request*.

    *subprotocol*, when given, must be one the client offered; it is
    echoed back in the accept.

    Raises:
        HandshakeError: The request is plain HTTP; no connection was created.
        UpgradeError: The transport misbehaved while accepting.
    """
    if not request.is_websocket:
        reason = handshake_problem(request) or "server did not upgrade the connection"
        raise HandshakeError(reason)

    receive, send = request._receive, request._send
    if receive is None or send is None:
        raise UpgradeError("request carries no websocket transport")
    if "connection" in request._cache:
        raise UpgradeError("request was already upgraded")

    try:
        event = await receive()
    except Exception as exc:
        raise UpgradeError(f"handshake receive failed: {exc}") from exc
    if event.get("type") != WS_CONNECT:
        raise UpgradeError(f"expected {WS_CONNECT!r}, got {event.get('type')!r}")

    if subprotocol is not None and subprotocol not in request.subprotocols:
        raise UpgradeError(f"client did not offer subprotocol {subprotocol!r}")

    accept: dict[str, Any] = {"type": WS_ACCEPT}
    if subprotocol is not None:
        accept["subprotocol"] = subprotocol
    try:
        await send(accept)
    except Exception as exc:
        raise UpgradeError(f"handshake accept failed: {exc}") from exc

    connection = Connection(receive, send, remote=request.client)
    request._cache["connection"] = connection
    logger.debug("upgraded %s for %s", request.path, request.client)
    return connection
