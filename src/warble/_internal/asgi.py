"""Typed ASGI definitions.

Aliases for the raw ASGI callables plus the event type names warble
sends and receives. Users never see these.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

# Raw ASGI 3.0 types
Scope: TypeAlias = MutableMapping[str, Any]
Message: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]

# WebSocket event types
WS_CONNECT = "websocket.connect"
WS_ACCEPT = "websocket.accept"
WS_RECEIVE = "websocket.receive"
WS_SEND = "websocket.send"
WS_DISCONNECT = "websocket.disconnect"
WS_CLOSE = "websocket.close"

# Denial response extension (server answers the handshake with an HTTP response)
WS_HTTP_RESPONSE_EXT = "websocket.http.response"
WS_HTTP_RESPONSE_START = "websocket.http.response.start"
WS_HTTP_RESPONSE_BODY = "websocket.http.response.body"


def client_address(scope: Scope) -> tuple[str, int] | None:
    """Return the ``(host, port)`` of the peer, if the server reported one."""
    client = scope.get("client")
    return (client[0], client[1]) if client else None
