"""Immutable request.

Frozen metadata with async body access. The same type describes plain
HTTP requests and websocket handshakes; ``scope_type`` tells them apart.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import Any

from warble._internal.asgi import Receive, Scope, Send, client_address
from warble.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request handed to route handlers as their only argument.

    Metadata (method, path, headers, etc.) is frozen at creation.
    Body is accessed asynchronously via ``.body()``, ``.text()``, ``.json()``.

    For websocket scopes the method is always ``GET`` (the handshake verb)
    and the ASGI ``receive``/``send`` pair is kept so the upgrader can
    take over the transport.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes
    path_params: dict[str, str]
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None
    scope_type: str = "http"
    subprotocols: tuple[str, ...] = ()
    extensions: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # Private: ASGI callables for the body and websocket upgrade
    _receive: Receive | None = field(default=None, repr=False, compare=False)
    _send: Send | None = field(default=None, repr=False, compare=False)

    # Private: mutable cache for the body and upgrade state
    # (dict contents are mutable even though the field reference is frozen)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def is_websocket(self) -> bool:
        """True if the server already performed a websocket handshake for this request."""
        return self.scope_type == "websocket"

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached: the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls. Websocket
        handshakes carry no body.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        if self.is_websocket:
            result = b""
        else:
            result = await self._read_body()
        self._cache["_body"] = result
        return result

    async def _read_body(self) -> bytes:
        if self._receive is None:
            return b""
        chunks: list[bytes] = []
        more_body = True
        while more_body:
            message = await self._receive()
            chunks.append(message.get("body", b""))
            more_body = message.get("more_body", False)
        return b"".join(chunks)

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as JSON."""
        raw = await self.body()
        return json_module.loads(raw)

    # -- Factory --

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        receive: Receive | None = None,
        send: Send | None = None,
        path_params: dict[str, str] | None = None,
    ) -> Request:
        """Create a Request from an ASGI ``http`` or ``websocket`` scope."""
        server = scope.get("server")
        return cls(
            method=scope.get("method", "GET").upper(),
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            path_params=path_params or {},
            http_version=scope.get("http_version", "1.1"),
            server=(server[0], server[1]) if server else None,
            client=client_address(scope),
            scope_type=scope["type"],
            subprotocols=tuple(scope.get("subprotocols", ())),
            extensions=dict(scope.get("extensions") or {}),
            _receive=receive,
            _send=send,
        )
