"""Async test client for warble applications.

Uses the same Request and Response types as production.
No wrapper translation layer.
"""

import inspect
from typing import Any

from warble.app import App
from warble.http.response import Response
from warble.testing._scope import build_response, encode_headers, split_path
from warble.testing.websocket import WebSocketTestSession


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for warble applications.

    Returns the same ``Response`` type used in production. Sends requests
    through the ASGI interface directly — no sockets involved.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200

            async with client.websocket_connect("/sock") as ws:
                await ws.send_text("hi")
                assert await ws.receive() == "you wrote: hi"
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> "TestClient":
        self.app._ensure_frozen()
        for hook in self.app._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result
        return self

    async def __aexit__(self, *args: object) -> None:
        for hook in self.app._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a HEAD request."""
        return await self.request("HEAD", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        """Send a POST request."""
        extra_headers: dict[str, str] = {}
        request_body = body or b""

        if json is not None:
            import json as json_module

            request_body = json_module.dumps(json).encode("utf-8")
            extra_headers["content-type"] = "application/json"

        merged = {**extra_headers, **(headers or {})}
        return await self.request("POST", path, headers=merged, body=request_body)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send a PUT request."""
        return await self.request("PUT", path, headers=headers, body=body)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a DELETE request."""
        return await self.request("DELETE", path, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        path_part, query_string = split_path(path)
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": "http",
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string,
            "root_path": "",
            "headers": encode_headers(headers),
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        request_body = body or b""
        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)

        return build_response(response_status, response_headers, b"".join(response_body_parts))

    def websocket_connect(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        subprotocols: tuple[str, ...] = (),
        client: tuple[str, int] = ("127.0.0.1", 50000),
        http_response_extension: bool = True,
    ) -> WebSocketTestSession:
        """Open a websocket session against *path*.

        Use as an async context manager. ``http_response_extension=False``
        simulates a server without the ``websocket.http.response``
        extension, so refused handshakes surface as a close.
        """
        return WebSocketTestSession(
            self.app,
            path,
            headers=headers,
            subprotocols=subprotocols,
            client=client,
            http_response_extension=http_response_extension,
        )
