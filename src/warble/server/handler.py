"""ASGI handler — translates ASGI scope/messages to warble types.

The only component, besides the websocket connection, that touches raw
ASGI directly. Converts scope dicts to typed Request objects, dispatches
through middleware and routing, and sends the Response back through
ASGI send().
"""

import contextlib
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from warble._internal.asgi import (
    WS_CLOSE,
    WS_HTTP_RESPONSE_BODY,
    WS_HTTP_RESPONSE_EXT,
    WS_HTTP_RESPONSE_START,
    Receive,
    Scope,
    Send,
)
from warble._internal.invoke import invoke
from warble.errors import HTTPError
from warble.http.request import Request
from warble.http.response import Response
from warble.middleware.protocol import Next
from warble.middleware.static import StaticFiles
from warble.realtime.websocket import CLOSE_INTERNAL_ERROR
from warble.routing.route import RouteMatch
from warble.routing.router import Router
from warble.server.errors import handle_http_error, handle_internal_error
from warble.server.negotiation import negotiate
from warble.server.sender import encode_headers, send_response

logger = logging.getLogger("warble.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: dict[int | type, Callable[..., Any]],
    static: StaticFiles | None = None,
    debug: bool = False,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        # Innermost handler: routes first, then static files, then the fallback
        async def dispatch(req: Request) -> Response:
            match = router.dispatch(req.method, req.path)
            if not match.found and static is not None:
                served = static.lookup(req.method, req.path)
                if served is not None:
                    return served
            return await _invoke_handler(match, req)

        # Wrap middleware around the dispatch
        handler = dispatch
        for mw in reversed(middleware):
            outer = handler

            async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
                return await _mw(req, _next)

            handler = make_next

        response = await handler(request)

    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    await send_response(response, send, head=request.method == "HEAD")


async def handle_websocket(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
) -> None:
    """Route a websocket handshake to its handler.

    The handshake is an HTTP ``GET``, so it is dispatched like one. A
    handler that upgrades owns the connection until its session ends.
    If no upgrade happened, the handshake is refused: with the handler's
    response when the server supports ``websocket.http.response``,
    otherwise with a close before accept.
    """
    request = Request.from_asgi(scope, receive, send)
    match = router.dispatch("GET", request.path)

    try:
        result = await _invoke_raw(match, request)
        if "connection" in request._cache:
            return
        response = None if result is None else negotiate(result)
    except Exception:
        logger.exception("websocket handler failed for %s", request.path)
        connection = request._cache.get("connection")
        if connection is not None:
            await connection.close(CLOSE_INTERNAL_ERROR)
            return
        response = Response(body="Internal Server Error", status=500)

    logger.debug("refusing websocket handshake for %s", request.path)
    await _deny(response, send, request.extensions)


async def _deny(response: Response | None, send: Send, extensions: dict[str, Any]) -> None:
    """Refuse a websocket handshake that was never accepted.

    ``None`` means the handler aborted without an answer: close before accept.
    """
    # The peer may already be gone; there is nobody left to tell
    with contextlib.suppress(Exception):
        if response is not None and WS_HTTP_RESPONSE_EXT in extensions:
            body = response.body_bytes
            await send(
                {
                    "type": WS_HTTP_RESPONSE_START,
                    "status": response.status,
                    "headers": encode_headers(response, body),
                }
            )
            await send({"type": WS_HTTP_RESPONSE_BODY, "body": body})
        else:
            await send({"type": WS_CLOSE, "code": 1000})


async def _invoke_raw(match: RouteMatch, request: Request) -> Any:
    """Call the matched handler with the request, path params attached."""
    if match.path_params:
        request = replace(request, path_params=match.path_params)
    return await invoke(match.route.handler, request)


async def _invoke_handler(match: RouteMatch, request: Request) -> Response:
    """Call the matched route handler and convert its return value."""
    return negotiate(await _invoke_raw(match, request))
