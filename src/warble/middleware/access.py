"""Request logging middleware.

Logs one line per HTTP request on the ``warble.access`` logger::

    GET /_ 200 0.4ms
"""

import logging
import time

from warble.http.request import Request
from warble.http.response import Response
from warble.middleware.protocol import Next

logger = logging.getLogger("warble.access")


class AccessLog:
    """Middleware that logs method, path, status, and elapsed time.

    Usage::

        app.add_middleware(AccessLog())
    """

    __slots__ = ("_logger",)

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    async def __call__(self, request: Request, next: Next) -> Response:
        start = time.perf_counter()
        response = await next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        self._logger.info(
            "%s %s %d %.1fms", request.method, request.path, response.status, elapsed_ms
        )
        return response
