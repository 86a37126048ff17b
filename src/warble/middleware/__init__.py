"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in pieces:
    AccessLog -- One log line per HTTP request
    StaticFiles -- File lookup under a root directory (consulted after routing)
"""

from warble.middleware.access import AccessLog
from warble.middleware.protocol import Middleware, Next
from warble.middleware.static import StaticFiles

__all__ = [
    "AccessLog",
    "Middleware",
    "Next",
    "StaticFiles",
]
