"""Warble exception hierarchy.

Shared across Router, App, handler, upgrader, and session so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class WarbleError(Exception):
    """Base for all warble-specific errors."""


class ConfigurationError(WarbleError):
    """Raised when app configuration is invalid.

    Typically raised during route registration or ``App._freeze()`` at startup.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WarbleError):
    """An error that maps directly to an HTTP status code.

    Raised by middleware or handlers. The ASGI handler catches these and
    dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class HandshakeError(WarbleError):
    """The request to an upgrade endpoint lacks valid websocket handshake semantics.

    ``reason`` names the missing piece (e.g. the ``Upgrade`` header).
    Callers answer with a 400 and must not create a connection.
    """

    def __init__(self, reason: str = "not a websocket handshake") -> None:
        super().__init__(reason)
        self.reason = reason


class UpgradeError(WarbleError):
    """Any other failure while upgrading a request to a websocket connection."""


class SessionIOError(WarbleError):
    """A receive or send failed on an established connection.

    Terminates the owning session only. ``code`` carries the close code
    when the peer closed the connection.
    """

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class SerializationError(WarbleError):
    """Route table introspection could not be serialized."""
