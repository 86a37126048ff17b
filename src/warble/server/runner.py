"""Serve a warble App with uvicorn.

Warble has a live ``App`` object rather than an import string, so the
ASGI callable is handed to uvicorn directly. Websocket support comes
from uvicorn's ``ws="auto"`` implementation selection.
"""

from typing import Any


def run_server(
    app: Any,
    host: str,
    port: int,
    *,
    log_level: str = "info",
    ws_max_size: int = 1_048_576,
    access_log: bool = False,
) -> None:
    """Start uvicorn with the given warble App. Blocks until shutdown.

    Args:
        app: ASGI callable (warble App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: uvicorn log level name.
        ws_max_size: Largest accepted websocket message, in bytes.
        access_log: Enable uvicorn's own access log (warble has ``AccessLog``).
    """
    import uvicorn

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=log_level,
        ws="auto",
        ws_max_size=ws_max_size,
        access_log=access_log,
        lifespan="on",
    )
