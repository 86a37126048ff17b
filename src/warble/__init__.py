"""Warble — a small ASGI service: routing, static files, websocket echo.

Basic usage::

    from warble import App

    app = App()

    @app.route("/")
    def index(request):
        return "hello world."

    app.run()

The ready-made service (greeting, ``/_`` route listing, ``/sock`` echo)::

    from warble import create_app

    create_app().run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "EchoSession",
    "HTTPError",
    "HandshakeError",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "Router",
    "WarbleError",
    "create_app",
    "upgrade",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warble`` fast while providing a clean top-level API.
    """
    if name == "App":
        from warble.app import App

        return App

    if name == "AppConfig":
        from warble.config import AppConfig

        return AppConfig

    if name == "Request":
        from warble.http.request import Request

        return Request

    if name == "Response":
        from warble.http.response import Response

        return Response

    if name == "Router":
        from warble.routing.router import Router

        return Router

    if name in ("Middleware", "Next"):
        from warble.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("EchoSession", "upgrade"):
        from warble import realtime as _rt

        return getattr(_rt, name)

    if name == "create_app":
        from warble.service import create_app

        return create_app

    if name in (
        "ConfigurationError",
        "HTTPError",
        "HandshakeError",
        "NotFound",
        "WarbleError",
    ):
        from warble import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
