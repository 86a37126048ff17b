"""The warble service: greeting, route introspection, and websocket echo.

Routes::

    GET /      "hello world."
    GET /_     route table as JSON
    GET /sock  websocket echo session

Unmatched paths fall through to the static root, then to
``"Dude, not found."``.
"""

import logging

from warble.app import App
from warble.config import AppConfig
from warble.errors import HandshakeError, UpgradeError
from warble.http.request import Request
from warble.http.response import Response
from warble.introspection import introspection_handler
from warble.realtime.session import EchoSession
from warble.realtime.websocket import upgrade

logger = logging.getLogger("warble.server")

GREETING = "hello world."
NOT_FOUND_BODY = "Dude, not found."
NOT_A_HANDSHAKE = "Not a websocket handshake"


def create_app(config: AppConfig | None = None) -> App:
    """Build the service app. Routes are registered here, before serving."""
    app = App(config)
    idle_timeout = app.config.ws_idle_timeout

    @app.route("/")
    def index(request: Request) -> str:
        return GREETING

    app.route("/_")(introspection_handler(app.router))

    @app.route("/sock")
    async def sock(request: Request) -> Response | None:
        try:
            connection = await upgrade(request)
        except HandshakeError as exc:
            logger.debug("rejected handshake on %s: %s", request.path, exc.reason)
            return Response(NOT_A_HANDSHAKE, status=400)
        except UpgradeError:
            logger.exception("websocket upgrade failed")
            return None

        await EchoSession(connection, idle_timeout=idle_timeout).run()
        return None

    @app.not_found
    def missing(request: Request) -> tuple[str, int]:
        return NOT_FOUND_BODY, 404

    return app
