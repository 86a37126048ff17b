"""Route table introspection.

Serializes ``Router.list()`` as a JSON array of ``[method, pattern, name]``
arrays. A serialization failure never escapes: it is logged and the
response degrades to a 500 with an empty array.
"""

import json as json_module
import logging
from collections.abc import Callable, Iterable

from warble.errors import SerializationError
from warble.http.request import Request
from warble.http.response import APPLICATION_JSON, Response
from warble.routing.router import Router

logger = logging.getLogger("warble.server")


def serialize_routes(entries: Iterable[tuple[str, str, str]]) -> str:
    """Encode route triples as JSON. Raises ``SerializationError`` on bad data."""
    try:
        return json_module.dumps([[method, pattern, name] for method, pattern, name in entries])
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"route table is not serializable: {exc}") from exc


def describe_routes(router: Router) -> Response:
    """Build the introspection response for *router*."""
    try:
        body = serialize_routes(router.list())
    except SerializationError:
        logger.exception("route introspection failed")
        return Response(body="[]", status=500, content_type=APPLICATION_JSON)
    return Response(body=body, content_type=APPLICATION_JSON)


def introspection_handler(router: Router) -> Callable[[Request], Response]:
    """Return a route handler that serves *router*'s table.

    Usage::

        app.route("/_")(introspection_handler(app.router))
    """

    def list_routes(request: Request) -> Response:
        return describe_routes(router)

    return list_routes
