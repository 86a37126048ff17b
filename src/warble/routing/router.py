"""Ordered router — first registered match wins.

Routes are registered during setup, in order, and frozen when the app
starts serving. After ``compile()`` the table is read-only, so dispatch
needs no locking.
"""

from warble._internal.types import Handler
from warble.errors import ConfigurationError
from warble.http.response import Response
from warble.routing.params import CONVERTERS
from warble.routing.route import ANY_METHOD, PathSegment, Route, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}" -> [PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [PathSegment("{path:path}", is_param=True, param_type="path")]
    """
    segments: list[PathSegment] = []
    parts = [part for part in path.strip("/").split("/") if part]
    for index, part in enumerate(parts):
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route pattern {path!r} uses <param> syntax. "
                "Warble expects {param} (e.g. /users/{id})."
            )
            raise ConfigurationError(msg)
        if not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(value=part))
            continue

        inner = part[1:-1]
        param_name, _, param_type = inner.partition(":")
        param_type = param_type or "str"
        if not param_name:
            msg = f"Route pattern {path!r} has an unnamed parameter."
            raise ConfigurationError(msg)
        if param_type not in CONVERTERS:
            msg = f"Route pattern {path!r} uses unknown converter {param_type!r}."
            raise ConfigurationError(msg)
        if param_type == "path" and index != len(parts) - 1:
            msg = f"Route pattern {path!r}: a path parameter must be the last segment."
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(value=part, is_param=True, param_name=param_name, param_type=param_type)
        )
    return segments


def _default_not_found(request: object) -> Response:
    return Response("Not Found", status=404)


class Router:
    """Ordered, append-only route table with a fallback handler.

    Usage::

        router = Router()
        router.register("GET", "/", index)
        router.register("GET", "/users/{id:int}", user, name="user")
        router.not_found(missing)
        router.compile()
        match = router.dispatch("GET", "/users/42")
    """

    __slots__ = ("_compiled", "_fallback", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._fallback = Route(ANY_METHOD, "", _default_not_found, name="not_found")
        self._compiled = False

    def register(self, method: str, pattern: str, handler: Handler, name: str = "") -> Route:
        """Append a route to the table and return it.

        Duplicate patterns are allowed; the earlier registration wins.
        """
        if not pattern:
            msg = "Route pattern must not be empty."
            raise ConfigurationError(msg)
        route = Route(
            method=method.upper(),
            pattern=pattern,
            handler=handler,
            name=name or "",
            segments=tuple(parse_path(pattern)),
        )
        self.add(route)
        return route

    def add(self, route: Route) -> None:
        """Append a prebuilt route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._routes.append(route)

    def not_found(self, handler: Handler) -> None:
        """Designate the handler invoked when no route matches."""
        if self._compiled:
            msg = "Cannot change the fallback handler after compilation."
            raise RuntimeError(msg)
        self._fallback = Route(ANY_METHOD, "", handler, name="not_found")

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def fallback(self) -> Route:
        """The route wrapping the not-found handler."""
        return self._fallback

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route matching *method* and *path*, or ``None``."""
        method = method.upper()
        for route in self._routes:
            if not route.matches_method(method):
                continue
            params = route.match_path(path)
            if params is not None:
                return RouteMatch(route=route, path_params=params)
        return None

    def dispatch(self, method: str, path: str) -> RouteMatch:
        """Resolve a request to a route; unmatched requests get the fallback.

        Never raises for an unknown path: ``found`` on the result tells
        the caller which outcome it got.
        """
        match = self.match(method, path)
        if match is None:
            return RouteMatch(route=self._fallback, path_params={}, found=False)
        return match

    def list(self) -> list[tuple[str, str, str]]:
        """Return ``(method, pattern, name)`` for every route, in registration order."""
        return [(route.method, route.pattern, route.name) for route in self._routes]
