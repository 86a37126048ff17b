"""Route, RouteMatch, and PathSegment frozen dataclasses."""

from dataclasses import dataclass, field

from warble._internal.types import Handler
from warble.routing.params import accepts

ANY_METHOD = "*"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route. Never mutated once it is in the route table."""

    method: str
    pattern: str
    handler: Handler
    name: str = ""
    segments: tuple[PathSegment, ...] = field(default=(), repr=False, compare=False)

    @property
    def is_literal(self) -> bool:
        """True when the pattern has no parameter segments."""
        return not any(seg.is_param for seg in self.segments)

    def matches_method(self, method: str) -> bool:
        """``*`` routes take every verb; ``HEAD`` falls back to ``GET`` routes."""
        if self.method in (ANY_METHOD, method):
            return True
        return method == "HEAD" and self.method == "GET"

    def match_path(self, path: str) -> dict[str, str] | None:
        """Return captured parameters when *path* matches, else ``None``.

        Literal patterns compare the whole path exactly.
        """
        if self.is_literal:
            return {} if path == self.pattern else None

        parts = [p for p in path.strip("/").split("/") if p]
        params: dict[str, str] = {}
        for index, seg in enumerate(self.segments):
            if seg.is_param and seg.param_type == "path":
                remaining = "/".join(parts[index:])
                if not remaining:
                    return None
                params[seg.param_name or "path"] = remaining
                return params
            if index >= len(parts):
                return None
            part = parts[index]
            if seg.is_param:
                if not accepts(part, seg.param_type):
                    return None
                params[seg.param_name or ""] = part
            elif part != seg.value:
                return None
        if len(parts) != len(self.segments):
            return None
        return params


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of dispatch.

    ``found`` is False when no registered route matched and ``route``
    is the router's fallback.
    """

    route: Route
    path_params: dict[str, str]
    found: bool = True
