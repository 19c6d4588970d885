"""Route, PathSegment, and RouteMatch frozen dataclasses."""

from dataclasses import dataclass, field

from waypoint._internal.types import Handler

# Verbs accepted at registration time
HTTP_METHODS: frozenset[str] = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"}
)


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:      ``/items``  (is_param=False)
    Placeholder:  ``/:id``    (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route descriptor: method + parsed pattern + handler."""

    method: str
    pattern: str
    segments: tuple[PathSegment, ...]
    handler: Handler = field(compare=False)
    name: str | None = None

    @property
    def param_names(self) -> tuple[str, ...]:
        """Placeholder names in pattern order."""
        return tuple(s.param_name for s in self.segments if s.param_name is not None)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
