"""Ordered route table with first-match-wins lookup.

Routes are matched in registration order, not by specificity. If
``GET /items/:id`` is registered before ``GET /items/latest``, the
placeholder route shadows the literal one. Register specific routes first.
"""

import logging

from waypoint._internal.types import Handler
from waypoint.errors import ConfigurationError, MalformedPatternError, NoRouteMatch
from waypoint.routing.route import HTTP_METHODS, PathSegment, Route, RouteMatch

logger = logging.getLogger("waypoint.routing")


def split_path(path: str) -> list[str]:
    """Split a concrete or pattern path on ``/``, keeping empty segments.

    ``"/"`` -> ``[""]``, ``"/items/"`` -> ``["items", ""]``. Keeping the
    trailing empty segment is what makes ``/items/`` and ``/items`` distinct.
    """
    return path.split("/")[1:]


def _parse_placeholder(pattern: str, part: str) -> str:
    """Return the placeholder name for ``:name`` or ``{name}`` segments."""
    name = part[1:] if part.startswith(":") else part[1:-1]
    if not name:
        raise MalformedPatternError(pattern, f"placeholder {part!r} has no name")
    if not name.isidentifier():
        raise MalformedPatternError(pattern, f"placeholder name {name!r} is not an identifier")
    return name


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into literal and placeholder segments.

    Examples::

        "/"            -> (PathSegment(""),)
        "/items"       -> (PathSegment("items"),)
        "/items/:id"   -> (PathSegment("items"), PathSegment(":id", is_param=True, param_name="id"))
        "/items/{id}"  -> same as above

    Raises ``MalformedPatternError`` when the pattern cannot be parsed.
    """
    if not pattern.startswith("/"):
        raise MalformedPatternError(pattern, "must start with '/'")

    parts = split_path(pattern)
    segments: list[PathSegment] = []
    seen: set[str] = set()

    for index, part in enumerate(parts):
        if not part and index != len(parts) - 1:
            raise MalformedPatternError(pattern, "empty segment ('//')")
        if part.startswith("<") and part.endswith(">"):
            raise MalformedPatternError(
                pattern, f"{part!r} uses <param> syntax; write :{part[1:-1]} instead"
            )

        if part.startswith(":") or (part.startswith("{") and part.endswith("}")):
            name = _parse_placeholder(pattern, part)
            if name in seen:
                raise MalformedPatternError(pattern, f"placeholder {name!r} appears twice")
            seen.add(name)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        elif "{" in part or "}" in part:
            raise MalformedPatternError(pattern, f"unbalanced braces in {part!r}")
        else:
            segments.append(PathSegment(value=part))

    return tuple(segments)


def _bind(segments: tuple[PathSegment, ...], parts: list[str]) -> dict[str, str] | None:
    """Compare pattern segments to concrete path parts; return bindings or None."""
    if len(segments) != len(parts):
        return None
    params: dict[str, str] = {}
    for segment, part in zip(segments, parts, strict=True):
        if segment.param_name is not None:
            params[segment.param_name] = part
        elif segment.value != part:
            return None
    return params


class Router:
    """Ordered route table.

    Usage::

        router = Router()
        router.register("GET", "/items", list_items)
        router.register("GET", "/items/:id", get_item)
        router.compile()
        match = router.match("GET", "/items/42")  # params == {"id": "42"}

    After ``compile()`` the table is read-only, so ``match`` can be called
    from any number of concurrent requests without locking.
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._compiled = False

    def register(
        self,
        method: str,
        pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> Route:
        """Parse *pattern* and append a route for *method*.

        Raises ``MalformedPatternError`` if the pattern cannot be parsed and
        ``ConfigurationError`` for verbs outside ``HTTP_METHODS``.
        """
        verb = method.upper()
        if verb not in HTTP_METHODS:
            msg = f"Unsupported HTTP method {method!r} for {pattern!r}"
            raise ConfigurationError(msg)
        route = Route(
            method=verb,
            pattern=pattern,
            segments=parse_pattern(pattern),
            handler=handler,
            name=name or getattr(handler, "__name__", None),
        )
        self.add(route)
        return route

    def add(self, route: Route) -> None:
        """Append a pre-built route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._routes.append(route)
        logger.debug("registered %s %s -> %s", route.method, route.pattern, route.name)

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route matching *method* and *path*, or ``None``.

        The method comparison is case-sensitive. Segment counts must agree
        exactly; a trailing slash is an extra (empty) segment. Placeholders
        bind whatever the concrete segment holds, including the empty string.
        """
        parts = split_path(path)
        for route in self._routes:
            if route.method != method:
                continue
            params = _bind(route.segments, parts)
            if params is not None:
                return RouteMatch(route=route, path_params=params)
        return None

    def resolve(self, method: str, path: str) -> RouteMatch:
        """Like ``match`` but raises ``NoRouteMatch`` instead of returning None."""
        result = self.match(method, path)
        if result is None:
            raise NoRouteMatch(method, path)
        return result
