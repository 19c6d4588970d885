"""Waypoint exception hierarchy.

Shared across Router, Dispatcher, App, and request body helpers so every
module raises and catches the same types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from waypoint.routing.route import Route


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when the route table or app setup is invalid.

    Typically surfaces at import time, while routes are being registered.
    """


class MalformedPatternError(ConfigurationError):
    """A route pattern could not be parsed into literal/placeholder segments.

    Fatal at startup: an app with a malformed pattern never starts serving.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Malformed route pattern {pattern!r}: {reason}")


class NoRouteMatch(WaypointError):  # noqa: N818
    """No registered route matches the request method and path."""

    def __init__(self, method: str, path: str) -> None:
        self.method = method
        self.path = path
        super().__init__(f"No route matches {method} {path!r}")


class MalformedRequestBody(WaypointError, ValueError):
    """The request body could not be decoded as expected (e.g. invalid JSON).

    Raised by ``Request.json()``. The dispatcher never interprets it;
    handlers catch it and answer with a 400-class response.
    """


class HandlerFailure(WaypointError):
    """An exception escaped a route handler.

    Wraps the original exception (``cause``) together with the route that
    was being served. The dispatcher converts it into a 500 response.
    """

    def __init__(self, route: Route, cause: BaseException) -> None:
        self.route = route
        self.cause = cause
        super().__init__(f"{route.method} {route.pattern} failed: {type(cause).__name__}: {cause}")


class HandlerTimeout(HandlerFailure):
    """A route handler did not finish within the configured timeout."""

    def __init__(self, route: Route, cause: BaseException, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(route, cause)
        self.args = (f"{route.method} {route.pattern} timed out after {timeout:g}s",)
