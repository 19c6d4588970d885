"""Shared type aliases and protocols used across waypoint modules."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, MutableMapping
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias

if TYPE_CHECKING:
    from waypoint.http.request import Request

# Raw ASGI types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


class Handler(Protocol):
    """A route handler.

    Called with the request and the placeholder bindings of the matched
    pattern. May be ``def`` or ``async def``; returns a ``Response`` or any
    value the dispatcher knows how to negotiate (str, bytes, dict, list,
    ``(value, status)`` tuples)::

        async def get_item(request: Request, params: Mapping[str, str]) -> Response:
            return json_response(store.get(params["id"]))
    """

    def __call__(self, request: Request, params: Mapping[str, str], /) -> Any: ...
