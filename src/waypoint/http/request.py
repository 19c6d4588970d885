"""Incoming request handed to every route handler.

Built from the ASGI scope by ``Request.from_asgi``. Method, path and headers
are fixed at construction; the body is pulled from ``receive`` on first use.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

from waypoint._internal.types import Receive, Scope
from waypoint.errors import MalformedRequestBody
from waypoint.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """One HTTP request as seen by a handler.

    ``await request.json()`` is the usual way in; it raises
    ``MalformedRequestBody`` so handlers can answer 400 themselves.
    """

    method: str
    path: str
    query_string: str
    headers: Headers
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # ASGI receive channel; consumed by stream()
    _receive: Receive = field(repr=False, compare=False)

    # Private: per-request body cache (the dict is mutable, the field is not)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def url(self) -> str:
        """Path plus query string, as received."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    @property
    def query(self) -> dict[str, list[str]]:
        """Query string parsed into name -> list of values."""
        return parse_qs(self.query_string, keep_blank_values=True)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    # -- Body --

    async def body(self) -> bytes:
        """Read the full request body.

        The ASGI receive channel is consumed once; later calls return the
        cached bytes.
        """
        if "_body" not in self._cache:
            self._cache["_body"] = b"".join([chunk async for chunk in self.stream()])
        return self._cache["_body"]

    async def stream(self) -> AsyncGenerator[bytes, None]:
        """Yield non-empty body chunks until the client says there are no more."""
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as UTF-8 text."""
        raw = await self.body()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Request body is not valid UTF-8: {exc}"
            raise MalformedRequestBody(msg) from exc

    async def json(self) -> Any:
        """Parse the body as JSON.

        Raises ``MalformedRequestBody`` for empty or invalid JSON.
        """
        raw = await self.text()
        try:
            return json_module.loads(raw)
        except json_module.JSONDecodeError as exc:
            msg = f"Request body is not valid JSON: {exc.msg}"
            raise MalformedRequestBody(msg) from exc

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Build a Request from an ``http`` scope."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            query_string=scope.get("query_string", b"").decode("latin-1"),
            headers=Headers(scope.get("headers", ())),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
