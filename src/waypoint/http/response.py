"""Outgoing HTTP response value plus the two helpers handlers use most.

Handlers build a Response directly, call ``text_response`` or
``json_response``, or return a plain value for the dispatcher to negotiate.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

TEXT_PLAIN = "text/plain; charset=utf-8"
APPLICATION_JSON = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """Status, body, content type and extra headers of one reply.

    Frozen; the ``with_*`` methods copy::

        text_response("Item not found", status=404).with_header("Cache-Control", "no-store")
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = TEXT_PLAIN
    headers: tuple[tuple[str, str], ...] = ()

    # -- Copies with one field changed --

    def with_status(self, status: int) -> Response:
        """Copy with *status* replaced."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Copy with one more header pair appended."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Copy with every pair of *headers* appended."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_content_type(self, content_type: str) -> Response:
        """Copy with *content_type* replaced."""
        return replace(self, content_type=content_type)

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body encoded as UTF-8 (bytes bodies are returned as-is)."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    @property
    def json(self) -> Any:
        """Body parsed as JSON."""
        return json_module.loads(self.body_bytes)


def text_response(body: str, status: int = 200) -> Response:
    """Plain-text response (``text/plain; charset=utf-8``)."""
    return Response(body=body, status=status, content_type=TEXT_PLAIN)


def json_response(value: Any, status: int = 200) -> Response:
    """Serialize *value* to JSON (``None`` becomes ``null``)."""
    return Response(
        body=json_module.dumps(value, default=str),
        status=status,
        content_type=APPLICATION_JSON,
    )
