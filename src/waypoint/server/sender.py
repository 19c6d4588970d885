"""ASGI response sending — translates a waypoint Response to ASGI messages."""

from waypoint._internal.types import Send
from waypoint.errors import ConfigurationError
from waypoint.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC 9110: 1xx, 204, and 304 responses carry no content.
    return not (100 <= status < 200 or status in {204, 304})


def encode_headers(response: Response, content_length: int) -> list[tuple[bytes, bytes]]:
    """Encode the response headers for ASGI.

    Raises ``ConfigurationError`` when a header name or value (including the
    content type) cannot be encoded as latin-1.
    """
    pairs = [
        ("content-type", response.content_type),
        ("content-length", str(content_length)),
        *((name.lower(), value) for name, value in response.headers),
    ]
    try:
        return [(name.encode("latin-1"), value.encode("latin-1")) for name, value in pairs]
    except UnicodeEncodeError as exc:
        bad = exc.object
        msg = f"Response header {bad!r} is not latin-1 encodable"
        raise ConfigurationError(msg) from exc


async def send_response(response: Response, send: Send) -> None:
    """Emit one ``http.response.start`` and one complete ``http.response.body``."""
    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers = encode_headers(response, len(body))

    await send({"type": "http.response.start", "status": response.status, "headers": raw_headers})
    await send({"type": "http.response.body", "body": body})
