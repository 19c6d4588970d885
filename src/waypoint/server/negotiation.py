"""Content negotiation — maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

from typing import Any

from waypoint.errors import ConfigurationError
from waypoint.http.response import Response, json_response, text_response


def negotiate(value: Any) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``                -> pass through, untouched
    2. ``str``                     -> 200, text/plain
    3. ``bytes``                   -> 200, application/octet-stream
    4. ``dict`` / ``list`` / None  -> 200, application/json
    5. ``(value, int)``            -> negotiate value, override status
    6. ``(value, int, dict)``      -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case str():
            return text_response(value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list() | None:
            return json_response(value)
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Handler returned {type(value).__name__}, which cannot be turned "
                "into a response. Return a Response, str, bytes, dict, or list."
            )
            raise ConfigurationError(msg)
