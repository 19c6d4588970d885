"""Error responses and failure logging for the dispatcher.

Two fixed outcomes leave the dispatcher without a handler-produced
response: no route matched (404) and the handler failed (500). Both are
built here, together with the terminal output for failures.

Failure log verbosity is controlled by the ``WAYPOINT_TRACEBACK``
environment variable:

- ``compact`` (default): exception summary plus application frames
- ``full``: the complete Python traceback via ``logger.exception``
- ``minimal``: a single line with the raising location
"""

from __future__ import annotations

import logging
import os
import traceback
from typing import TYPE_CHECKING

from waypoint.http.response import Response, text_response

if TYPE_CHECKING:
    from waypoint.errors import HandlerFailure
    from waypoint.http.request import Request

logger = logging.getLogger("waypoint.server")

NOT_FOUND_BODY = "Not found"

# Frames shown in compact mode
_MAX_FRAMES = 5


def _is_app_frame(filename: str) -> bool:
    """True if the frame is application code (not stdlib/site-packages)."""
    if "site-packages" in filename or filename.startswith("<"):
        return False
    return not filename.startswith(os.path.dirname(os.__file__))


def format_compact_traceback(exc: BaseException) -> str:
    """Exception summary followed by the last few application frames."""
    frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    shown = [f for f in frames if _is_app_frame(f.filename)] or frames[-3:]

    lines = [f"{type(exc).__name__}: {exc}"]
    if shown:
        lines.append("  Trace (app frames):")
        for frame in shown[-_MAX_FRAMES:]:
            lines.append(f"    {frame.filename}:{frame.lineno} in {frame.name}")
            if frame.line:
                lines.append(f"      {frame.line.strip()}")
    return "\n".join(lines)


def format_minimal_error(exc: BaseException) -> str:
    """One-line summary: type, raising location, message."""
    frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    location = f" at {frames[-1].filename}:{frames[-1].lineno}" if frames else ""
    return f"{type(exc).__name__}{location}: {exc}"


def log_error(failure: HandlerFailure, request: Request) -> None:
    """Log a handler failure once, at ERROR, in the configured verbosity."""
    prefix = f"500 {request.method} {request.path} ({failure.route.name})"
    cause = failure.cause
    style = os.environ.get("WAYPOINT_TRACEBACK", "compact").lower()

    if style == "full":
        logger.error(prefix, exc_info=(type(cause), cause, cause.__traceback__))
    elif style == "minimal":
        logger.error("%s: %s", prefix, format_minimal_error(cause))
    else:
        logger.error("%s\n%s", prefix, format_compact_traceback(cause))


def not_found_response() -> Response:
    """The fixed 404 returned when no route matches."""
    return text_response(NOT_FOUND_BODY, status=404)


def internal_error_response(failure: HandlerFailure, *, debug: bool) -> Response:
    """Build the 500 response for a failed handler.

    In debug mode the body is the full Python traceback. That exposes
    file paths and source lines, so it is a development setting only;
    otherwise the body carries the exception type and message.
    """
    cause = failure.cause
    if debug:
        body = "".join(traceback.format_exception(cause))
    else:
        body = f"Internal Server Error: {type(cause).__name__}: {cause}"
    return text_response(body, status=500)
