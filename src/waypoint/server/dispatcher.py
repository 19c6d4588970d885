"""Dispatcher — the single seam between requests and route handlers.

Matches a Request against the frozen Router, calls the bound handler with
``(request, params)``, and turns whatever happens into exactly one Response:

- no route          -> 404 ``Not found``
- handler returns   -> its Response, unchanged (other values negotiated)
- handler raises    -> 500 with diagnostics, logged once

Thread/task safety:
    ``dispatch`` reads the Router and creates per-request values only.
    Any number of requests may be dispatched concurrently.
"""

import logging
from collections.abc import Mapping

import anyio

from waypoint._internal.invoke import invoke
from waypoint.errors import HandlerFailure, HandlerTimeout, NoRouteMatch
from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.routing.route import Route
from waypoint.routing.router import Router
from waypoint.server.errors import internal_error_response, log_error, not_found_response
from waypoint.server.negotiation import negotiate
from waypoint.server.sender import encode_headers

logger = logging.getLogger("waypoint.server")


class Dispatcher:
    """Route a request to its handler behind one error boundary.

    Usage::

        dispatcher = Dispatcher(router, debug=False, handler_timeout=5.0)
        response = await dispatcher.dispatch(request)
    """

    __slots__ = ("debug", "handler_timeout", "router")

    def __init__(
        self,
        router: Router,
        *,
        debug: bool = False,
        handler_timeout: float | None = None,
    ) -> None:
        if not router.compiled:
            router.compile()
        self.router = router
        self.debug = debug
        self.handler_timeout = handler_timeout

    async def dispatch(self, request: Request) -> Response:
        """Translate *request* into a Response. Never raises ``Exception``.

        Cancellation (``BaseException``) is not caught; it propagates to the
        handler and the caller.
        """
        try:
            match = self.router.resolve(request.method, request.path)
        except NoRouteMatch as exc:
            logger.debug("404 %s", exc)
            return not_found_response()

        route = match.route
        try:
            result = await self._call(route, request, match.path_params)
            response = negotiate(result)
            # Unencodable headers must fail inside the boundary
            encode_headers(response, 0)
            return response
        except HandlerFailure as exc:
            failure = exc
        except Exception as exc:
            failure = HandlerFailure(route, exc)

        log_error(failure, request)
        return internal_error_response(failure, debug=self.debug)

    async def _call(self, route: Route, request: Request, params: Mapping[str, str]) -> object:
        timeout = self.handler_timeout
        if timeout is None:
            return await invoke(route.handler, request, params)

        # Only awaiting handlers can be interrupted; a blocking sync handler
        # runs to completion before the deadline is noticed.
        with anyio.move_on_after(timeout):
            return await invoke(route.handler, request, params)
        cause = TimeoutError(f"Handler did not finish within {timeout:g}s")
        raise HandlerTimeout(route, cause, timeout)
