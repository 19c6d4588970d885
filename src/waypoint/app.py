"""Waypoint application class.

Mutable during setup (route registration). Frozen at runtime when
``app.run()`` or ``__call__()`` is first invoked.
"""

import logging
import threading
from collections.abc import Callable

from waypoint._internal.types import Handler, Receive, Scope, Send
from waypoint.config import AppConfig
from waypoint.errors import ConfigurationError
from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.routing.route import Route
from waypoint.routing.router import Router
from waypoint.server.dispatcher import Dispatcher
from waypoint.server.handler import handle_request

logger = logging.getLogger("waypoint.server")


class App:
    """The waypoint application.

    Routes are matched in the order they are registered::

        app = App()

        @app.get("/")
        def root(request, params):
            return "Hello world at root!"

        @app.get("/items/:id")
        async def get_item(request, params):
            return json_response(store.get(params["id"]))

    Patterns are parsed at registration, so a malformed pattern fails at
    import time rather than on the first request.

    Thread safety:
        Registration is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread builds the dispatcher, even when several ASGI workers call
        ``__call__()`` concurrently on the first request.
    """

    __slots__ = ("_dispatcher", "_freeze_lock", "_frozen", "_router", "config")

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router = Router()
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._dispatcher: Dispatcher | None = None

    # -- Route registration --

    def add_route(
        self,
        method: str,
        pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for *method* and *pattern*.

        Raises ``MalformedPatternError`` for unparseable patterns and
        ``ConfigurationError`` once the app is serving.
        """
        self._check_not_frozen()
        return self._router.register(method, pattern, handler, name=name)

    def route(
        self,
        method: str,
        pattern: str,
        *,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            method: HTTP verb (``"GET"``, ``"POST"``, ...).
            pattern: URL pattern. Use ``:param`` for placeholder segments.
            name: Optional display name (defaults to the function name).
        """

        def decorator(func: Handler) -> Handler:
            self.add_route(method, pattern, func, name=name)
            return func

        return decorator

    def get(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route("GET", pattern, name=name)

    def post(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route("POST", pattern, name=name)

    def put(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route("PUT", pattern, name=name)

    def patch(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route("PATCH", pattern, name=name)

    def delete(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route("DELETE", pattern, name=name)

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in match order."""
        return self._router.routes

    # -- Dispatch --

    async def dispatch(self, request: Request) -> Response:
        """Dispatch a Request without going through ASGI."""
        return await self._ensure_frozen().dispatch(request)

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the pounce server (single reloading worker when debug=True)."""
        self._ensure_frozen()

        from waypoint.server.serve import run_server

        run_server(
            self,
            host or self.config.host,
            port if port is not None else self.config.port,
            workers=self.config.workers,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, dispatcher=self._ensure_frozen())

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze at startup so the route table is fixed before any request."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> Dispatcher:
        """Thread-safe freeze with double-check locking."""
        if self._dispatcher is not None:
            return self._dispatcher
        with self._freeze_lock:
            if self._dispatcher is None:
                self._freeze()
        assert self._dispatcher is not None
        return self._dispatcher

    def _freeze(self) -> None:
        """Compile the route table and build the dispatcher.

        MUST only be called while holding _freeze_lock.
        """
        self._router.compile()
        self._dispatcher = Dispatcher(
            self._router,
            debug=self.config.debug,
            handler_timeout=self.config.handler_timeout,
        )
        self._frozen = True
        logger.debug("frozen with %d routes", len(self._router.routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes before calling app.run()."
            )
            raise ConfigurationError(msg)
