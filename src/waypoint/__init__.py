"""Waypoint — ordered route table and dispatcher for small ASGI services.

Basic usage::

    from waypoint import App, json_response

    app = App()

    @app.get("/")
    def root(request, params):
        return "Hello world at root!"

    @app.get("/items/:id")
    def get_item(request, params):
        return json_response({"id": params["id"]})

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Handler",
    "HandlerFailure",
    "HandlerTimeout",
    "ListStore",
    "MalformedPatternError",
    "MalformedRequestBody",
    "NoRouteMatch",
    "Request",
    "Response",
    "Router",
    "WaypointError",
    "json_response",
    "text_response",
]

_ERRORS = frozenset(
    {
        "ConfigurationError",
        "HandlerFailure",
        "HandlerTimeout",
        "MalformedPatternError",
        "MalformedRequestBody",
        "NoRouteMatch",
        "WaypointError",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name == "App":
        from waypoint.app import App

        return App

    if name == "AppConfig":
        from waypoint.config import AppConfig

        return AppConfig

    if name == "Request":
        from waypoint.http.request import Request

        return Request

    if name in ("Response", "json_response", "text_response"):
        from waypoint.http import response as _resp

        return getattr(_resp, name)

    if name == "Router":
        from waypoint.routing.router import Router

        return Router

    if name == "Handler":
        from waypoint._internal.types import Handler

        return Handler

    if name == "ListStore":
        from waypoint.store import ListStore

        return ListStore

    if name in _ERRORS:
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
