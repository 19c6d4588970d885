"""Start a pounce ASGI server for a waypoint App.

Pounce's ``run()`` takes an import string (e.g. ``"myapp:app"``), but
``App.run()`` holds a live object, so ``pounce.Server`` is used directly
with the ASGI callable.

Requires the ``server`` extra (``pip install waypoint[server]``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from waypoint.errors import ConfigurationError

if TYPE_CHECKING:
    from waypoint.app import App

logger = logging.getLogger("waypoint.server")


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
    app_path: str | None = None,
) -> None:
    """Serve *app* on ``host:port`` until interrupted.

    Args:
        app: The waypoint App (already frozen by the caller).
        host: Bind address.
        port: Bind port.
        workers: Worker count; forced to 1 when *reload* is on.
        reload: Restart on source changes (development only).
        log_level: Server log level (debug, info, warning, error).
        app_path: Optional ``"module:attribute"`` string so reloads
            re-import the app instead of reusing the live object.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = (
            "Serving requires the pounce ASGI server. "
            "Install it with: pip install waypoint[server]"
        )
        raise ConfigurationError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
        log_level=log_level,
    )
    logger.info(
        "serving %d routes on http://%s:%d", len(app.routes), host, port
    )
    Server(config, app, app_path=app_path).run()
