"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 7777
    workers: int = 1  # 0 = auto-detect from CPU count
    log_level: str = "info"

    # Development: full tracebacks in 500 bodies, reload on file changes.
    # Never enable in production; error bodies would leak source paths.
    debug: bool = False

    # Upper bound on a single handler invocation, in seconds (None = unbounded)
    handler_timeout: float | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Build a config from ``WAYPOINT_*`` environment variables.

        Unset variables fall back to the dataclass defaults::

            WAYPOINT_HOST=0.0.0.0 WAYPOINT_PORT=7777 python app.py
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        timeout = env.get("WAYPOINT_HANDLER_TIMEOUT")
        return cls(
            host=env.get("WAYPOINT_HOST", defaults.host),
            port=int(env.get("WAYPOINT_PORT", defaults.port)),
            workers=int(env.get("WAYPOINT_WORKERS", defaults.workers)),
            log_level=env.get("WAYPOINT_LOG_LEVEL", defaults.log_level).lower(),
            debug=env.get("WAYPOINT_DEBUG", "").lower() in _TRUTHY,
            handler_timeout=float(timeout) if timeout else defaults.handler_timeout,
        )
