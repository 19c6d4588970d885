"""``waypoint run`` — start the pounce server for an app."""

import argparse
import sys

from waypoint.cli._resolve import resolve_app
from waypoint.errors import ConfigurationError


def run_command(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it. CLI flags override ``app.config``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app._ensure_frozen()

    from waypoint.server.serve import run_server

    reload = args.reload or app.config.debug
    try:
        run_server(
            app,
            args.host or app.config.host,
            args.port if args.port is not None else app.config.port,
            workers=args.workers if args.workers is not None else app.config.workers,
            reload=reload,
            log_level=app.config.log_level,
            app_path=args.app if reload else None,
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
