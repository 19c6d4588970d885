"""``waypoint routes`` — print the route table in match order."""

import argparse
import sys

from waypoint.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATTERN, and HANDLER for every route, first match first."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [(route.method, route.pattern, route.name or repr(route.handler)) for route in routes]
    method_width = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    pattern_width = max(7, *(len(r[1]) for r in rows))  # "PATTERN" header

    fmt = f"{{:<{method_width}}}  {{:<{pattern_width}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "HANDLER"))
    print("-" * min(method_width + pattern_width + 4 + max(len(r[2]) for r in rows), 80))
    for row in rows:
        print(fmt.format(*row))
