"""Waypoint CLI — serve an app or list its route table.

Entry point registered as ``waypoint`` in ``pyproject.toml``::

    [project.scripts]
    waypoint = "waypoint.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypoint`` command."""
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Waypoint — ordered route table and dispatcher for small ASGI services.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypoint run -----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect; ignored with --reload)",
    )
    run_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on source changes (development)",
    )

    # -- waypoint routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes in match order")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from waypoint.cli._run import run_command

        run_command(args)
    elif args.command == "routes":
        from waypoint.cli._routes import run_routes

        run_routes(args)
