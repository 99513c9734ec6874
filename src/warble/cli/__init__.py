"""Warble CLI: serve an engine or list its routes.

Entry point registered as ``warble`` in ``pyproject.toml``::

    [project.scripts]
    warble = "warble.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``warble`` command."""
    parser = argparse.ArgumentParser(
        prog="warble",
        description="Warble: a minimal HTTP routing shim for ASGI servers.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- warble run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve an engine")
    run_parser.add_argument(
        "engine",
        help="Import string (e.g. myapp:engine)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart when source files change",
    )

    # -- warble routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "engine",
        help="Import string (e.g. myapp:engine)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from warble.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from warble.cli._routes import run_routes

        run_routes(args)
