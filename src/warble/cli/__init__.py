"""Warble CLI — serve the built-in service, run any app, list routes.

Entry point registered as ``warble`` in ``pyproject.toml``::

    [project.scripts]
    warble = "warble.cli:main"
"""

import argparse
import logging
import sys

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``warble`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        from warble.cli._serve import serve

        serve(args)
    elif args.command == "run":
        from warble.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from warble.cli._routes import run_routes

        run_routes(args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="warble",
        description="Warble — routing, static files, and websocket echo over ASGI.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Logging level (default: info)",
    )

    # -- warble serve -----------------------------------------------------
    serve_parser = subparsers.add_parser(
        "serve", parents=[common], help="Serve the built-in echo service"
    )
    _add_bind_arguments(serve_parser)
    serve_parser.add_argument(
        "--assets",
        default=None,
        help="Static file root (default: ./assets)",
    )
    serve_parser.add_argument(
        "--no-static",
        action="store_true",
        help="Disable static file serving",
    )
    serve_parser.add_argument(
        "--idle-timeout",
        type=float,
        default=None,
        help="Close websocket sessions idle for this many seconds",
    )

    # -- warble run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", parents=[common], help="Serve a warble App")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    _add_bind_arguments(run_parser)

    # -- warble routes ----------------------------------------------------
    routes_parser = subparsers.add_parser(
        "routes", parents=[common], help="List registered routes"
    )
    routes_parser.add_argument(
        "app",
        nargs="?",
        default="warble.service:create_app",
        help="Import string (default: the built-in service)",
    )

    return parser


def _add_bind_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", default=None, help="Bind host address")
    parser.add_argument("--port", type=int, default=None, help="Bind port number")
