"""``warble routes`` — list registered routes.

Prints METHOD, PATH, NAME and handler for every route, in match order.
"""

import argparse
import sys

from warble.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Resolve ``args.app``, freeze it, and print its route table."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app._ensure_frozen()
    routes = app.router.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [
        (route.method, route.pattern, route.name, getattr(route.handler, "__name__", "?"))
        for route in routes
    ]
    headers = ("METHOD", "PATH", "NAME", "HANDLER")
    widths = [max(len(header), *(len(row[i]) for row in rows)) for i, header in enumerate(headers)]
    fmt = "  ".join(f"{{:<{width}}}" for width in widths[:-1]) + "  {}"

    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 2 * (len(widths) - 1), 80))
    for row in rows:
        print(fmt.format(*row))
