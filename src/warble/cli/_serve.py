"""``warble serve`` — run the built-in service."""

import argparse
from dataclasses import replace

from warble.config import AppConfig
from warble.service import create_app


def config_from_args(args: argparse.Namespace) -> AppConfig:
    """Build an AppConfig with CLI flags overriding the defaults."""
    config = AppConfig(log_level=args.log_level)
    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.no_static:
        overrides["static_dir"] = None
    elif args.assets is not None:
        overrides["static_dir"] = args.assets
    if args.idle_timeout is not None:
        overrides["ws_idle_timeout"] = args.idle_timeout
    return replace(config, **overrides)


def serve(args: argparse.Namespace) -> None:
    app = create_app(config_from_args(args))
    app.run()
