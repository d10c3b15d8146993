"""Command-line access to the merged configuration.

Usage:
    python -m src.cascade_config get db.host
    python -m src.cascade_config --config-dir deploy/config --env NODE_ENV=production dump
    python -m src.cascade_config has features.beta && echo enabled
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import Dict, List, Optional

from src.cascade_config.config.facade import Config
from src.cascade_config.config.settings import LoaderSettings
from src.cascade_config.exceptions import CascadeConfigError, PropertyNotDefinedError
from src.cascade_config.utils.logging import configure_logging, disable_logging


def _parse_overrides(pairs: List[str]) -> Optional[Dict[str, str]]:
    if not pairs:
        return None
    overrides = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {pair!r}")
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cascade-config",
        description="Load the configuration cascade and query it.",
    )
    parser.add_argument("--config-dir", default=None, help="Configuration directory (default: config)")
    parser.add_argument(
        "--env",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override an environment variable (repeatable)",
    )
    parser.add_argument("--verbose", action="store_true", help="Emit JSON logs to stderr")

    commands = parser.add_subparsers(dest="command", required=True)
    get_cmd = commands.add_parser("get", help="Print the value at PATH as JSON")
    get_cmd.add_argument("path")
    has_cmd = commands.add_parser("has", help="Exit 0 if PATH is defined, 1 otherwise")
    has_cmd.add_argument("path")
    commands.add_parser("dump", help="Print the whole configuration as JSON")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(service_name="cascade-config", level=logging.DEBUG)
    else:
        disable_logging()

    try:
        overrides = _parse_overrides(args.env)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    settings = LoaderSettings(config_dir=args.config_dir) if args.config_dir else LoaderSettings()

    try:
        config = asyncio.run(Config.create(env=overrides, settings=settings))
    except CascadeConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.command == "has":
        return 0 if config.has(args.path) else 1

    if args.command == "get":
        try:
            value = config.get(args.path)
        except PropertyNotDefinedError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
    else:
        value = config.as_dict()

    print(json.dumps(value, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
