"""
Inventory Service — Command Line Entry Point
==============================================

Usage:
    inventory-service --host 127.0.0.1 --port 3000 --cache ./cache
    python -m inventory_service -h 0.0.0.0 -p 8080 -c /var/cache/inventory

`-h` is the bind host, so help is only available as `--help`.
"""

import argparse
from typing import List, Optional

import uvicorn
from pydantic import ValidationError as SettingsValidationError

from inventory_service.config import Settings
from inventory_service.main import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory-service",
        description="Inventory tracking HTTP service",
        add_help=False,
    )
    parser.add_argument("-h", "--host", required=True, help="server host")
    parser.add_argument("-p", "--port", required=True, type=int, help="server port")
    parser.add_argument("-c", "--cache", required=True, help="cache directory for uploaded photos")
    parser.add_argument(
        "--log-level",
        default=None,
        help="logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    parser.add_argument(
        "--purge-photos-on-delete",
        action="store_true",
        default=None,
        help="remove an item's photo file when the item is deleted",
    )
    parser.add_argument("--help", action="help", help="show this help message and exit")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Build Settings from parsed arguments; unset optional flags fall back to the environment."""
    overrides = {"host": args.host, "port": args.port, "cache_dir": args.cache}
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.purge_photos_on_delete is not None:
        overrides["purge_photos_on_delete"] = args.purge_photos_on_delete
    return Settings(**overrides)


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = settings_from_args(args)
    except SettingsValidationError as e:
        parser.error(str(e))

    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
