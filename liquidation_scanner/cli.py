"""Command-line interface for the liquidation scanner."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys

from aiohttp import web

from .api import create_app
from .chains.evm import EvmClient
from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .services import LiquidationScanner
from .storage import LiquidationStore


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="liquidation-scanner",
        description="Find and record liquidatable NFT-backed lending positions",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    serve_parser = sub.add_parser("serve", help="Run the HTTP endpoint")
    serve_parser.add_argument("--host", default=None, help="Bind address (overrides config)")
    serve_parser.add_argument(
        "--port", type=int, default=None, help="Bind port (overrides config)"
    )

    sub.add_parser("scan", help="Scan once, persist, and print the results")
    sub.add_parser("list", help="Print persisted liquidation records")
    sub.add_parser("init-db", help="Create the database schema")

    return parser


async def _build_app(config: AppConfig) -> web.Application:
    reader = EvmClient(config.chain)
    scanner = LiquidationScanner.from_config(config, reader=reader)
    store = LiquidationStore.from_config(config.database)
    await store.create_schema()

    async def _cleanup(_: web.Application) -> None:
        await reader.close()
        await store.close()

    return create_app(scanner, store, on_cleanup=_cleanup)


async def _scan(config: AppConfig) -> None:
    reader = EvmClient(config.chain)
    store = LiquidationStore.from_config(config.database)
    try:
        await store.create_schema()
        scanner = LiquidationScanner.from_config(config, reader=reader)
        results = await scanner.get_all_liquidatable()
        await store.upsert_liquidations(results)
        print(json.dumps([r.to_dict() for r in results], indent=2))
    finally:
        await reader.close()
        await store.close()


async def _list(config: AppConfig) -> None:
    store = LiquidationStore.from_config(config.database)
    try:
        rows = await store.get_all_liquidations()
        print(json.dumps([row.to_dict() for row in rows], indent=2))
    finally:
        await store.close()


async def _init_db(config: AppConfig) -> None:
    store = LiquidationStore.from_config(config.database)
    try:
        await store.create_schema()
    finally:
        await store.close()


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "serve":
        web.run_app(
            _build_app(config),
            host=args.host or config.server.host,
            port=args.port or config.server.port,
        )
    elif args.command == "scan":
        asyncio.run(_scan(config))
    elif args.command == "list":
        asyncio.run(_list(config))
    elif args.command == "init-db":
        asyncio.run(_init_db(config))


if __name__ == "__main__":
    main()
