"""HTTP surface: run a liquidation scan on demand and serve persisted rows."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable

from aiohttp import web

from ..services import LiquidationScanner
from ..storage import LiquidationStore

logger = logging.getLogger(__name__)

SCANNER_KEY = web.AppKey("scanner", LiquidationScanner)
STORE_KEY = web.AppKey("store", LiquidationStore)


def _error_response(error: BaseException, label: str) -> web.Response:
    return web.json_response(
        {
            "error": label,
            "details": str(error) or "Unknown error",
        },
        status=500,
    )


async def handle_auction(request: web.Request) -> web.Response:
    """Scan, persist the liquidatable positions, and return them."""
    scanner = request.app[SCANNER_KEY]
    store = request.app[STORE_KEY]
    try:
        results = await scanner.get_all_liquidatable()
        await store.upsert_liquidations(results)
    except Exception as e:
        logger.error("Detailed error: %s", e, exc_info=True)
        return _error_response(e, "Failed to fetch positions")

    return web.json_response([r.to_dict() for r in results], status=200)


async def handle_liquidations(request: web.Request) -> web.Response:
    store = request.app[STORE_KEY]
    try:
        rows = await store.get_all_liquidations()
    except Exception as e:
        logger.error("Detailed error: %s", e, exc_info=True)
        return _error_response(e, "Failed to fetch liquidations")

    return web.json_response([row.to_dict() for row in rows], status=200)


def create_app(
    scanner: LiquidationScanner,
    store: LiquidationStore,
    on_cleanup: Callable[[web.Application], Awaitable[None]] | None = None,
) -> web.Application:
    """Build the aiohttp application around already-constructed clients."""
    app = web.Application()
    app[SCANNER_KEY] = scanner
    app[STORE_KEY] = store
    app.router.add_get("/api/auction", handle_auction)
    app.router.add_get("/api/liquidations", handle_liquidations)
    if on_cleanup is not None:
        app.on_cleanup.append(on_cleanup)
    return app
