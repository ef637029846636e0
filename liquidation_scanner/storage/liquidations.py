"""Liquidation summary persistence: upsert keyed by (collateral address, token id)."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from ..config import DatabaseConfig
from ..models import LiquidationResult
from .models import Base, Liquidation, utcnow

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

_KEY_COLUMNS = ("address_ip", "token_id")


def liquidation_row(result: LiquidationResult) -> dict[str, Any]:
    """Flatten a scan result into column values, filling empty defaults."""
    nft = result.nft
    position = result.position
    return {
        "address_ip": (nft.contract_address if nft else "") or "",
        "token_id": position.token_id or "",
        "nft_name": (nft.contract_name if nft else "") or "",
        "nft_symbol": (nft.contract_symbol if nft else "") or "",
        "is_liquidatable_status": result.is_liquidatable,
        "position_account": position.account or "",
        "loan_address": position.pool.loan_address or "",
        "floor_price": result.floor_price or "0",
        "debt": result.debt or "0",
        "bidder": position.bidder or None,
        "updated_at": utcnow(),
    }


class LiquidationStore:
    """Async store for the ``liquidations`` table."""

    def __init__(self, engine: AsyncEngine) -> None:
        dialect = engine.dialect.name
        if dialect not in _INSERT_BY_DIALECT:
            raise ValueError(f"Unsupported database dialect for upsert: {dialect}")
        self._engine = engine
        self._insert = _INSERT_BY_DIALECT[dialect]
        self._sessions = async_sessionmaker(engine, expire_on_commit=False)

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> LiquidationStore:
        return cls(create_async_engine(config.url, echo=config.echo))

    async def create_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def _upsert_one(self, row: dict[str, Any]) -> None:
        update_values = {k: v for k, v in row.items() if k not in _KEY_COLUMNS}
        stmt = (
            self._insert(Liquidation)
            .values(**row)
            .on_conflict_do_update(index_elements=list(_KEY_COLUMNS), set_=update_values)
        )
        async with self._sessions.begin() as session:
            await session.execute(stmt)

    async def upsert_liquidations(self, results: list[LiquidationResult]) -> None:
        """Upsert every result concurrently, each in its own transaction.

        The first failure is raised; the remaining upserts are left to finish.
        """
        rows = [liquidation_row(r) for r in results]
        await asyncio.gather(*(self._upsert_one(row) for row in rows))
        logger.info("Upserted %d liquidation records", len(rows))

    async def get_all_liquidations(self) -> list[Liquidation]:
        async with self._sessions() as session:
            result = await session.execute(select(Liquidation).order_by(Liquidation.id))
            return list(result.scalars().all())

    async def close(self) -> None:
        await self._engine.dispose()
