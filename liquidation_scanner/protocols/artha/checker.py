"""Liquidatability checks against the Artha lending pool contract."""
from __future__ import annotations

import logging

from ...chains.evm import ReadResult
from ...chains.evm.abi import LENDING_POOL_ABI
from ...errors import ContractCallError
from ...interfaces.chain import ContractReader
from ...models import Position
from .parser import parse_position_id

logger = logging.getLogger(__name__)


class LiquidationChecker:
    """Ask the lending pool whether a position is in its unhealthy list."""

    def __init__(self, reader: ContractReader, lending_pool_address: str) -> None:
        self._reader = reader
        self._pool_address = lending_pool_address

    async def is_liquidatable(self, position: Position) -> ReadResult[bool]:
        try:
            pool_id, token_id = parse_position_id(position.id)
        except ValueError as e:
            error = ContractCallError("unhealthyList", self._pool_address, e)
            logger.warning("Error checking liquidatable status: %s", error)
            return ReadResult.failure(error)

        result = await self._reader.read(
            self._pool_address, LENDING_POOL_ABI, "unhealthyList", pool_id, token_id
        )
        if not result.ok:
            logger.warning("Error checking liquidatable status: %s", result.error)
            return result

        status = bool(result.value)
        if status:
            logger.info("Position %s is liquidatable", position.id)
        else:
            logger.debug("Position %s is healthy", position.id)
        return ReadResult.success(status)
