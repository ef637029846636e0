"""Liquidation scan orchestration: positions × NFT metadata × on-chain state."""
from __future__ import annotations

import logging

from ..config import AppConfig
from ..chains.evm import EvmClient
from ..indexers import NftProxyClient, SubgraphClient
from ..interfaces.chain import ContractReader
from ..interfaces.sources import NftSource, PositionSource
from ..models import LiquidationResult, NftMetadata, Position
from ..oracles import FloorPriceOracle
from ..protocols.artha import LiquidationChecker
from ..protocols.artha.parser import calculate_debt

logger = logging.getLogger(__name__)

# Defaults applied when a contract read fails.
UNREADABLE_STATUS = False
UNREADABLE_PRICE = 0


class LiquidationScanner:
    """Finds liquidatable positions and assembles their summary records."""

    def __init__(
        self,
        positions: PositionSource,
        nfts: NftSource,
        checker: LiquidationChecker,
        oracle: FloorPriceOracle,
    ) -> None:
        self._positions = positions
        self._nfts = nfts
        self._checker = checker
        self._oracle = oracle

    @classmethod
    def from_config(
        cls, config: AppConfig, reader: ContractReader | None = None
    ) -> LiquidationScanner:
        """Wire the production clients from configuration."""
        if reader is None:
            reader = EvmClient(config.chain)
        return cls(
            positions=SubgraphClient(config.graphql),
            nfts=NftProxyClient(config.nft),
            checker=LiquidationChecker(reader, config.chain.lending_pool_address),
            oracle=FloorPriceOracle(reader),
        )

    @staticmethod
    def _match_nft(position: Position, nfts: list[NftMetadata]) -> NftMetadata | None:
        for nft in nfts:
            if nft.token_id == position.token_id:
                return nft
        return None

    async def _evaluate(
        self, position: Position, nfts: list[NftMetadata]
    ) -> LiquidationResult | None:
        status = (await self._checker.is_liquidatable(position)).value_or(
            UNREADABLE_STATUS
        )
        if not status:
            return None

        price = (
            await self._oracle.fetch_floor_price(
                position.pool.oracle, int(position.token_id)
            )
        ).value_or(UNREADABLE_PRICE)

        return LiquidationResult(
            position=position,
            nft=self._match_nft(position, nfts),
            is_liquidatable=status,
            floor_price=str(price),
            debt=calculate_debt(position),
        )

    async def get_all_liquidatable(self) -> list[LiquidationResult]:
        """Return liquidatable positions in indexer order.

        Positions are checked one at a time; any error other than a contract
        read failure aborts the whole scan.
        """
        try:
            positions = await self._positions.fetch_positions()
            nfts = await self._nfts.fetch_owned_nfts()

            results: list[LiquidationResult] = []
            for position in positions:
                result = await self._evaluate(position, nfts)
                if result is not None:
                    results.append(result)
        except Exception as e:
            logger.error("Error fetching liquidatable positions: %s", e)
            raise

        logger.info(
            "Scan complete: %d of %d positions liquidatable",
            len(results),
            len(positions),
        )
        return results
