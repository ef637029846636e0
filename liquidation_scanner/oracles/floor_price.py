"""On-chain floor price oracle."""
import logging

from ..chains.evm import ReadResult
from ..chains.evm.abi import ORACLE_ABI
from ..interfaces.chain import ContractReader

logger = logging.getLogger(__name__)


class FloorPriceOracle:
    """Read a collateral token's floor price from its pool oracle."""

    def __init__(self, reader: ContractReader) -> None:
        self._reader = reader

    async def fetch_floor_price(self, oracle_address: str, token_id: int) -> ReadResult[int]:
        """Return the oracle's ``getPrice(token_id)`` as an exact integer."""
        result = await self._reader.read(oracle_address, ORACLE_ABI, "getPrice", token_id)
        if not result.ok:
            logger.warning("Error fetching price: %s", result.error)
            return result
        return ReadResult.success(int(result.value))
