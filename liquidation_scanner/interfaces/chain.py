"""Contract reader protocol — read-only smart-contract calls."""
from typing import Any, Protocol

from ..chains.evm.client import ReadResult


class ContractReader(Protocol):
    """Abstract interface for view-function calls that never raise."""

    async def read(
        self, address: str, abi: list[dict[str, Any]], function_name: str, *args: Any
    ) -> ReadResult[Any]: ...
