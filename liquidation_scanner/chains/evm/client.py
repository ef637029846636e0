"""EVM RPC client for read-only contract calls."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from web3 import AsyncHTTPProvider, AsyncWeb3

from ...config import ChainConfig
from ...errors import ContractCallError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """Outcome of a contract read: either a value or the error that replaced it."""

    value: T | None = None
    error: ContractCallError | None = None

    @classmethod
    def success(cls, value: T) -> ReadResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ContractCallError) -> ReadResult[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: T) -> T:
        """Return the value, or ``default`` when the read failed."""
        if self.error is not None:
            return default
        return self.value  # type: ignore[return-value]


class EvmClient:
    """Issue view-function calls against a single chain endpoint."""

    def __init__(self, config: ChainConfig, web3: AsyncWeb3 | None = None) -> None:
        self.rpc_url = config.rpc_url
        self.chain_id = config.chain_id
        if web3 is None:
            web3 = AsyncWeb3(
                AsyncHTTPProvider(
                    config.rpc_url,
                    request_kwargs={"timeout": config.rpc_timeout},
                )
            )
        self._web3 = web3

    async def read(
        self,
        address: str,
        abi: list[dict[str, Any]],
        function_name: str,
        *args: Any,
    ) -> ReadResult[Any]:
        """Call ``function_name(*args)`` on ``address``; never raises."""
        try:
            contract = self._web3.eth.contract(
                address=AsyncWeb3.to_checksum_address(address), abi=abi
            )
            value = await getattr(contract.functions, function_name)(*args).call()
        except Exception as e:
            return ReadResult.failure(ContractCallError(function_name, address, e))

        logger.debug("%s(%s) on %s -> %r", function_name, args, address, value)
        return ReadResult.success(value)

    async def close(self) -> None:
        """Release the provider's HTTP session, if one was opened."""
        provider = self._web3.provider
        disconnect = getattr(provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()
