"""Source protocols: off-chain data the scanner joins against."""
from typing import Protocol

from ..models import NftMetadata, Position


class PositionSource(Protocol):
    """Abstract interface for fetching lending positions."""

    async def fetch_positions(self) -> list[Position]: ...


class NftSource(Protocol):
    """Abstract interface for fetching owned-NFT metadata."""

    async def fetch_owned_nfts(self) -> list[NftMetadata]: ...
