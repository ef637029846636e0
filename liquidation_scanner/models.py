"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Pool:
    """Lending-pool economic state as reported by the indexer."""

    id: str
    total_supply_shares: int
    total_supply_assets: int
    total_borrow_shares: int
    total_borrow_assets: int
    utilization_rate: str = "0"
    ltv: str = "0"
    lth: str = "0"
    borrow_rate: str = "0"
    lending_rate: str = "0"
    oracle: str = ""
    irm: str = ""
    loan_address: str = ""
    collateral_address: str = ""
    loan_token: dict[str, Any] | None = None
    collateral_token: dict[str, Any] | None = None
    curator: dict[str, Any] | None = None
    transaction_hash: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "utilizationRate": self.utilization_rate,
            "transactionHash": self.transaction_hash,
            "totalSupplyShares": str(self.total_supply_shares),
            "totalSupplyAssets": str(self.total_supply_assets),
            "totalBorrowShares": str(self.total_borrow_shares),
            "totalBorrowAssets": str(self.total_borrow_assets),
            "oracle": self.oracle,
            "ltv": self.ltv,
            "lth": self.lth,
            "loanToken": self.loan_token,
            "loanAddress": self.loan_address,
            "lendingRate": self.lending_rate,
            "irm": self.irm,
            "curator": self.curator,
            "collateralToken": self.collateral_token,
            "collateralAddress": self.collateral_address,
            "borrowRate": self.borrow_rate,
        }


@dataclass(frozen=True)
class Position:
    """A borrower's position; ``id`` encodes ``poolId-tokenId``."""

    id: str
    account: str
    token_id: str
    borrow_shares: int
    pool: Pool
    token: dict[str, Any] | None = None
    bidder: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "account": {"id": self.account},
            "pool": self.pool.to_dict(),
            "token": self.token,
            "tokenId": self.token_id,
            "bidder": self.bidder,
            "borrowShares": str(self.borrow_shares),
        }


@dataclass(frozen=True)
class NftMetadata:
    """Owned-NFT record returned by the NFT proxy."""

    contract_address: str
    token_id: str
    contract_name: str = ""
    contract_symbol: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> NftMetadata:
        contract = raw.get("contract") or {}
        return cls(
            contract_address=contract.get("address") or "",
            token_id=str(raw.get("tokenId", "")),
            contract_name=contract.get("name") or "",
            contract_symbol=contract.get("symbol") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "contract": {
                "address": self.contract_address,
                "name": self.contract_name,
                "symbol": self.contract_symbol,
            },
            "tokenId": self.token_id,
        }


@dataclass(frozen=True)
class LiquidationResult:
    """One liquidatable position joined with its NFT metadata and valuation."""

    position: Position
    nft: NftMetadata | None
    is_liquidatable: bool
    floor_price: str
    debt: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "nftData": self.nft.to_dict() if self.nft is not None else {},
            "isLiquidatableStatus": self.is_liquidatable,
            "position": self.position.to_dict(),
            "floorPrice": self.floor_price,
            "debt": self.debt,
        }
