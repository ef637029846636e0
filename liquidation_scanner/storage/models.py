"""ORM models for persisted liquidation summaries."""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Liquidation(Base):
    __tablename__ = "liquidations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    address_ip: Mapped[str] = mapped_column(String(66), nullable=False)
    token_id: Mapped[str] = mapped_column(String(78), nullable=False)
    nft_name: Mapped[str] = mapped_column(String(255), default="")
    nft_symbol: Mapped[str] = mapped_column(String(64), default="")
    is_liquidatable_status: Mapped[bool] = mapped_column(Boolean, default=False)
    position_account: Mapped[str] = mapped_column(String(66), default="")
    loan_address: Mapped[str] = mapped_column(String(66), default="")
    # uint256 values, kept as decimal strings
    floor_price: Mapped[str] = mapped_column(String(80), default="0")
    debt: Mapped[str] = mapped_column(String(160), default="0")
    bidder: Mapped[str | None] = mapped_column(String(66), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        UniqueConstraint("address_ip", "token_id", name="uq_liquidations_address_ip_token_id"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "addressIP": self.address_ip,
            "nftName": self.nft_name,
            "nftSymbol": self.nft_symbol,
            "tokenId": self.token_id,
            "isLiquidatableStatus": self.is_liquidatable_status,
            "positionAccount": self.position_account,
            "loanAddress": self.loan_address,
            "floorPrice": self.floor_price,
            "debt": self.debt,
            "bidder": self.bidder,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
