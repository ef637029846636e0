"""Pure parsing functions for Artha pool/position data — no I/O."""
from __future__ import annotations

import logging
from decimal import Decimal, localcontext
from typing import Any

from ...models import Pool, Position

logger = logging.getLogger(__name__)

POSITION_ID_SEPARATOR = "-"

# uint256 needs 78 digits
_DEBT_PRECISION = 78


def parse_position_id(position_id: str) -> tuple[str, int]:
    """Split a position id into ``(pool_id, token_id)``.

    Examples:
        "0xabc-7" → ("0xabc", 7)

    Raises:
        ValueError: if the id does not have exactly two non-empty parts or
            the token id is not an integer.
    """
    parts = (position_id or "").split(POSITION_ID_SEPARATOR)
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Malformed position id: {position_id!r}")
    pool_id, token_id = parts
    return pool_id, int(token_id)


def _to_int(value: Any) -> int:
    """Parse an indexer BigInt (string or number) into an int."""
    if value is None or value == "":
        return 0
    if isinstance(value, int):
        return value
    return int(Decimal(str(value)))


def _to_str(value: Any) -> str:
    return "" if value is None else str(value)


def parse_pool(raw: dict[str, Any]) -> Pool:
    """Build a Pool from the indexer's camelCase pool object."""
    return Pool(
        id=_to_str(raw.get("id")),
        total_supply_shares=_to_int(raw.get("totalSupplyShares")),
        total_supply_assets=_to_int(raw.get("totalSupplyAssets")),
        total_borrow_shares=_to_int(raw.get("totalBorrowShares")),
        total_borrow_assets=_to_int(raw.get("totalBorrowAssets")),
        utilization_rate=_to_str(raw.get("utilizationRate", "0")),
        ltv=_to_str(raw.get("ltv", "0")),
        lth=_to_str(raw.get("lth", "0")),
        borrow_rate=_to_str(raw.get("borrowRate", "0")),
        lending_rate=_to_str(raw.get("lendingRate", "0")),
        oracle=_to_str(raw.get("oracle")),
        irm=_to_str(raw.get("irm")),
        loan_address=_to_str(raw.get("loanAddress")),
        collateral_address=_to_str(raw.get("collateralAddress")),
        loan_token=raw.get("loanToken"),
        collateral_token=raw.get("collateralToken"),
        curator=raw.get("curator"),
        transaction_hash=_to_str(raw.get("transactionHash")),
    )


def parse_position(raw: dict[str, Any]) -> Position:
    """Build a Position from one entry of the indexer's ``positions`` list."""
    account = raw.get("account") or {}
    return Position(
        id=_to_str(raw.get("id")),
        account=_to_str(account.get("id")),
        token_id=_to_str(raw.get("tokenId")),
        borrow_shares=_to_int(raw.get("borrowShares")),
        pool=parse_pool(raw.get("pool") or {}),
        token=raw.get("token"),
        bidder=raw.get("bidder"),
    )


def format_decimal(value: Decimal) -> str:
    """Plain decimal string: no exponent, no trailing zeros, ``-0`` → ``0``."""
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def calculate_debt(position: Position) -> str:
    """Outstanding debt from share-based accounting.

    debt = borrow_shares * total_borrow_assets / total_borrow_shares

    Multiplying first keeps whole-number debts exact.

    A pool with zero borrow shares has no outstanding debt.
    """
    total_shares = position.pool.total_borrow_shares
    if total_shares == 0:
        logger.warning(
            "Pool %s has zero totalBorrowShares; reporting zero debt for %s",
            position.pool.id,
            position.id,
        )
        return "0"

    with localcontext() as ctx:
        ctx.prec = _DEBT_PRECISION
        debt = (
            Decimal(position.borrow_shares)
            * Decimal(position.pool.total_borrow_assets)
            / Decimal(total_shares)
        )
        return format_decimal(debt)
