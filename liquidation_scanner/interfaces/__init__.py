"""Protocol interfaces for the liquidation scanner."""
from .chain import ContractReader
from .sources import NftSource, PositionSource

__all__ = ["ContractReader", "NftSource", "PositionSource"]
