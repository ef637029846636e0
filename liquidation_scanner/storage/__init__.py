from .liquidations import LiquidationStore
from .models import Base, Liquidation

__all__ = ["Base", "Liquidation", "LiquidationStore"]
