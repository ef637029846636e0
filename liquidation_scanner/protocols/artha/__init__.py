from .checker import LiquidationChecker

__all__ = ["LiquidationChecker"]
