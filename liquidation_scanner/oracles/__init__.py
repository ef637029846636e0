from .floor_price import FloorPriceOracle

__all__ = ["FloorPriceOracle"]
