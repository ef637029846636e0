"""Liquidatable-position scanner for an NFT-collateralised lending pool."""

__version__ = "0.1.0"
