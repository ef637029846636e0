"""Service modules"""
from .scanner import LiquidationScanner

__all__ = ["LiquidationScanner"]
