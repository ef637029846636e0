from .client import EvmClient, ReadResult

__all__ = ["EvmClient", "ReadResult"]
