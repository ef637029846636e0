"""Error types raised by the scanner's fetchers and contract readers."""
from __future__ import annotations


class ScannerError(Exception):
    """Base class for scanner errors."""


class FetchError(ScannerError):
    """An upstream HTTP endpoint answered with a non-success status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


TransportError = FetchError


class DeserializationError(ScannerError):
    """A response body was not JSON or lacked the expected shape."""


class ContractCallError(ScannerError):
    """A read-only contract call failed."""

    def __init__(self, function_name: str, address: str, cause: BaseException) -> None:
        super().__init__(f"{function_name} on {address} failed: {cause}")
        self.function_name = function_name
        self.address = address
        self.cause = cause
