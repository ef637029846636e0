"""Logging configuration for the scanner process."""
from __future__ import annotations

import logging
import sys

_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

_NOISY_LOGGERS = ("aiohttp", "web3", "urllib3", "sqlalchemy.engine")


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger; unknown level names fall back to INFO."""
    resolved = getattr(logging, str(level).upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.INFO

    root = logging.getLogger()
    root.setLevel(resolved)

    if not any(getattr(h, "_scanner_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._scanner_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
