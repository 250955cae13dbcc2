"""
Logging setup for the storefront backend.

The root logger is configured once, on first import:

    from storefront.logging import get_logger
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from functools import cache


def _configure_root_logger() -> None:
    """Attach a stdout handler at LOG_LEVEL unless the host already did."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    # Vercel adds its own timestamps
    if os.environ.get("VERCEL") == "1":
        handler.setFormatter(logging.Formatter("%(levelname)s - %(name)s - %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root.addHandler(handler)

    # Upstash requests go through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _escape(value: str) -> str:
    """Neutralize characters that could forge extra log lines."""
    return value.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t").replace("\x00", "")


def sanitize_id_for_logging(id_value: str | None) -> str:
    """Storage key or session id, cut to 8 characters."""
    if not id_value:
        return "N/A"
    return _escape(str(id_value))[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Item name or search term as typed by the shopper.

    Escaped, and truncated with "..." past ``max_length``.
    """
    if not value:
        return "N/A"
    safe_value = _escape(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."
