"""
Storefront logging.

The root logger is set up once, on first import. Modules just ask for a
named logger:

    from storefront.logging import get_logger
    logger = get_logger(__name__)

Cart session ids, product names and form fields come from the browser, so
they go through the sanitize helpers before they reach a log line.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Loggers of libraries whose per-request chatter is not wanted
QUIET_LOGGERS = ("httpx", "httpcore")

# Control characters that would let a value forge extra log lines (CWE-117)
_UNSAFE_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def configure_logging() -> None:
    """Attach a stdout handler to the root logger unless one is already set."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    production = os.environ.get("STOREFRONT_ENV") == "production"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if production else LOG_FORMAT))

    root.setLevel(level)
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: str | int | None) -> str:
    """Session or order id, escaped and cut to 8 characters; "N/A" when empty."""
    if id_value is None or id_value == "":
        return "N/A"
    return str(id_value).translate(_UNSAFE_CHARS)[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Escape a free-text value for a log line.

    Values longer than `max_length` are cut and suffixed with "...".
    Empty values log as "N/A".
    """
    if not value:
        return "N/A"
    safe_value = str(value).translate(_UNSAFE_CHARS)
    if len(safe_value) > max_length:
        return safe_value[:max_length] + "..."
    return safe_value


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
