"""
Utility functions for the PortfoliAI app.
"""

import logging
import re
import sys
from typing import Optional

_NON_SLUG = re.compile(r"[^a-z0-9-]+")
_WS = re.compile(r"\s+")


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a configured logger instance."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    if level is not None:
        logger.setLevel(level)
    return logger


def slugify(text: str) -> str:
    """'Jane  Doe' -> 'jane-doe'."""
    slug = _WS.sub("-", (text or "").strip().lower())
    slug = _NON_SLUG.sub("", slug).strip("-")
    return re.sub(r"-{2,}", "-", slug)


def preview_text(text: str, limit: int = 200) -> str:
    """First `limit` characters for log lines."""
    return text if len(text) <= limit else text[:limit] + "..."
