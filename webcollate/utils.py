"""Utility helpers for string normalization and progress reporting."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger("webcollate")

SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def slugify(value: str, fallback: str = "page") -> str:
    """Generate a filesystem-friendly slug using ASCII characters only."""
    normalized = value.encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower()
    normalized = SLUG_PATTERN.sub("-", normalized).strip("-")
    return normalized or fallback


@contextmanager
def progress(step: str) -> Iterator[None]:
    """Log the start, success or failure of one user-visible step."""
    logger.info("%s", step)
    try:
        yield
    except Exception as exc:
        logger.error("%s failed: %s", step, exc)
        raise
    logger.info("%s: done", step)
