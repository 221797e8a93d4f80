"""Data models used throughout the bundling pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Article:
    """Readable content extracted from a single input page."""

    title: str
    content: str
    text_content: str
    length: int
    excerpt: str = ""
    byline: Optional[str] = None
    id: Optional[str] = None
    source_url: Optional[str] = None
    language: Optional[str] = None


@dataclass
class RenderContext:
    """Values exposed to the HTML template for one bundling call."""

    items: list
    style: str
    language: str
    use_toc: bool = False

    def as_template_vars(self) -> dict:
        return {
            "items": self.items,
            "style": self.style,
            "language": self.language,
            "options": {"use_toc": self.use_toc},
        }
