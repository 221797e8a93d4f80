"""Article extraction backed by readability-lxml."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from .config import PRESERVED_CLASSES
from .dom import PageDocument
from .errors import ExtractionError
from .models import Article

logger = logging.getLogger("webcollate")


class Extractor(Protocol):
    """Reduces an enhanced page to its readable article."""

    def extract(self, document: PageDocument) -> Article:
        ...


def _join_plain_text(soup: BeautifulSoup) -> str:
    """Join text nodes for the plain-text rendition."""
    return "\n".join(s for s in soup.stripped_strings)


def _clean_classes(soup: BeautifulSoup, keep: Iterable[str]) -> None:
    """Drop every class name that is not listed in ``keep``."""
    keep = set(keep)
    for tag in soup.find_all(class_=True):
        classes = tag.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        preserved = [name for name in classes if name in keep]
        if preserved:
            tag["class"] = preserved
        else:
            del tag["class"]


def _meta_content(soup: BeautifulSoup, **attrs: str) -> Optional[str]:
    tag = soup.find("meta", attrs=attrs)
    if tag and tag.get("content"):
        return tag["content"].strip()
    return None


class ReadabilityExtractor:
    """Extractor using the readability heuristics to find the main content."""

    def __init__(self, classes_to_preserve: Iterable[str] = PRESERVED_CLASSES) -> None:
        self.classes_to_preserve = tuple(classes_to_preserve)

    def extract(self, document: PageDocument) -> Article:
        html = document.markup()
        readable = Document(html, url=document.base_url)
        try:
            summary_html = readable.summary(html_partial=True)
            title = readable.short_title()
        except Unparseable as exc:
            raise ExtractionError(f"Could not parse document: {exc}") from exc

        summary = BeautifulSoup(summary_html, "html.parser")
        _clean_classes(summary, self.classes_to_preserve)
        text_content = _join_plain_text(summary)
        if not text_content:
            raise ExtractionError("No readable content found in document")

        soup_full = document.soup
        if not title and soup_full.title and soup_full.title.string:
            title = soup_full.title.string.strip()

        excerpt = _meta_content(soup_full, name="description") or _meta_content(
            soup_full, property="og:description"
        )
        if not excerpt:
            first_paragraph = summary.find("p")
            excerpt = first_paragraph.get_text(" ", strip=True) if first_paragraph else ""

        logger.debug("Extracted %d characters titled %r", len(text_content), title)
        return Article(
            title=title or "",
            byline=_meta_content(soup_full, name="author"),
            excerpt=excerpt,
            content=summary.decode(),
            text_content=text_content,
            length=len(text_content),
        )
