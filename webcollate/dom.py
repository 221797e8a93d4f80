"""Parsed document tree anchored to the address it was loaded from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup


@dataclass
class PageDocument:
    """Mutable markup tree plus the base URL for its relative references."""

    soup: BeautifulSoup
    base_url: Optional[str] = None

    def resolve(self, reference: str) -> str:
        if not self.base_url:
            return reference
        return urljoin(self.base_url, reference.strip())

    def markup(self) -> str:
        return self.soup.decode()


def create_document(content: str, url: Optional[str] = None) -> PageDocument:
    """Parse markup, honouring a ``<base href>`` when the page declares one."""
    soup = BeautifulSoup(content, "html.parser")
    base_url = url
    if url:
        base_tag = soup.find("base", href=True)
        if base_tag:
            base_url = urljoin(url, base_tag["href"])
    return PageDocument(soup=soup, base_url=base_url)
