"""Shared pytest fixtures for all tests."""

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from webcollate.dom import PageDocument
from webcollate.models import Article


class FakeExtractor:
    """Deterministic extractor: the page title plus the body markup."""

    def __init__(self):
        self.calls = 0

    def extract(self, document: PageDocument) -> Article:
        self.calls += 1
        soup = document.soup
        title = soup.title.get_text(strip=True) if soup.title else ""
        body = soup.body or soup
        text = body.get_text("\n", strip=True)
        return Article(
            title=title,
            content=body.decode_contents(),
            text_content=text,
            length=len(text),
            excerpt=text[:50],
        )


class FakeClassifier:
    def __init__(self, language="en"):
        self.language = language

    def classify(self, text: str) -> str:
        return self.language


def make_page(title: str, body: str) -> str:
    return f"<html><head><title>{title}</title></head><body>{body}</body></html>"


@pytest.fixture
def fake_extractor():
    return FakeExtractor()


@pytest.fixture
def fake_classifier():
    return FakeClassifier()


@pytest.fixture
def local_pages(tmp_path) -> list:
    """Two local HTML files with distinct titles."""
    first = tmp_path / "first.html"
    first.write_text(
        make_page("First Story", "<p>The first story begins here.</p>"),
        encoding="utf-8",
    )
    second = tmp_path / "second.html"
    second.write_text(
        make_page("Second Story", "<p>The second story follows.</p>"),
        encoding="utf-8",
    )
    return [str(first), str(second)]


@pytest.fixture
def sample_article():
    return Article(
        id="webcollate-page-1",
        title="Hello, World!",
        content="<p>Hello there.</p>",
        text_content="Hello there.",
        length=12,
        source_url="https://example.com/hello",
        language="en",
    )


def doc(markup: str, base_url=None) -> PageDocument:
    return PageDocument(soup=BeautifulSoup(markup, "html.parser"), base_url=base_url)


@pytest.fixture
def make_doc():
    return doc


@pytest.fixture
def output_dir(tmp_path, monkeypatch) -> Path:
    """Run the test from an empty directory so derived file names land there."""
    out = tmp_path / "out"
    out.mkdir()
    monkeypatch.chdir(out)
    return out
