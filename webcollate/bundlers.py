"""Bundlers writing rendered articles as HTML, Markdown and EPUB files."""

from __future__ import annotations

import asyncio
import uuid
from pathlib import Path
from typing import Sequence

from ebooklib import epub
from markdownify import markdownify

from .config import DEFAULT_TEMPLATE, MARKDOWN_TEMPLATE, UNTITLED_PAGE, BundleConfig
from .errors import PackagingError
from .language import DEFAULT_LANGUAGE
from .models import Article
from .output import derive_output_path
from .rendering import render_document
from .utils import progress


async def bundle_html(items: Sequence[Article], config: BundleConfig) -> Path:
    html, _ = render_document(items, config, DEFAULT_TEMPLATE)
    output_path = derive_output_path(items, ".html", config.output)
    with progress(f"Saving HTML: {output_path}"):
        output_path.write_text(html, encoding="utf-8")
    return output_path


def html_to_markdown(html: str) -> str:
    return markdownify(html, heading_style="ATX").strip() + "\n"


async def bundle_markdown(items: Sequence[Article], config: BundleConfig) -> Path:
    html, _ = render_document(items, config, MARKDOWN_TEMPLATE)
    output_path = derive_output_path(items, ".md", config.output)
    with progress(f"Saving Markdown: {output_path}"):
        output_path.write_text(html_to_markdown(html), encoding="utf-8")
    return output_path


def build_epub(html: str, style: str, title: str, language: str) -> epub.EpubBook:
    """Package one rendered HTML document as a single-chapter book."""
    book = epub.EpubBook()
    book.set_identifier(str(uuid.uuid4()))
    book.set_title(title)
    book.set_language(language)

    stylesheet = epub.EpubItem(
        uid="style",
        file_name="style/default.css",
        media_type="text/css",
        content=style.encode("utf-8"),
    )
    book.add_item(stylesheet)

    chapter = epub.EpubHtml(title=title, file_name="content.xhtml", lang=language)
    chapter.content = html
    chapter.add_item(stylesheet)
    book.add_item(chapter)

    book.toc = (chapter,)
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]
    return book


async def bundle_epub(items: Sequence[Article], config: BundleConfig) -> Path:
    html, stylesheet = render_document(items, config, DEFAULT_TEMPLATE)
    output_path = derive_output_path(items, ".epub", config.output)
    title = (items[0].title if items else "") or UNTITLED_PAGE
    language = (items[0].language if items else None) or DEFAULT_LANGUAGE
    book = build_epub(html, stylesheet.text, title, language)

    with progress(f"Saving EPUB: {output_path}"):
        try:
            await asyncio.to_thread(epub.write_epub, str(output_path), book)
        except Exception as exc:  # noqa: BLE001 - ebooklib raises assorted errors
            raise PackagingError(f"Failed to write {output_path}: {exc}") from exc
    return output_path
