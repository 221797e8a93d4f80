"""PDF bundling through headless Chromium."""

from __future__ import annotations

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence, Tuple

from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from .config import DEFAULT_TEMPLATE, BundleConfig
from .errors import RenderingError
from .models import Article
from .output import derive_output_path
from .rendering import render_document
from .stylesheet import Stylesheet
from .utils import progress

logger = logging.getLogger("webcollate")

HEADER_SELECTOR = ".header-template"
FOOTER_SELECTOR = ".footer-template"
EMPTY_FRAGMENT = "<span></span>"
VIEWPORT = {"width": 1920, "height": 1080}
DEVICE_SCALE_FACTOR = 2


def build_print_fragment(document: BeautifulSoup, selector: str, declarations: str) -> str:
    """Build the markup Chromium prints as the page header or footer.

    The body comes from the inner markup of the element matching
    ``selector`` in the rendered document. The stylesheet's declarations
    for that selector are prepended to the first element's inline style, so
    inline properties still win.
    """
    template = document.select_one(selector)
    inner = template.decode_contents() if template is not None else EMPTY_FRAGMENT
    fragment = BeautifulSoup(inner, "html.parser")
    first = fragment.find(True)
    if first is not None and declarations:
        existing = first.get("style", "")
        first["style"] = "; ".join(part for part in (declarations, existing) if part)
    return fragment.decode()


def build_print_templates(html: str, stylesheet: Stylesheet) -> Tuple[str, str]:
    document = BeautifulSoup(html, "html.parser")
    header = build_print_fragment(
        document, HEADER_SELECTOR, stylesheet.declarations_for(HEADER_SELECTOR)
    )
    footer = build_print_fragment(
        document, FOOTER_SELECTOR, stylesheet.declarations_for(FOOTER_SELECTOR)
    )
    return header, footer


@contextmanager
def temporary_html_file(html: str) -> Iterator[Path]:
    """Write ``html`` to a temporary file that is removed on exit."""
    handle = tempfile.NamedTemporaryFile(
        "w", suffix=".html", encoding="utf-8", delete=False
    )
    path = Path(handle.name)
    try:
        with handle:
            handle.write(html)
        logger.debug("Temporary HTML file: %s", path.as_uri())
        yield path
    finally:
        path.unlink(missing_ok=True)


async def print_to_pdf(
    source: Path,
    output_path: Path,
    header_template: str,
    footer_template: str,
    config: BundleConfig,
) -> None:
    """Load ``source`` in a fresh Chromium instance and print it to ``output_path``."""
    args = None if config.sandbox else ["--no-sandbox", "--disable-setuid-sandbox"]
    async with async_playwright() as playwright:
        browser = None
        try:
            browser = await playwright.chromium.launch(
                headless=True, chromium_sandbox=config.sandbox, args=args
            )
            page = await browser.new_page(
                viewport=VIEWPORT, device_scale_factor=DEVICE_SCALE_FACTOR
            )
            page.set_default_navigation_timeout(config.navigation_timeout * 1000)
            if config.debug:
                page.on("response", lambda response: logger.info("Fetched: %s", response.url))
            await page.goto(source.as_uri(), wait_until="load")
            await page.pdf(
                path=str(output_path),
                prefer_css_page_size=True,
                display_header_footer=True,
                header_template=header_template,
                footer_template=footer_template,
                print_background=True,
            )
        except PlaywrightError as exc:
            raise RenderingError(f"Failed to print {source}: {exc}") from exc
        finally:
            if browser is not None:
                await browser.close()


async def bundle_pdf(items: Sequence[Article], config: BundleConfig) -> Path:
    html, stylesheet = render_document(items, config, DEFAULT_TEMPLATE)
    header_template, footer_template = build_print_templates(html, stylesheet)
    output_path = derive_output_path(items, ".pdf", config.output)
    with temporary_html_file(html) as source:
        with progress(f"Saving PDF: {output_path}"):
            await print_to_pdf(source, output_path, header_template, footer_template, config)
    return output_path
