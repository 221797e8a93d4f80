"""Configuration objects and constants for the bundler."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

__version__ = "0.1.0"

USER_AGENT = f"webcollate/{__version__}"
OUTPUT_PREFIX = "webcollate"
UNTITLED_PAGE = "Untitled page"

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
DEFAULT_TEMPLATE = "default.html"
MARKDOWN_TEMPLATE = "markdown.html"
DEFAULT_STYLESHEET = "default.css"

# Class names readability must leave on the extracted markup.
PRESERVED_CLASSES = (
    "no-href",
    # in-page anchors on some sites
    "anchor",
)


@dataclass
class BundleConfig:
    """Top-level settings shared by every output format."""

    output: Optional[Path] = None
    template: Optional[str] = None
    style: Optional[str] = None
    css: str = ""
    individual: bool = False
    amp: bool = True
    toc: bool = False
    debug: bool = False
    sandbox: bool = True
    navigation_timeout: float = 120.0
