"""HTML rendering of article lists through Jinja2 templates."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence, Tuple

from jinja2 import ChainableUndefined, Environment

from .config import DEFAULT_STYLESHEET, BundleConfig
from .language import DEFAULT_LANGUAGE
from .models import Article, RenderContext
from .stylesheet import Stylesheet, read_resource

logger = logging.getLogger("webcollate")

_environment = Environment(autoescape=False, undefined=ChainableUndefined)


def render_template(template_text: str, context: Mapping[str, object]) -> str:
    """Render template text; names missing from the context render empty."""
    return _environment.from_string(template_text).render(**context)


def build_context(
    items: Sequence[Article],
    style: str,
    toc: bool = False,
    language: Optional[str] = None,
) -> RenderContext:
    if language is None:
        language = (items[0].language if items else None) or DEFAULT_LANGUAGE
    return RenderContext(
        items=list(items),
        style=style,
        language=language,
        use_toc=bool(toc) and len(items) > 1,
    )


def render_document(
    items: Sequence[Article],
    config: BundleConfig,
    default_template: str,
) -> Tuple[str, Stylesheet]:
    """Render the bundle's HTML and return it with the stylesheet it embeds."""
    stylesheet = Stylesheet.load(config.style, config.css, default=DEFAULT_STYLESHEET)
    logger.debug("Rendering %d item(s) with %s", len(items), config.template or default_template)
    context = build_context(items, stylesheet.text, toc=config.toc)
    html = render_template(
        read_resource(config.template, default_template),
        context.as_template_vars(),
    )
    return html, stylesheet
