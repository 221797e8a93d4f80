"""High-level orchestration from input locations to written bundles."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import uuid
from pathlib import Path
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Set, TypeVar

from .bundlers import bundle_epub, bundle_html, bundle_markdown
from .config import OUTPUT_PREFIX, BundleConfig
from .dom import PageDocument, create_document
from .enhancements import enhance_page
from .extraction import Extractor, ReadabilityExtractor
from .fetch import fetch_markup, is_remote
from .language import LanguageClassifier, NgramLanguageClassifier
from .models import Article
from .output import derive_output_path, numbered_output_path
from .pdf import bundle_pdf
from .utils import progress

logger = logging.getLogger("webcollate")

T = TypeVar("T")
Bundler = Callable[[Sequence[Article], BundleConfig], Awaitable[Path]]

FORMATS: Dict[str, Bundler] = {
    "pdf": bundle_pdf,
    "epub": bundle_epub,
    "html": bundle_html,
    "md": bundle_markdown,
}

EXTENSIONS: Dict[str, str] = {"pdf": ".pdf", "epub": ".epub", "html": ".html", "md": ".md"}


async def _gather_all(coros: Iterable[Awaitable[T]]) -> List[T]:
    """Await every coroutine; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def find_amp_url(document: PageDocument) -> Optional[str]:
    link = document.soup.find("link", rel="amphtml", href=True)
    if link is None:
        return None
    amp_url = document.resolve(link["href"])
    return amp_url if is_remote(amp_url) else None


async def prepare_article(
    location: str,
    config: BundleConfig,
    extractor: Extractor,
    classifier: LanguageClassifier,
    follow_amp: bool = True,
) -> Article:
    """Fetch, enhance and extract one location into an ``Article``."""
    with progress(f"Fetching: {location}"):
        markup, base_url = await asyncio.to_thread(fetch_markup, location)

    document = create_document(markup, base_url)
    if config.amp and follow_amp:
        amp_url = find_amp_url(document)
        if amp_url:
            logger.info("Found AMP version: %s", amp_url)
            return await prepare_article(
                amp_url, config, extractor, classifier, follow_amp=False
            )

    with progress(f"Enhancing web page: {location}"):
        enhance_page(document)
        article = extractor.extract(document)

    return dataclasses.replace(
        article,
        id=f"{OUTPUT_PREFIX}-page-{uuid.uuid4()}",
        source_url=location,
        language=classifier.classify(article.text_content),
    )


async def collate(
    locations: Sequence[str],
    format_name: str,
    config: BundleConfig,
    extractor: Optional[Extractor] = None,
    classifier: Optional[LanguageClassifier] = None,
) -> List[Path]:
    """Bundle ``locations`` in the given format and return the written paths.

    By default every article goes into one bundle once all of them are
    ready. In individual mode each location is bundled on its own as soon as
    it is extracted. Either way the first failure aborts the whole run.
    """
    if format_name not in FORMATS:
        raise ValueError(f"Unknown output format: {format_name}")
    if not locations:
        return []
    bundle = FORMATS[format_name]
    extractor = extractor or ReadabilityExtractor()
    classifier = classifier or NgramLanguageClassifier()

    if config.individual:
        numbered = bool(config.output) and len(locations) > 1
        claimed: Set[Path] = set()

        def claim(path: Path) -> Path:
            # units sharing a derived name get -2, -3, ... in completion order
            candidate, counter = path, 1
            while candidate in claimed:
                counter += 1
                candidate = numbered_output_path(path, counter)
            claimed.add(candidate)
            return candidate

        async def bundle_one(index: int, location: str) -> Path:
            item = await prepare_article(location, config, extractor, classifier)
            if numbered:
                output = numbered_output_path(Path(config.output), index)
            else:
                output = derive_output_path([item], EXTENSIONS[format_name], config.output)
            return await bundle([item], dataclasses.replace(config, output=claim(output)))

        return await _gather_all(
            bundle_one(index, location) for index, location in enumerate(locations, start=1)
        )

    items = await _gather_all(
        prepare_article(location, config, extractor, classifier) for location in locations
    )
    return [await bundle(items, config)]
