"""DOM rewrites applied to a page before article extraction.

Every pass mutates the tree in place, tolerates pages where nothing
matches, and leaves the tree unchanged when run a second time.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Tuple

from bs4 import Comment, NavigableString, Tag

from .dom import PageDocument

logger = logging.getLogger("webcollate")

FULL_SIZE_IMAGE_PATTERN = re.compile(r"\.(png|jpg|jpeg|gif|svg)$", re.IGNORECASE)
FULL_SIZE_EXCLUDE_PATTERNS = (
    # Wikipedia links to image description pages
    re.compile(r"wiki/File:"),
    # images embedded in Markdown files hosted on GitHub
    re.compile(r"github\.com"),
)
LAZY_LOAD_ATTRIBUTES = ("src", "srcset", "sizes")
NO_HREF_CLASS = "no-href"
SCREEN_ONLY_SELECTORS = (
    # edit links next to Wikipedia headings
    ".mw-editsection",
)


def _is_only_child(tag: Tag) -> bool:
    """True when the tag's siblings are at most whitespace and comments."""
    parent = tag.parent
    if parent is None:
        return False
    for sibling in parent.contents:
        if sibling is tag:
            continue
        if isinstance(sibling, Comment):
            continue
        if isinstance(sibling, NavigableString) and not sibling.strip():
            continue
        return False
    return True


def _class_list(tag: Tag) -> List[str]:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def parse_srcset(value: str) -> List[Tuple[str, str]]:
    """Split a srcset attribute into (url, descriptor) pairs."""
    candidates: List[Tuple[str, str]] = []
    position = 0
    length = len(value)
    while position < length:
        while position < length and (value[position].isspace() or value[position] == ","):
            position += 1
        if position >= length:
            break
        start = position
        while position < length and not value[position].isspace():
            position += 1
        url = value[start:position]
        descriptor = ""
        if url.endswith(","):
            url = url.rstrip(",")
        else:
            start = position
            while position < length and value[position] != ",":
                position += 1
            descriptor = value[start:position].strip()
        if url:
            candidates.append((url, descriptor))
    return candidates


def stringify_srcset(candidates: List[Tuple[str, str]]) -> str:
    return ", ".join(f"{url} {descriptor}".strip() for url, descriptor in candidates)


def amp_to_html(document: PageDocument) -> None:
    """Turn ``<amp-img>`` into ``<img>``; children are not carried over."""
    soup = document.soup
    for amp_img in soup.find_all("amp-img"):
        attrs = {
            name: list(value) if isinstance(value, list) else value
            for name, value in amp_img.attrs.items()
        }
        amp_img.replace_with(soup.new_tag("img", attrs=attrs))


def fix_lazy_loaded_images(document: PageDocument) -> None:
    for img in document.soup.find_all("img"):
        for attr in LAZY_LOAD_ATTRIBUTES:
            value = img.get(f"data-{attr}")
            if value is not None:
                img[attr] = value


def relative_to_absolute_uris(document: PageDocument) -> None:
    """Resolve anchor, image and srcset references against the base URL.

    In-page anchors are left alone, and so is the whole tree when the page
    came from a local file.
    """
    if not document.base_url:
        return
    soup = document.soup
    for anchor in soup.find_all("a", href=True):
        if anchor["href"].startswith("#"):
            continue
        anchor["href"] = document.resolve(anchor["href"])

    for img in soup.find_all("img", src=True):
        img["src"] = document.resolve(img["src"])

    for element in soup.find_all(["img", "source"], srcset=True):
        if element.name == "source" and element.find_parent("picture") is None:
            continue
        candidates = parse_srcset(element["srcset"])
        element["srcset"] = stringify_srcset(
            [(document.resolve(url), descriptor) for url, descriptor in candidates]
        )


def images_at_full_size(document: PageDocument) -> None:
    """Replace thumbnails linking to their original image with the original.

    ``<a href="big.png"><img src="small.png"></a>`` becomes
    ``<img src="big.png">``. Explicit width and height attributes are then
    dropped from every image so the stylesheet controls sizing.
    """
    soup = document.soup
    for img in soup.find_all("img"):
        anchor = img.parent
        if anchor is None or anchor.name != "a" or not _is_only_child(img):
            continue
        href = anchor.get("href")
        if not href:
            continue
        original = document.resolve(href)
        if not FULL_SIZE_IMAGE_PATTERN.search(original):
            continue
        if any(pattern.search(original) for pattern in FULL_SIZE_EXCLUDE_PATTERNS):
            continue
        img["src"] = original
        # neither lazy loading nor srcset may bring the thumbnail back
        for attr in ("data-src", "data-srcset", "srcset", "sizes"):
            img.attrs.pop(attr, None)
        anchor.replace_with(img.extract())

    for img in soup.find_all("img"):
        img.attrs.pop("width", None)
        img.attrs.pop("height", None)


def single_img_to_figure(document: PageDocument) -> None:
    """Wrap a paragraph's lone image in a ``<figure>``, captioned by its alt text.

    Images whose parent is not a paragraph, or whose paragraph is detached,
    are left where they are.
    """
    soup = document.soup
    for img in soup.find_all("img"):
        paragraph = img.parent
        if paragraph is None or paragraph.name != "p" or paragraph.parent is None:
            continue
        if not _is_only_child(img):
            continue
        figure = soup.new_tag("figure")
        alt = img.get("alt")
        figure.append(img.extract())
        if alt:
            caption = soup.new_tag("figcaption")
            caption.string = alt
            figure.append(caption)
        paragraph.replace_with(figure)


def no_useless_href(document: PageDocument) -> None:
    """Mark links whose URL would add nothing if printed after them."""
    for anchor in document.soup.find_all("a"):
        href = anchor.get("href") or ""
        text = anchor.get_text().strip()
        if not (href.startswith("#") or not text or text == href):
            continue
        classes = _class_list(anchor)
        if NO_HREF_CLASS not in classes:
            anchor["class"] = classes + [NO_HREF_CLASS]


def expand_details_elements(document: PageDocument) -> None:
    for details in document.soup.find_all("details"):
        details["open"] = ""


def wikipedia_specific(document: PageDocument) -> None:
    for selector in SCREEN_ONLY_SELECTORS:
        for element in document.soup.select(selector):
            if element.decomposed:
                continue
            element.decompose()


# Order matters: AMP images may be lazy-loaded, and the full-size and figure
# passes read the absolute href/src values.
ENHANCEMENTS: Tuple[Callable[[PageDocument], None], ...] = (
    amp_to_html,
    fix_lazy_loaded_images,
    relative_to_absolute_uris,
    images_at_full_size,
    single_img_to_figure,
    no_useless_href,
    expand_details_elements,
    wikipedia_specific,
)


def enhance_page(document: PageDocument) -> None:
    for enhancement in ENHANCEMENTS:
        logger.debug("Running enhancement %s", enhancement.__name__)
        enhancement(document)
