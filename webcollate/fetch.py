"""Acquisition of raw markup from remote URLs and local files."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import quote, unquote, urlparse
from urllib.request import url2pathname

import requests

from .config import USER_AGENT
from .errors import AcquisitionError

logger = logging.getLogger("webcollate")

# Characters encodeURI leaves alone besides the unreserved set.
_URI_SAFE = ";,/?:@&=+$!*'()#"

# Escaped reserved characters are kept as written.
_RESERVED_ESCAPE = re.compile(r"(%(?:2[346BCFbcf]|3[ABDFabdf]|40))")


def normalize_url(url: str) -> str:
    """Percent-encode a URL whether or not it arrived encoded already."""
    pieces = _RESERVED_ESCAPE.split(url)
    return "".join(
        piece if index % 2 else quote(unquote(piece), safe=_URI_SAFE)
        for index, piece in enumerate(pieces)
    )


def is_remote(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


def fetch_remote(url: str) -> Tuple[str, str]:
    """Download a page and return its markup and final URL."""
    target = normalize_url(url)
    logger.debug("GET %s", target)
    try:
        resp = requests.get(target, headers={"User-Agent": USER_AGENT})
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise AcquisitionError(f"Failed to fetch {url}: {exc}") from exc

    content_type = resp.headers.get("Content-Type", "")
    if "charset" not in content_type.lower():
        resp.encoding = resp.apparent_encoding
    return resp.text, resp.url


def read_local_file(location: str) -> str:
    parsed = urlparse(location)
    if parsed.scheme == "file":
        path = Path(url2pathname(unquote(parsed.path)))
    else:
        path = Path(location).expanduser()
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AcquisitionError(f"Failed to read {path}: {exc}") from exc


def fetch_markup(location: str) -> Tuple[str, Optional[str]]:
    """Return the markup at a location and the base URL to resolve it against.

    Local files have no base URL so their relative references stay as-is.
    """
    if is_remote(location):
        return fetch_remote(location)
    return read_local_file(location), None
