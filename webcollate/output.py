"""Output file naming shared by every format."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional, Sequence, Union

from .config import OUTPUT_PREFIX, UNTITLED_PAGE
from .models import Article
from .utils import slugify


def derive_output_path(
    items: Sequence[Article],
    extension: str,
    explicit: Optional[Union[str, Path]] = None,
) -> Path:
    """Pick where a bundle is written.

    An explicit path always wins. A single article is named after its title;
    anything else gets a timestamped name.
    """
    if explicit:
        return Path(explicit)
    if len(items) == 1:
        title = items[0].title or UNTITLED_PAGE
        return Path(slugify(title, fallback=slugify(UNTITLED_PAGE)) + extension)
    return Path(f"{OUTPUT_PREFIX}-{int(time.time() * 1000)}{extension}")


def numbered_output_path(path: Path, index: int) -> Path:
    """``book.pdf`` -> ``book-2.pdf``, for one-file-per-input runs."""
    return path.with_name(f"{path.stem}-{index}{path.suffix}")
