"""Load and validate book configuration YAML for bookpages builds.

This subpackage parses the project's ``book.yaml`` file, applies defaults for
the HTML, playpen, and search options, resolves source and build directories
relative to the file, and produces strongly typed dataclasses
(:class:`BookConfig`, :class:`SearchConfig`, etc.) that the book loader and the
page generator consume. The primary entry point is :func:`load_book_config`.

Examples
--------
>>> from pathlib import Path
>>> from bookpages.config import load_book_config
>>> config = load_book_config(Path("book.yaml"))  # doctest: +SKIP
>>> config.html.playpen.editable  # doctest: +SKIP
False
"""

from .loader import load_book_config
from .models import (
    BookConfig,
    BookConfigError,
    HtmlConfig,
    PlaypenConfig,
    SearchConfig,
    SummaryEntry,
)

__all__ = [
    "BookConfig",
    "BookConfigError",
    "HtmlConfig",
    "PlaypenConfig",
    "SearchConfig",
    "SummaryEntry",
    "load_book_config",
]
