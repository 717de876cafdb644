"""Utilities for rendering, post-processing, and indexing bookpages output."""

from .models import BookRenderError, NavEntry, ReservedFilenameError
from .page_generator import BookGenerator
from .postprocess import POST_PROCESSORS, post_process
from .renderer import HtmlContentRenderer
from .search import (
    SearchDocument,
    SearchIndex,
    add_chapter_to_search_index,
    build_search_payload,
    write_search_index,
)

__all__ = [
    "POST_PROCESSORS",
    "BookGenerator",
    "BookRenderError",
    "HtmlContentRenderer",
    "NavEntry",
    "ReservedFilenameError",
    "SearchDocument",
    "SearchIndex",
    "add_chapter_to_search_index",
    "build_search_payload",
    "post_process",
    "write_search_index",
]
