"""Path and text helpers shared by the page generator and search indexer."""

from __future__ import annotations

import os
import re
from pathlib import PurePath

from .models import BookRenderError

HTML_TAG_PATTERN = re.compile(r"<[^>]*>")


def normalize_path(path: str) -> str:
    """Replace OS path separators in ``path`` with ``/``."""
    separators = {os.sep, os.altsep or os.sep, "\\"}
    return "".join("/" if ch in separators else ch for ch in path)


def path_to_root(path: PurePath | str) -> str:
    """Return the relative prefix leading from ``path``'s directory to the root.

    Examples
    --------
    >>> path_to_root("guide/install/linux.md")
    '../../'
    >>> path_to_root("intro.md")
    ''
    """
    parent = PurePath(path).parent
    depth = len([part for part in parent.parts if part not in ("", ".")])
    return "../" * depth


def path_to_str(path: PurePath, *, what: str = "path") -> str:
    """Return ``path`` as ``/``-separated text.

    Raises
    ------
    BookRenderError
        If the path contains bytes that cannot be represented as text.
    """
    text = normalize_path(str(path))
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"Could not convert {what} to str: {path!r}"
        raise BookRenderError(msg) from exc
    return text


def remove_html_tags(html: str) -> str:
    """Strip every ``<…>`` tag from ``html``, keeping the text between them."""
    return HTML_TAG_PATTERN.sub("", html)


__all__ = ["normalize_path", "path_to_root", "path_to_str", "remove_html_tags"]
