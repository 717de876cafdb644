"""Load book configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    DEFAULT_BUILD_DIR,
    DEFAULT_LANGUAGE,
    DEFAULT_SRC_DIR,
    _build_html_config,
    _build_summary,
    _mapping,
    _optional_str,
)
from .models import BookConfig, BookConfigError


def load_book_config(path: Path) -> BookConfig:
    """Load the YAML configuration describing a book and its output options.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``book.yaml``). Relative ``src`` and ``build_dir`` values resolve
        against the directory containing this file.

    Returns
    -------
    BookConfig
        Parsed configuration including book metadata, HTML output options,
        search options, and the chapter summary tree.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    BookConfigError
        If required sections or fields are missing or invalid (for example,
        an empty summary or a ``split_until_heading`` outside 1..6).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from bookpages.config import load_book_config
    >>> config = load_book_config(Path("book.yaml"))  # doctest: +SKIP
    >>> config.html.search.split_until_heading  # doctest: +SKIP
    3
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    root = path.resolve().parent

    book = _mapping(raw.get("book"), field="book")
    build = _mapping(raw.get("build"), field="build")
    output = _mapping(raw.get("output"), field="output")
    html_raw = _mapping(output.get("html"), field="output.html")

    summary = _build_summary(raw.get("summary"))
    if not summary:
        msg = "No chapters defined in the book summary."
        raise BookConfigError(msg)

    src_dir = root / (_optional_str(book.get("src")) or DEFAULT_SRC_DIR)
    build_dir = root / (_optional_str(build.get("build_dir")) or DEFAULT_BUILD_DIR)

    return BookConfig(
        root=root,
        title=_optional_str(book.get("title")) or "",
        description=_optional_str(book.get("description")) or "",
        language=_optional_str(book.get("language")) or DEFAULT_LANGUAGE,
        src_dir=src_dir,
        build_dir=build_dir,
        html=_build_html_config(html_raw, root=root),
        summary=summary,
    )


__all__ = ["load_book_config"]
