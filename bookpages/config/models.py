"""Typed dataclasses describing bookpages configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class BookConfigError(ValueError):
    """Raised when the book configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class PlaypenConfig:
    """Options for runnable code blocks."""

    editable: bool = False


@dc.dataclass(slots=True)
class SearchConfig:
    """Search index options, mirrored into ``searchindex.json``.

    Attributes
    ----------
    enable : bool
        Whether a search index is built at all.
    limit_results : int
        Maximum number of results the client shows.
    teaser_word_count : int
        Number of words in each result teaser.
    use_boolean_and : bool
        Combine query terms with ``AND`` instead of ``OR``.
    boost_title : int
        Ranking boost for matches in section titles.
    boost_hierarchy : int
        Ranking boost for matches in breadcrumbs.
    boost_paragraph : int
        Ranking boost for matches in section bodies.
    expand : bool
        Whether partial words match longer indexed terms.
    split_until_heading : int
        Deepest heading level (1-6) that starts a new search section.
    """

    enable: bool = True
    limit_results: int = 30
    teaser_word_count: int = 30
    use_boolean_and: bool = False
    boost_title: int = 2
    boost_hierarchy: int = 1
    boost_paragraph: int = 1
    expand: bool = True
    split_until_heading: int = 3


@dc.dataclass(slots=True)
class HtmlConfig:
    """Options for the HTML renderer."""

    curly_quotes: bool = False
    mathjax_support: bool = False
    additional_css: list[Path] = dc.field(default_factory=list)
    additional_js: list[Path] = dc.field(default_factory=list)
    playpen: PlaypenConfig = dc.field(default_factory=PlaypenConfig)
    search: SearchConfig = dc.field(default_factory=SearchConfig)
    google_analytics: str | None = None
    livereload_url: str | None = None


@dc.dataclass(slots=True)
class SummaryEntry:
    """One line of the book summary: a chapter or a separator."""

    title: str = ""
    path: Path | None = None
    children: list[SummaryEntry] = dc.field(default_factory=list)
    separator: bool = False


@dc.dataclass(slots=True)
class BookConfig:
    """A fully resolved book definition sourced from YAML config."""

    root: Path
    title: str
    description: str
    language: str
    src_dir: Path
    build_dir: Path
    html: HtmlConfig
    summary: list[SummaryEntry]


__all__ = [
    "BookConfig",
    "BookConfigError",
    "HtmlConfig",
    "PlaypenConfig",
    "SearchConfig",
    "SummaryEntry",
]
