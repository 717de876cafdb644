"""Build the client-side search index from chapter markdown.

Each chapter is walked once as a flat event stream. Headings at or above
``split_until_heading`` split the chapter into sections; every section becomes
one :class:`SearchDocument` whose ref deep-links to the heading anchor that
:func:`~bookpages.generator.header_links.build_header_links` puts on the page.
The accumulated documents are serialised with lunr into ``searchindex.json``.

Example
-------
>>> from bookpages.book import Chapter
>>> from bookpages.config import SearchConfig
>>> from pathlib import Path
>>> index = SearchIndex()
>>> chapter = Chapter(name="Intro", content="# Intro\\nHello", path=Path("intro.md"))
>>> add_chapter_to_search_index(SearchConfig(), chapter, "intro.html", index)
>>> index.documents[0].ref
'intro.html#intro'
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ

from lunr import lunr

from bookpages._constants import BREADCRUMB_SEPARATOR, SEARCH_INDEX_FILENAME
from bookpages.markdown_parser import EventKind, iter_events

from .helpers import remove_html_tags
from .ids import id_from_content

if typ.TYPE_CHECKING:
    from pathlib import Path

    from bookpages.book import Chapter
    from bookpages.config import SearchConfig

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("title", "body", "breadcrumbs")


@dc.dataclass(slots=True, frozen=True)
class SearchDocument:
    """One indexed section of a chapter.

    Attributes
    ----------
    ref : str
        ``"page.html"`` or ``"page.html#section-id"``.
    title : str
        Plain-text section heading.
    body : str
        Plain-text section content.
    breadcrumbs : tuple[str, ...]
        Ancestor titles followed by the section's own title.
    """

    ref: str
    title: str
    body: str
    breadcrumbs: tuple[str, ...]

    @property
    def breadcrumb_text(self) -> str:
        """Return the breadcrumbs joined for display."""
        return BREADCRUMB_SEPARATOR.join(self.breadcrumbs)

    def as_fields(self) -> dict[str, str]:
        """Return the document in the shape handed to the index builder."""
        return {
            "id": self.ref,
            "title": self.title,
            "body": self.body,
            "breadcrumbs": self.breadcrumb_text,
        }


@dc.dataclass(slots=True)
class SearchIndex:
    """Ordered accumulator of search documents for one build."""

    documents: list[SearchDocument] = dc.field(default_factory=list)

    def add_doc(
        self, ref: str, title: str, body: str, breadcrumbs: typ.Sequence[str]
    ) -> SearchDocument:
        """Append a document and return it."""
        document = SearchDocument(
            ref=ref, title=title, body=body, breadcrumbs=tuple(breadcrumbs)
        )
        self.documents.append(document)
        return document

    def merge(self, other: SearchIndex) -> None:
        """Append ``other``'s documents, keeping their order."""
        self.documents.extend(other.documents)

    def __len__(self) -> int:
        return len(self.documents)


@dc.dataclass(slots=True)
class _Section:
    """Text gathered for the section currently being walked."""

    title: list[str] = dc.field(default_factory=list)
    body: list[str] = dc.field(default_factory=list)
    section_id: str | None = None

    @property
    def has_content(self) -> bool:
        return any(self.title) or any(self.body)


def add_chapter_to_search_index(
    search_config: SearchConfig,
    chapter: Chapter,
    anchor_base: str,
    index: SearchIndex,
    *,
    curly_quotes: bool = False,
) -> None:
    """Walk ``chapter``'s markdown and append one document per section.

    Parameters
    ----------
    search_config : SearchConfig
        Provides ``split_until_heading``.
    chapter : Chapter
        Chapter whose ``content`` is indexed; ``parent_names`` seed the
        breadcrumbs.
    anchor_base : str
        Page path used as the document ref prefix (for example,
        ``"guide/install.html"``).
    index : SearchIndex
        Shared accumulator, mutated in place.
    curly_quotes : bool, optional
        Must match the page renderer setting so section refs line up with
        the rendered header ids.

    Notes
    -----
    A split heading closes the previous section and pops exactly one
    breadcrumb, whatever the depth difference between the two headings. Text
    before the first split heading is folded into the first section. The last
    section is emitted when the chapter ends.
    """
    max_level = search_config.split_until_heading
    breadcrumbs = list(chapter.parent_names)
    section = _Section()
    in_header = False

    def _flush() -> None:
        ref = anchor_base
        if section.section_id is not None:
            ref = f"{anchor_base}#{section.section_id}"
        index.add_doc(ref, "".join(section.title), "".join(section.body), breadcrumbs)

    for event in iter_events(chapter.content, curly_quotes=curly_quotes):
        match event.kind:
            case EventKind.HEADING_START if event.level <= max_level:
                if any(section.title):
                    _flush()
                    section = _Section()
                    if breadcrumbs:
                        breadcrumbs.pop()
                in_header = True
            case EventKind.HEADING_END if event.level <= max_level:
                in_header = False
                title = "".join(section.title)
                section.section_id = id_from_content(title)
                breadcrumbs.append(title)
            case EventKind.TEXT:
                if in_header:
                    section.title.append(event.text)
                else:
                    section.body.append(event.text)
            case EventKind.HTML:
                section.body.append(remove_html_tags(event.text))
            case _:
                pass

    if section.has_content:
        _flush()


def build_search_payload(
    search_config: SearchConfig, index: SearchIndex
) -> dict[str, typ.Any]:
    """Return the ``searchindex.json`` payload for ``index``.

    When search is disabled the payload is exactly ``{"enable": False}``.
    Otherwise it carries the client ``searchoptions`` and the serialised
    index.

    Notes
    -----
    The ``documentStore`` is keyed by ref. When two sections share a ref (for
    example, repeated split headings on one page) the later section replaces
    the earlier one in the store, while ``length`` still counts every
    indexed section.
    """
    if not search_config.enable:
        return {"enable": False}

    searchoptions = {
        "bool": "AND" if search_config.use_boolean_and else "OR",
        "expand": search_config.expand,
        "limit_results": search_config.limit_results,
        "teaser_word_count": search_config.teaser_word_count,
        "fields": {
            "title": {"boost": search_config.boost_title},
            "body": {"boost": search_config.boost_paragraph},
            "breadcrumbs": {"boost": search_config.boost_hierarchy},
        },
    }
    return {
        "enable": True,
        "searchoptions": searchoptions,
        "index": _serialize_index(search_config, index),
    }


def _serialize_index(
    search_config: SearchConfig, index: SearchIndex
) -> dict[str, typ.Any]:
    documents = [document.as_fields() for document in index.documents]
    docs: dict[str, dict[str, str]] = {}
    for document in documents:
        if document["id"] in docs:
            logger.debug(
                "Duplicate search ref %s replaces an earlier document", document["id"]
            )
        docs[document["id"]] = document
    store = {
        "save": True,
        "docs": docs,
        "length": len(documents),
    }
    if not documents:
        return {"documentStore": store}

    boosts = {
        "title": search_config.boost_title,
        "body": search_config.boost_paragraph,
        "breadcrumbs": search_config.boost_hierarchy,
    }
    fields = [{"field_name": name, "boost": boosts[name]} for name in SEARCH_FIELDS]
    serialized = dict(lunr(ref="id", fields=fields, documents=documents).serialize())
    serialized["documentStore"] = store
    return serialized


def write_search_index(
    destination: Path, search_config: SearchConfig, index: SearchIndex
) -> Path:
    """Write ``searchindex.json`` into ``destination`` and return its path."""
    payload = build_search_payload(search_config, index)
    path = destination / SEARCH_INDEX_FILENAME
    path.write_text(json.dumps(payload), encoding="utf-8")
    logger.debug("Creating %s", SEARCH_INDEX_FILENAME)
    return path


__all__ = [
    "SEARCH_FIELDS",
    "SearchDocument",
    "SearchIndex",
    "add_chapter_to_search_index",
    "build_search_payload",
    "write_search_index",
]
