"""Unit tests for search document extraction and index serialisation.

The fixtures are small markdown chapters exercising the section state machine:
split headings, deeper headings folded into bodies, raw HTML stripping,
breadcrumb seeding from parent chapters, and the anchor consistency with the
header-link pass over rendered HTML.

Usage
-----
Run ``pytest tests/test_search.py -v``.
"""

from __future__ import annotations

import json
import logging
import re
import typing as typ
from pathlib import Path

import pytest

from bookpages.book import Chapter
from bookpages.config import SearchConfig
from bookpages.generator.header_links import build_header_links
from bookpages.generator.renderer import HtmlContentRenderer
from bookpages.generator.search import (
    SearchIndex,
    add_chapter_to_search_index,
    build_search_payload,
    write_search_index,
)

GUIDE_MARKDOWN = (
    "# Getting started\n"
    "\n"
    "Intro text.\n"
    "\n"
    "## Install\n"
    "\n"
    "Run the installer.\n"
    "\n"
    "### Linux details\n"
    "\n"
    "Use apt.\n"
    "\n"
    "## Configure\n"
    "\n"
    "Edit <span>the</span> file.[^1]\n"
    "\n"
    "[^1]: A footnote.\n"
)


def _index_chapter(
    content: str,
    *,
    split: int = 2,
    parents: list[str] | None = None,
    anchor_base: str = "guide/start.html",
    curly_quotes: bool = False,
) -> SearchIndex:
    chapter = Chapter(
        name="Start",
        content=content,
        path=Path("guide/start.md"),
        parent_names=parents or [],
    )
    index = SearchIndex()
    add_chapter_to_search_index(
        SearchConfig(split_until_heading=split),
        chapter,
        anchor_base,
        index,
        curly_quotes=curly_quotes,
    )
    return index


@pytest.fixture
def guide_index() -> SearchIndex:
    """Index the guide chapter under a ``Guide`` parent."""
    return _index_chapter(GUIDE_MARKDOWN, parents=["Guide"])


def test_one_document_per_split_section(guide_index: SearchIndex) -> None:
    """Each heading at or above the split level starts a document."""
    assert [doc.ref for doc in guide_index.documents] == [
        "guide/start.html#getting-started",
        "guide/start.html#install",
        "guide/start.html#configure",
    ]
    assert [doc.title for doc in guide_index.documents] == [
        "Getting started",
        "Install",
        "Configure",
    ]


def test_deeper_headings_fold_into_body(guide_index: SearchIndex) -> None:
    """A heading below the split level is ordinary body text."""
    install = guide_index.documents[1]
    assert install.body == "Run the installer.Linux detailsUse apt."


def test_raw_html_tags_stripped_and_footnote_refs_ignored(
    guide_index: SearchIndex,
) -> None:
    """HTML tags disappear from the body and footnote markers add no text."""
    configure = guide_index.documents[2]
    assert configure.body.startswith("Edit the file.")
    assert "<span>" not in configure.body
    assert "[^1]" not in configure.body


def test_breadcrumbs_seeded_from_parents(guide_index: SearchIndex) -> None:
    """Breadcrumbs are the parent chapters followed by the section title."""
    assert [doc.breadcrumbs for doc in guide_index.documents] == [
        ("Guide", "Getting started"),
        ("Guide", "Install"),
        ("Guide", "Configure"),
    ]
    assert guide_index.documents[1].breadcrumb_text == "Guide » Install"


def test_breadcrumbs_pop_one_level_per_section() -> None:
    """Nested headings do not deepen the trail: one pop per flushed section."""
    index = _index_chapter("# A\n\n## B\n\n### C\n\n## D\n", split=3, parents=["P"])
    assert [doc.breadcrumbs for doc in index.documents] == [
        ("P", "A"),
        ("P", "B"),
        ("P", "C"),
        ("P", "D"),
    ]


def test_leading_text_joins_first_section() -> None:
    """Text before the first heading is kept in the first document's body."""
    index = _index_chapter("Preamble.\n\n# Title\n\nBody.\n")
    assert len(index) == 1
    document = index.documents[0]
    assert document.ref == "guide/start.html#title"
    assert document.body == "Preamble.Body."


def test_chapter_without_headings_indexes_the_page() -> None:
    """Content with no split heading becomes one page-level document."""
    index = _index_chapter("Just text.\n", parents=["Guide"])
    assert len(index) == 1
    document = index.documents[0]
    assert document.ref == "guide/start.html"
    assert document.title == ""
    assert document.body == "Just text."
    assert document.breadcrumbs == ("Guide",)


def test_empty_chapter_adds_nothing() -> None:
    """Blank chapters produce no documents."""
    assert len(_index_chapter("")) == 0


def test_chapters_accumulate_in_order() -> None:
    """The shared index keeps chapter documents in traversal order."""
    index = SearchIndex()
    config = SearchConfig()
    for name in ("one", "two"):
        chapter = Chapter(name=name, content=f"# {name}\n", path=Path(f"{name}.md"))
        add_chapter_to_search_index(config, chapter, f"{name}.html", index)
    assert [doc.ref for doc in index.documents] == ["one.html#one", "two.html#two"]


def test_merge_appends_documents() -> None:
    """Merging keeps the merged index's order after the existing documents."""
    first = _index_chapter("# A\n", anchor_base="a.html")
    second = _index_chapter("# B\n\n# C\n", anchor_base="b.html")
    first.merge(second)
    assert [doc.ref for doc in first.documents] == ["a.html#a", "b.html#b", "b.html#c"]


@pytest.mark.parametrize(
    "heading",
    [
        "`--passes`: add more rustdoc passes",
        "Fish & chips",
        'The "quoted" \\<T\\> type',
        "Don't *panic*",
        "**Strong** start",
        "Über Straße",
        "Don't panic -- ok",
        "&copy; 2020 Notes",
        "Caf&eacute; menu",
        "x&nbsp;y",
        "A \\* B",
        "Ça va... &#233;t&#xE9;",
    ],
)
@pytest.mark.parametrize("curly_quotes", [False, True])
def test_search_anchor_matches_rendered_header_id(
    heading: str, curly_quotes: bool
) -> None:
    """Search refs point at exactly the id the header-link pass generates."""
    markdown = f"## {heading}\n\nBody.\n"
    index = _index_chapter(markdown, anchor_base="p.html", curly_quotes=curly_quotes)
    rendered = HtmlContentRenderer(curly_quotes=curly_quotes).markdown(markdown)
    html = build_header_links(rendered, "p.html")
    header_ids = re.findall(r'<a class="header" href="[^"]*" id="([^"]*)">', html)
    assert len(header_ids) == 1
    assert index.documents[0].ref == f"p.html#{header_ids[0]}"


def test_disabled_search_payload_has_only_enable() -> None:
    """Disabled search serialises to a single key."""
    payload = build_search_payload(SearchConfig(enable=False), SearchIndex())
    assert payload == {"enable": False}


def test_search_options_mirror_config(guide_index: SearchIndex) -> None:
    """The client options echo every configured ranking value."""
    config = SearchConfig(
        use_boolean_and=True,
        expand=False,
        limit_results=10,
        teaser_word_count=15,
        boost_title=5,
        boost_paragraph=2,
        boost_hierarchy=3,
    )
    payload = build_search_payload(config, guide_index)
    assert payload["enable"] is True
    assert payload["searchoptions"] == {
        "bool": "AND",
        "expand": False,
        "limit_results": 10,
        "teaser_word_count": 15,
        "fields": {
            "title": {"boost": 5},
            "body": {"boost": 2},
            "breadcrumbs": {"boost": 3},
        },
    }


def test_boolean_or_is_default(guide_index: SearchIndex) -> None:
    """Without ``use_boolean_and`` queries combine with OR."""
    payload = build_search_payload(SearchConfig(), guide_index)
    assert payload["searchoptions"]["bool"] == "OR"


def test_index_carries_lunr_data_and_document_store(
    guide_index: SearchIndex,
) -> None:
    """The index holds the lunr structure plus the stored documents."""
    index = build_search_payload(SearchConfig(), guide_index)["index"]
    assert "invertedIndex" in index
    assert set(index["fields"]) == {"title", "body", "breadcrumbs"}
    store = index["documentStore"]
    assert store["length"] == 3
    assert store["docs"]["guide/start.html#install"] == {
        "id": "guide/start.html#install",
        "title": "Install",
        "body": "Run the installer.Linux detailsUse apt.",
        "breadcrumbs": "Guide » Install",
    }


def test_empty_index_still_serialises() -> None:
    """An enabled search with no documents yields an empty store."""
    payload = build_search_payload(SearchConfig(), SearchIndex())
    assert payload["index"] == {"documentStore": {"save": True, "docs": {}, "length": 0}}


def test_duplicate_refs_keep_last_document(caplog: pytest.LogCaptureFixture) -> None:
    """Sections sharing a ref collapse to the later one in the document store."""
    index = _index_chapter(
        "# Same\n\nFirst.\n\n# Same\n\nSecond.\n", anchor_base="p.html"
    )
    assert [doc.ref for doc in index.documents] == ["p.html#same", "p.html#same"]
    with caplog.at_level(logging.DEBUG, logger="bookpages"):
        store = build_search_payload(SearchConfig(), index)["index"]["documentStore"]
    assert store["length"] == 2
    assert list(store["docs"]) == ["p.html#same"]
    assert store["docs"]["p.html#same"]["body"] == "Second."
    messages = [record.getMessage() for record in caplog.records]
    assert "Duplicate search ref p.html#same replaces an earlier document" in messages



def test_write_search_index_round_trips(
    tmp_path: Path, guide_index: SearchIndex
) -> None:
    """The written JSON equals the in-memory payload."""
    config = SearchConfig()
    path = write_search_index(tmp_path, config, guide_index)
    assert path.name == "searchindex.json"
    loaded: dict[str, typ.Any] = json.loads(path.read_text(encoding="utf-8"))
    expected = json.loads(json.dumps(build_search_payload(config, guide_index)))
    assert loaded == expected
