r"""In-memory model of a book: numbered chapters, separators, and their nesting.

:func:`load_book` walks the summary tree from a :class:`BookConfig`, reads each
chapter's markdown from the source directory, assigns section numbers, and
records every chapter's ancestor names so the search index can seed its
breadcrumbs.

Example
-------
>>> from pathlib import Path
>>> chapter = Chapter(name="Intro", content="# Intro\n", path=Path("intro.md"))
>>> book = Book(sections=[chapter])
>>> [item.name for item in book.iter()]
['Intro']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from bookpages.config.models import BookConfig, BookConfigError, SummaryEntry

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(slots=True, frozen=True)
class SectionNumber:
    """Hierarchical chapter number such as ``1.2.``."""

    parts: tuple[int, ...]

    def __str__(self) -> str:
        return "".join(f"{part}." for part in self.parts)


@dc.dataclass(slots=True)
class Chapter:
    """A single markdown chapter and its position in the book.

    Attributes
    ----------
    name : str
        Title shown in navigation.
    content : str
        Raw markdown source.
    path : Path
        Source path relative to the book's ``src`` directory.
    number : SectionNumber, optional
        Section number, when the chapter is numbered.
    parent_names : list[str]
        Names of the ancestor chapters, outermost first.
    sub_items : list[BookItem]
        Nested chapters and separators.
    """

    name: str
    content: str
    path: Path
    number: SectionNumber | None = None
    parent_names: list[str] = dc.field(default_factory=list)
    sub_items: list[BookItem] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Separator:
    """Visual spacer between groups of chapters."""


BookItem = Chapter | Separator


@dc.dataclass(slots=True)
class Book:
    """Top-level container holding the book's items in summary order."""

    sections: list[BookItem] = dc.field(default_factory=list)

    def iter(self) -> cabc.Iterator[BookItem]:
        """Yield every item depth-first, in document order."""
        stack: list[BookItem] = list(reversed(self.sections))
        while stack:
            item = stack.pop()
            yield item
            if isinstance(item, Chapter):
                stack.extend(reversed(item.sub_items))

    def chapters(self) -> list[Chapter]:
        """Return every chapter in document order, skipping separators."""
        return [item for item in self.iter() if isinstance(item, Chapter)]


def load_book(config: BookConfig) -> Book:
    """Read every chapter named in ``config.summary`` into a :class:`Book`.

    Raises
    ------
    BookConfigError
        If a chapter's markdown file does not exist under ``config.src_dir``.
    """
    items = _load_items(config.src_dir, config.summary, prefix=(), parents=[])
    return Book(sections=items)


def _load_items(
    src_dir: Path,
    entries: list[SummaryEntry],
    *,
    prefix: tuple[int, ...],
    parents: list[str],
) -> list[BookItem]:
    """Recursively build book items for one level of the summary tree."""
    items: list[BookItem] = []
    counter = 0
    for entry in entries:
        if entry.separator or entry.path is None:
            items.append(Separator())
            continue
        counter += 1
        number = (*prefix, counter)
        chapter = Chapter(
            name=entry.title,
            content=_read_chapter(src_dir, entry.path),
            path=entry.path,
            number=SectionNumber(number),
            parent_names=list(parents),
        )
        chapter.sub_items = _load_items(
            src_dir,
            entry.children,
            prefix=number,
            parents=[*parents, entry.title],
        )
        items.append(chapter)
    return items


def _read_chapter(src_dir: Path, path: Path) -> str:
    source = src_dir / path
    try:
        return source.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"Chapter file '{source}' not found."
        raise BookConfigError(msg) from exc


__all__ = ["Book", "BookItem", "Chapter", "SectionNumber", "Separator", "load_book"]
