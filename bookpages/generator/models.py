"""Shared dataclasses and errors used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc


class BookRenderError(RuntimeError):
    """Raised when a book cannot be rendered."""


class ReservedFilenameError(BookRenderError):
    """Raised when a chapter would overwrite a generated page."""


@dc.dataclass(slots=True)
class NavEntry:
    """Sidebar entry passed to the page template.

    Attributes
    ----------
    name : str
        Chapter title; empty for separators.
    path : str
        Chapter page path relative to the book root (``.html``).
    section : str, optional
        Section number such as ``"1.2."``.
    depth : int
        Nesting depth, ``0`` for top-level chapters.
    spacer : bool
        ``True`` when the entry is a separator.
    """

    name: str = ""
    path: str = ""
    section: str | None = None
    depth: int = 0
    spacer: bool = False


__all__ = ["BookRenderError", "NavEntry", "ReservedFilenameError"]
