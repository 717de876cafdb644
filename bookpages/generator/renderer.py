"""Utilities for rendering chapter markdown into HTML fragments."""

from __future__ import annotations

from bookpages.markdown_parser import create_markdown, normalize_fences


class HtmlContentRenderer:
    """Render markdown with the extension set shared by the indexer."""

    def __init__(self, *, curly_quotes: bool = False) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        curly_quotes : bool, optional
            Convert straight quotes and common punctuation to typographic
            forms. Defaults to ``False``.
        """
        self.curly_quotes = curly_quotes

    def markdown(self, text: str) -> str:
        """Render markdown into HTML.

        Fenced code info strings are kept verbatim in the ``class`` attribute
        (``language-rust,should_panic``); the post-processing pipeline turns
        them into space-separated classes. Code is not highlighted here.
        """
        normalized = normalize_fences(text)
        if not normalized.strip():
            return ""
        md = create_markdown(curly_quotes=self.curly_quotes)
        return md.convert(normalized)


__all__ = ["HtmlContentRenderer"]
