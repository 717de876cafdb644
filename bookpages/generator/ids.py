"""Derive anchor ids from heading text.

Both the header-link pass over rendered HTML and the search indexer call
:func:`id_from_content`, so a search result's fragment always names the same
anchor the page carries.

Examples
--------
>>> from bookpages.generator.ids import id_from_content
>>> id_from_content("## Method-call expressions")
'method-call-expressions'
>>> id_from_content("<em>Hï</em>")
'hï'
"""

from __future__ import annotations

# Inline markup the markdown renderer may leave inside a heading.
_STRIPPED_MARKUP = (
    "<em>",
    "</em>",
    "<code>",
    "</code>",
    "<strong>",
    "</strong>",
    "&lt;",
    "&gt;",
    "&amp;",
    "&#39;",
    "&quot;",
)


def normalize_id(content: str) -> str:
    """Map ``content`` character by character onto the anchor alphabet.

    Alphanumerics (any script), ``_`` and ``-`` are kept, with ASCII letters
    lower-cased; whitespace becomes ``-``; everything else is dropped.
    """
    chars: list[str] = []
    for ch in content:
        if ch.isalnum() or ch in "_-":
            chars.append(ch.lower() if ch.isascii() else ch)
        elif ch.isspace():
            chars.append("-")
    return "".join(chars)


def id_from_content(content: str) -> str:
    """Return the anchor id for a heading's inner markup or plain text.

    Parameters
    ----------
    content : str
        Heading markup as rendered (may contain ``<em>``/``<code>`` tags and
        HTML entities) or the heading's plain text.

    Returns
    -------
    str
        Normalized id. May be empty for headings with no usable characters.
    """
    for sub in _STRIPPED_MARKUP:
        content = content.replace(sub, "")
    trimmed = content.strip().lstrip("#").strip()
    return normalize_id(trimmed)


__all__ = ["id_from_content", "normalize_id"]
