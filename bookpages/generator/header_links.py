"""Wrap rendered headings in self-links with unique per-page ids."""

from __future__ import annotations

import re

from .ids import id_from_content

HEADER_PATTERN = re.compile(r"<h([1-6])>(.*?)</h\1>")


def build_header_links(html: str, filepath: str) -> str:
    """Wrap every heading in ``html`` with an anchor linking to itself.

    Parameters
    ----------
    html : str
        Rendered page HTML.
    filepath : str
        Page path used as the ``href`` prefix (for example,
        ``"guide/install.html"``).

    Returns
    -------
    str
        HTML where each ``<hN>…</hN>`` is replaced by
        ``<a class="header" href="{filepath}#{id}" id="{id}"><hN>…</hN></a>``.
        Repeated ids on the page get ``-1``, ``-2``, … suffixes in document
        order. Headings carrying attributes are left untouched.
    """
    id_counter: dict[str, int] = {}

    def _repl(match: re.Match[str]) -> str:
        level = int(match.group(1))
        return wrap_header_with_link(level, match.group(2), id_counter, filepath)

    return HEADER_PATTERN.sub(_repl, html)


def wrap_header_with_link(
    level: int, content: str, id_counter: dict[str, int], filepath: str
) -> str:
    """Return one heading wrapped in its self-link, updating ``id_counter``."""
    raw_id = id_from_content(content)
    count = id_counter.get(raw_id, 0)
    anchor_id = raw_id if count == 0 else f"{raw_id}-{count}"
    id_counter[raw_id] = count + 1
    return (
        f'<a class="header" href="{filepath}#{anchor_id}" id="{anchor_id}">'
        f"<h{level}>{content}</h{level}></a>"
    )


__all__ = ["HEADER_PATTERN", "build_header_links", "wrap_header_with_link"]
