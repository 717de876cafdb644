"""Helpers for rewriting same-page fragment links to page-qualified URLs.

Every page carries ``<base href="{path_to_root}">`` so that asset and chapter
links resolve from the book root. A bare ``href="#section"`` would then point
at the root page instead of the current one, so fragment links are prefixed
with the page's own path.
"""

from __future__ import annotations

import re

FRAGMENT_LINK_PATTERN = re.compile(r'<a([^>]+)href="#([^"]+)"([^>]*)>')


def fix_anchor_links(html: str, filepath: str) -> str:
    """Rewrite ``href="#x"`` anchors in ``html`` to ``href="{filepath}#x"``.

    Parameters
    ----------
    html : str
        Rendered page HTML.
    filepath : str
        Path of the page being processed, relative to the book root.

    Returns
    -------
    str
        HTML with fragment links qualified; other attributes keep their
        original order and spacing.

    Examples
    --------
    >>> fix_anchor_links('<a href="#intro">Intro</a>', "guide/a.html")
    '<a href="guide/a.html#intro">Intro</a>'
    """

    def _repl(match: re.Match[str]) -> str:
        before, anchor, after = match.groups()
        return f'<a{before}href="{filepath}#{anchor}"{after}>'

    return FRAGMENT_LINK_PATTERN.sub(_repl, html)


__all__ = ["FRAGMENT_LINK_PATTERN", "fix_anchor_links"]
