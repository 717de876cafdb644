"""Normalize code-block classes and wrap runnable snippets for the playpen.

Fenced blocks may carry comma-separated annotations (```` ```rust,should_panic ````)
which the markdown renderer copies verbatim into the ``class`` attribute.
:func:`fix_code_blocks` turns those into space-separated classes, and
:func:`add_playpen_pre` wraps runnable blocks in ``<pre class="playpen">``,
injecting an implicit ``main`` when the snippet does not define one. Lines
starting with ``#`` are collapsed by the client-side viewer.
"""

from __future__ import annotations

import re
import typing as typ

from bookpages._constants import (
    ATTRIBUTE_PREFIX,
    EDITABLE_CLASS,
    ENTRY_POINT_MARKERS,
    IGNORE_CLASS,
    RUNNABLE_CLASS,
    RUNNABLE_LANGUAGE_CLASS,
)

if typ.TYPE_CHECKING:
    from bookpages.config import PlaypenConfig

CODE_CLASS_PATTERN = re.compile(r'<code([^>]+)class="([^"]+)"([^>]*)>')
CODE_BLOCK_PATTERN = re.compile(
    r'(<code[^>]?class="([^"]+)".*?>(.*?)</code>)', re.DOTALL
)


def fix_code_blocks(html: str) -> str:
    """Replace commas with spaces in every ``<code class="…">`` value."""

    def _repl(match: re.Match[str]) -> str:
        before, classes, after = match.groups()
        return f'<code{before}class="{classes.replace(",", " ")}"{after}>'

    return CODE_CLASS_PATTERN.sub(_repl, html)


def add_playpen_pre(html: str, playpen_config: PlaypenConfig) -> str:
    """Wrap runnable code blocks in ``<pre class="playpen">``.

    Parameters
    ----------
    html : str
        Page HTML, normally already passed through :func:`fix_code_blocks`.
    playpen_config : PlaypenConfig
        Playpen options; ``editable`` lets blocks marked ``editable`` keep
        their source untouched.

    Returns
    -------
    str
        HTML in which runnable blocks are wrapped. Blocks defining their own
        entry point (or editable ones) are wrapped as-is; the rest get hidden
        scaffolding around their body. Every other block is returned
        unchanged.
    """

    def _repl(match: re.Match[str]) -> str:
        text, classes, code = match.groups()
        if not _is_runnable(classes):
            return text
        if (playpen_config.editable and EDITABLE_CLASS in classes) or any(
            marker in text for marker in ENTRY_POINT_MARKERS
        ):
            return f'<pre class="playpen">{text}</pre>'
        attrs, body = partition_source(code)
        return (
            f'<pre class="playpen"><code class="{classes}">\n'
            "# #![allow(unused_variables)]\n"
            f"{attrs}#fn main() {{\n"
            f"{body}"
            "#}</code></pre>"
        )

    return CODE_BLOCK_PATTERN.sub(_repl, html)


def _is_runnable(classes: str) -> bool:
    return (
        RUNNABLE_LANGUAGE_CLASS in classes and IGNORE_CLASS not in classes
    ) or RUNNABLE_CLASS in classes


def partition_source(source: str) -> tuple[str, str]:
    """Split ``source`` into leading attribute lines and the remaining body.

    Leading lines that are blank or start with ``#![`` form the header; the
    first other line, and everything after it, forms the body. Each returned
    line ends with ``\\n``.
    """
    after_header = False
    before: list[str] = []
    after: list[str] = []
    for line in source.splitlines():
        trimmed = line.strip()
        header = not trimmed or trimmed.startswith(ATTRIBUTE_PREFIX)
        if not header or after_header:
            after_header = True
            after.append(f"{line}\n")
        else:
            before.append(f"{line}\n")
    return "".join(before), "".join(after)


__all__ = [
    "CODE_BLOCK_PATTERN",
    "CODE_CLASS_PATTERN",
    "add_playpen_pre",
    "fix_code_blocks",
    "partition_source",
]
