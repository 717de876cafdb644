r"""Parse chapter markdown into a flat stream of events.

The search indexer does not need a tree: it walks headings, text, and raw HTML
in document order and decides section boundaries as it goes. This module
builds the ``markdown.Markdown`` instances shared by the HTML renderer and the
indexer, and registers a treeprocessor that flattens the parsed element tree
(resolving stashed raw HTML, entities, and fenced code) into
:class:`MarkdownEvent` values.

Example
-------
>>> from bookpages.markdown_parser import EventKind, iter_events
>>> events = list(iter_events("## Intro\nBody text"))
>>> [event.kind for event in events][:3]
[<EventKind.HEADING_START: 'heading_start'>, <EventKind.TEXT: 'text'>, <EventKind.HEADING_END: 'heading_end'>]
"""

from __future__ import annotations

import dataclasses as dc
import enum
import html
import re
import typing as typ

from markdown import Markdown, util
from markdown.extensions import Extension
from markdown.postprocessors import Postprocessor
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

MARKDOWN_EXTENSIONS: tuple[str, ...] = ("fenced_code", "tables", "footnotes", "sane_lists")

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_INFO_PATTERN = re.compile(r"^([`~]{3,})[ ]*([^\s`{}=]+)[^\n]*$", re.MULTILINE)
STASHED_CODE_PATTERN = re.compile(
    r"^<pre[^>]*><code[^>]*>(.*)</code></pre>\s*$", re.DOTALL
)
ENTITY_REFERENCE_PATTERN = re.compile(
    r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);"
)
MARKUP_CHARACTERS = frozenset('<>&"')
SMARTY_CONFIG: dict[str, typ.Any] = {
    "smart_angled_quotes": False,
    "smart_dashes": False,
    "smart_ellipses": False,
    "substitutions": {
        "left-single-quote": "‘",
        "right-single-quote": "’",
        "left-double-quote": "“",
        "right-double-quote": "”",
    },
}
LEFTOVER_PLACEHOLDER_PATTERN = re.compile(f"{util.STX}[^{util.STX}{util.ETX}]*{util.ETX}")
HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})


class EventKind(enum.Enum):
    """Kinds of events emitted while walking markdown."""

    HEADING_START = "heading_start"
    HEADING_END = "heading_end"
    TEXT = "text"
    HTML = "html"
    SOFT_BREAK = "soft_break"
    HARD_BREAK = "hard_break"
    FOOTNOTE_REFERENCE = "footnote_reference"
    START = "start"
    END = "end"


@dc.dataclass(slots=True, frozen=True)
class MarkdownEvent:
    """A single event in document order.

    Attributes
    ----------
    kind : EventKind
        What the event represents.
    level : int
        Heading level for heading events; ``0`` otherwise.
    text : str
        Literal text for ``TEXT`` and ``HTML`` events; empty otherwise.
    """

    kind: EventKind
    level: int = 0
    text: str = ""


def normalize_fences(text: str) -> str:
    """Rewrite fence openers so their full info string survives as a class.

    ``fenced_code`` only accepts word characters after the fence, so an
    annotated opener such as ```` ```rust,should_panic ```` is turned into the
    attribute form ```` ```{.rust,should_panic} ````, which renders as
    ``<code class="language-rust,should_panic">``. Fences indented by one to
    three spaces are moved to the first column.
    """
    without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

    def _to_attrs(match: re.Match[str]) -> str:
        fence, info = match.groups()
        return f"{fence}{{.{info}}}"

    return FENCE_INFO_PATTERN.sub(_to_attrs, without_indent)


def create_markdown(
    *,
    curly_quotes: bool = False,
    extensions: cabc.Sequence[Extension] = (),
) -> Markdown:
    """Return a Markdown instance with the extensions books rely on.

    Parameters
    ----------
    curly_quotes : bool, optional
        Enable ``smarty`` so straight quotes become typographic. Quotes are
        written as characters rather than entities; dashes, ellipses and
        angled quotes are left alone.
    extensions : Sequence[Extension], optional
        Additional extension instances to register.
    """
    enabled: list[Extension | str] = [*MARKDOWN_EXTENSIONS, EntityDecodingExtension()]
    if curly_quotes:
        enabled.append("smarty")
    enabled.extend(extensions)
    return Markdown(extensions=enabled, extension_configs={"smarty": SMARTY_CONFIG})


class EntityDecodingPostprocessor(Postprocessor):
    """Replace character references with the characters they name.

    References that decode to ``<``, ``>``, ``&`` or ``"`` stay escaped so the
    output remains well-formed.
    """

    def run(self, text: str) -> str:
        """Return ``text`` with named and numeric references decoded."""

        def _decode(match: re.Match[str]) -> str:
            reference = match.group(0)
            decoded = html.unescape(reference)
            if decoded == reference or decoded in MARKUP_CHARACTERS:
                return reference
            return decoded

        return ENTITY_REFERENCE_PATTERN.sub(_decode, text)


class EntityDecodingExtension(Extension):
    """Decode character references once raw HTML has been restored."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the decoder after the raw HTML and ampersand postprocessors."""
        md.postprocessors.register(
            EntityDecodingPostprocessor(md), "bookpages_entities", 5
        )


class EventStreamExtension(Extension):
    """Collect a flat event stream from the final element tree."""

    def __init__(self, events: list[MarkdownEvent]) -> None:
        super().__init__()
        self.events = events

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the collector after every built-in treeprocessor."""
        md.treeprocessors.register(
            EventStreamTreeprocessor(md, self.events), "bookpages_events", -10
        )


class EventStreamTreeprocessor(Treeprocessor):
    """Walk the parsed tree in document order, appending events."""

    def __init__(self, md: Markdown, events: list[MarkdownEvent]) -> None:
        super().__init__(md)
        self.events = events

    def run(self, root: Element) -> None:
        """Flatten every child of the document root."""
        for child in root:
            self._walk(child)

    def _walk(self, element: Element) -> None:
        tag = element.tag
        if tag in HEADING_TAGS:
            level = int(tag[1])
            self._emit(EventKind.HEADING_START, level=level)
            self._children(element)
            self._emit(EventKind.HEADING_END, level=level)
        elif tag == "br":
            self._emit(EventKind.HARD_BREAK)
        elif tag == "img":
            self._emit(EventKind.START)
            if alt := element.get("alt"):
                self._emit(EventKind.TEXT, text=alt)
            self._emit(EventKind.END)
        elif tag == "sup" and element.get("id", "").startswith("fnref"):
            self._emit(EventKind.FOOTNOTE_REFERENCE)
        elif tag == "a" and "footnote-backref" in element.get("class", ""):
            pass
        else:
            self._emit(EventKind.START)
            self._children(element)
            self._emit(EventKind.END)

        if element.tail and not self.md.is_block_level(tag):
            self._text(element.tail)

    def _children(self, element: Element) -> None:
        text = element.text
        if text and not (self.md.is_block_level(element.tag) and not text.strip()):
            if element.tag == "code":
                self._emit(EventKind.TEXT, text=html.unescape(text))
            else:
                self._text(text)
        for child in element:
            self._walk(child)

    def _text(self, text: str) -> None:
        """Emit text, resolving stashed HTML and splitting soft breaks."""
        for position, part in enumerate(util.HTML_PLACEHOLDER_RE.split(text)):
            if position % 2:
                self._stashed(self.md.htmlStash.rawHtmlBlocks[int(part)])
                continue
            lines = LEFTOVER_PLACEHOLDER_PATTERN.sub("", part).split("\n")
            for line_no, line in enumerate(lines):
                if line_no:
                    self._emit(EventKind.SOFT_BREAK)
                if line:
                    self._emit(EventKind.TEXT, text=line)

    def _stashed(self, raw: str | Element) -> None:
        raw_html = raw if isinstance(raw, str) else ""
        if code := STASHED_CODE_PATTERN.match(raw_html):
            self._emit(EventKind.TEXT, text=html.unescape(code.group(1)))
        elif raw_html and "<" not in raw_html:
            # entities and smarty quotes are stashed as bare text
            self._emit(EventKind.TEXT, text=html.unescape(raw_html))
        elif raw_html:
            self._emit(EventKind.HTML, text=raw_html)

    def _emit(self, kind: EventKind, *, level: int = 0, text: str = "") -> None:
        self.events.append(MarkdownEvent(kind, level=level, text=text))


def iter_events(
    markdown_text: str, *, curly_quotes: bool = False
) -> cabc.Iterator[MarkdownEvent]:
    """Yield a flat event stream for ``markdown_text``.

    Parameters
    ----------
    markdown_text : str
        Raw markdown source.
    curly_quotes : bool, optional
        Parse with the same typographic quotes the page renderer uses, so
        heading text matches the rendered anchors.

    Yields
    ------
    MarkdownEvent
        Heading boundaries, text, raw HTML, breaks, footnote references, and
        generic start/end markers for every other element.
    """
    events: list[MarkdownEvent] = []
    md = create_markdown(
        curly_quotes=curly_quotes, extensions=[EventStreamExtension(events)]
    )
    md.convert(normalize_fences(markdown_text))
    yield from events


__all__ = [
    "MARKDOWN_EXTENSIONS",
    "EntityDecodingExtension",
    "EventKind",
    "EventStreamExtension",
    "MarkdownEvent",
    "create_markdown",
    "iter_events",
    "normalize_fences",
]
