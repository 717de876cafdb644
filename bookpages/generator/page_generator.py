"""High-level orchestration for rendering a book into static HTML.

This module walks a :class:`~bookpages.book.Book` in document order, renders
every chapter's markdown, wraps it in the shared Jinja template, runs the fixed
post-processing pipeline, and writes the pages alongside ``index.html``,
``print.html``, and ``searchindex.json``. It exposes :class:`BookGenerator`,
which consumes a :class:`~bookpages.config.BookConfig` and the loaded book.

Example
-------
>>> from pathlib import Path
>>> from bookpages.book import load_book
>>> from bookpages.config import load_book_config
>>> from bookpages.generator import BookGenerator
>>> config = load_book_config(Path("book.yaml"))  # doctest: +SKIP
>>> generator = BookGenerator(load_book(config), config)  # doctest: +SKIP
>>> generator.run()  # doctest: +SKIP
[PosixPath('book/intro.html'), PosixPath('book/index.html'), ...]
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from bookpages._constants import (
    INDEX_FILENAME,
    PAGE_TEMPLATE,
    PRINT_FILENAME,
    PRINT_SOURCE,
)
from bookpages.book import Book, Chapter, Separator

from .helpers import path_to_root, path_to_str
from .models import NavEntry, ReservedFilenameError
from .postprocess import post_process
from .renderer import HtmlContentRenderer
from .search import SearchIndex, add_chapter_to_search_index, write_search_index

if typ.TYPE_CHECKING:
    from bookpages.config import BookConfig

logger = logging.getLogger(__name__)


class BookGenerator:
    """Render every chapter of a book into themed HTML pages."""

    def __init__(
        self,
        book: Book,
        config: BookConfig,
        *,
        templates_dir: Path | None = None,
        destination: Path | None = None,
    ) -> None:
        """Initialize the generator with the book, configuration, and templates.

        Parameters
        ----------
        book : Book
            Loaded book whose chapters are rendered.
        config : BookConfig
            Book configuration with HTML, playpen, and search options.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        destination : Path, optional
            Override for the output directory; defaults to
            ``config.build_dir``.
        """
        self.book = book
        self.config = config
        self.html_config = config.html
        self.destination = destination or config.build_dir
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.renderer = HtmlContentRenderer(curly_quotes=config.html.curly_quotes)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(PAGE_TEMPLATE)

    def run(self) -> list[Path]:
        """Render the whole book into the destination directory.

        Returns
        -------
        list[Path]
            Paths of every written file: chapter pages in document order,
            ``index.html`` after the first chapter, then ``searchindex.json``
            and ``print.html``.

        Raises
        ------
        ReservedFilenameError
            If a chapter is named ``print.md``.
        BookRenderError
            If a chapter path cannot be represented as text.
        """
        self.destination.mkdir(parents=True, exist_ok=True)
        data = self.make_data()
        search_index = SearchIndex() if self.html_config.search.enable else None
        print_content: list[str] = []

        written: list[Path] = []
        for position, chapter in enumerate(self.book.chapters()):
            written.extend(
                self._render_chapter(
                    chapter,
                    data,
                    print_content,
                    search_index,
                    is_index=position == 0,
                )
            )

        written.append(
            write_search_index(
                self.destination,
                self.html_config.search,
                search_index or SearchIndex(),
            )
        )
        written.append(self._render_print(data, "".join(print_content)))
        return written

    def make_data(self) -> dict[str, typ.Any]:
        """Return the template data shared by every page."""
        html = self.html_config
        return {
            "language": self.config.language,
            "book_title": self.config.title,
            "description": self.config.description,
            "favicon": "favicon.png",
            "additional_css": [self._asset_name(path) for path in html.additional_css],
            "additional_js": [self._asset_name(path) for path in html.additional_js],
            "mathjax_support": html.mathjax_support,
            "playpens_editable": html.playpen.editable,
            "search": html.search.enable,
            "google_analytics": html.google_analytics,
            "livereload": html.livereload_url,
            "chapters": self._build_nav_entries(),
        }

    def _render_chapter(
        self,
        chapter: Chapter,
        data: dict[str, typ.Any],
        print_content: list[str],
        search_index: SearchIndex | None,
        *,
        is_index: bool,
    ) -> list[Path]:
        """Render, post-process, and write one chapter page."""
        path = path_to_str(chapter.path)
        filepath = path_to_str(chapter.path.with_suffix(".html"), what="HTML path")
        if path == PRINT_SOURCE:
            msg = f"{PRINT_SOURCE} is reserved for the print page: {chapter.path}"
            raise ReservedFilenameError(msg)

        content = self.renderer.markdown(chapter.content)
        print_content.append(content)

        if search_index is not None:
            add_chapter_to_search_index(
                self.html_config.search,
                chapter,
                filepath,
                search_index,
                curly_quotes=self.html_config.curly_quotes,
            )

        context = {
            **data,
            "path": path,
            "current_page": filepath,
            "content": content,
            "chapter_title": chapter.name,
            "title": f"{chapter.name} - {data['book_title']}",
            "path_to_root": path_to_root(chapter.path),
        }
        logger.debug("Render template for %s", path)
        rendered = self.template.render(**context)
        rendered = post_process(rendered, filepath, self.html_config.playpen)

        output_path = self._write(filepath, rendered)
        written = [output_path]
        if is_index:
            written.append(self._render_index(output_path))
        return written

    def _render_index(self, first_page: Path) -> Path:
        """Copy the first chapter to ``index.html`` without its ``<base>`` tag."""
        content = first_page.read_text(encoding="utf-8")
        content = "\n".join(
            line for line in content.splitlines() if "<base href=" not in line
        )
        logger.debug("Creating %s from %s", INDEX_FILENAME, first_page)
        return self._write(INDEX_FILENAME, content)

    def _render_print(self, data: dict[str, typ.Any], content: str) -> Path:
        """Render every chapter's content into the single print page."""
        context = {
            **data,
            "is_print": True,
            "path": PRINT_SOURCE,
            "current_page": PRINT_FILENAME,
            "content": content,
            "title": self.config.title,
            "path_to_root": path_to_root(PRINT_SOURCE),
        }
        rendered = self.template.render(**context)
        rendered = post_process(rendered, PRINT_FILENAME, self.html_config.playpen)
        return self._write(PRINT_FILENAME, rendered)

    def _build_nav_entries(self) -> list[NavEntry]:
        """Build sidebar entries for every chapter and separator."""
        entries: list[NavEntry] = []
        for item in self.book.iter():
            if isinstance(item, Separator):
                entries.append(NavEntry(spacer=True))
                continue
            entries.append(
                NavEntry(
                    name=item.name,
                    path=path_to_str(item.path.with_suffix(".html"), what="HTML path"),
                    section=str(item.number) if item.number else None,
                    depth=len(item.parent_names),
                )
            )
        return entries

    def _asset_name(self, path: Path) -> str:
        """Return ``path`` relative to the book root, or its bare file name."""
        try:
            return path.relative_to(self.config.root).as_posix()
        except ValueError:
            return path.name

    def _write(self, filename: str, content: str) -> Path:
        """Write ``content`` under the destination, creating parent folders."""
        output_path = self.destination / filename
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.debug("Creating %s", filename)
        return output_path


__all__ = ["BookGenerator"]
