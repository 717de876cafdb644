"""Cyclopts CLI entrypoint for rendering books into static HTML.

The ``bookpages`` console script defined here loads ``book.yaml``, reads the
chapters named in its summary, and writes the HTML pages, ``index.html``,
``print.html``, and ``searchindex.json`` into the build directory.

Examples
--------
Build the book described by the default configuration:

>>> from bookpages.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory:

>>> from bookpages.cli import app
>>> app(["build", "--config", "docs/book.yaml", "--dest-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .book import load_book
from .config import load_book_config
from .generator import BookGenerator

DEFAULT_CONFIG = Path("book.yaml")

app = App(name="bookpages", config=cyclopts.config.Env("BOOKPAGES_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


@app.command(help="Render the book's chapters into static HTML pages.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to book config", env_var="BOOKPAGES_CONFIG")
    ] = DEFAULT_CONFIG,
    dest_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the build folder", env_var="BOOKPAGES_DEST_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log each rendering step")
    ] = False,
) -> None:
    """Render every chapter of the configured book.

    Parameters
    ----------
    config : Path, optional
        Path to the ``book.yaml`` configuration file (overridable via
        ``BOOKPAGES_CONFIG``).
    dest_dir : Path or None, optional
        Output directory; defaults to the configured ``build.build_dir``.
    verbose : bool, optional
        Emit debug logging for each rendering step.

    Returns
    -------
    None
        Writes rendered artifacts and prints the generated paths.

    Raises
    ------
    BookConfigError
        If the configuration or a chapter file is invalid or missing.
    BookRenderError
        If a chapter cannot be rendered (for example, a reserved filename).
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    book_config = load_book_config(config)
    book = load_book(book_config)
    generator = BookGenerator(book, book_config, destination=dest_dir)
    for path in generator.run():
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``bookpages`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
