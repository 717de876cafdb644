"""Render a tree of markdown chapters into a browsable, searchable site.

This package exposes the CLI entry points used by ``bookpages build`` to turn
a ``book.yaml`` summary and its markdown chapters into static HTML pages, a
print page, and a ``searchindex.json`` payload.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from bookpages import main
>>> main()  # doctest: +SKIP
>>> from bookpages import app
>>> isinstance(app.name[0], str)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
