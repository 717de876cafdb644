"""Shared fixtures for writing small books to disk."""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


@pytest.fixture
def write_book(tmp_path: Path) -> cabc.Callable[[str, dict[str, str]], Path]:
    """Return a helper writing ``book.yaml`` and chapter sources under tmp_path.

    The helper takes the YAML text and a mapping of source-relative chapter
    paths to markdown, and returns the config path.
    """

    def _write(config_yaml: str, chapters: dict[str, str]) -> Path:
        src = tmp_path / "src"
        for rel_path, markdown in chapters.items():
            target = src / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(markdown, encoding="utf-8")
        config_path = tmp_path / "book.yaml"
        config_path.write_text(config_yaml.strip() + "\n", encoding="utf-8")
        return config_path

    return _write
