"""Utility helpers shared by the bookpages configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import (
    BookConfigError,
    HtmlConfig,
    PlaypenConfig,
    SearchConfig,
    SummaryEntry,
)

DEFAULT_SRC_DIR = "src"
DEFAULT_BUILD_DIR = "book"
DEFAULT_LANGUAGE = "en"
HEADING_LEVELS = range(1, 7)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_bool(value: object, *, default: bool, field: str) -> bool:
    """Return ``value`` as a bool, rejecting anything YAML did not type as one."""
    match value:
        case None:
            return default
        case bool():
            return value
        case _:
            msg = f"'{field}' must be true or false, got {value!r}."
            raise BookConfigError(msg)


def _coerce_int(value: object, *, default: int, field: str) -> int:
    """Return ``value`` as a non-negative int."""
    match value:
        case None:
            return default
        case bool():
            msg = f"'{field}' must be an integer, got {value!r}."
            raise BookConfigError(msg)
        case int() if value >= 0:
            return value
        case _:
            msg = f"'{field}' must be a non-negative integer, got {value!r}."
            raise BookConfigError(msg)


def _mapping(value: object, *, field: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` when it is a mapping; treat ``None`` as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{field}' must be a mapping."
        raise BookConfigError(msg)
    return value


def _path_list(value: object, *, base: Path, field: str) -> list[Path]:
    """Resolve a list of relative paths against ``base``."""
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"'{field}' must be a list of paths."
        raise BookConfigError(msg)
    return [base / str(item) for item in value if _optional_str(item)]


def _build_playpen_config(payload: typ.Mapping[str, typ.Any]) -> PlaypenConfig:
    """Build a PlaypenConfig from the ``output.html.playpen`` mapping."""
    base = PlaypenConfig()
    return PlaypenConfig(
        editable=_coerce_bool(
            payload.get("editable"), default=base.editable, field="playpen.editable"
        )
    )


def _build_search_config(payload: typ.Mapping[str, typ.Any]) -> SearchConfig:
    """Build a SearchConfig from the ``output.html.search`` mapping."""
    base = SearchConfig()
    bools = {
        name: _coerce_bool(
            payload.get(name), default=getattr(base, name), field=f"search.{name}"
        )
        for name in ("enable", "use_boolean_and", "expand")
    }
    ints = {
        name: _coerce_int(
            payload.get(name), default=getattr(base, name), field=f"search.{name}"
        )
        for name in (
            "limit_results",
            "teaser_word_count",
            "boost_title",
            "boost_hierarchy",
            "boost_paragraph",
            "split_until_heading",
        )
    }
    if ints["split_until_heading"] not in HEADING_LEVELS:
        msg = (
            "'search.split_until_heading' must be between 1 and 6, "
            f"got {ints['split_until_heading']}."
        )
        raise BookConfigError(msg)
    return SearchConfig(**bools, **ints)


def _build_html_config(
    payload: typ.Mapping[str, typ.Any], *, root: Path
) -> HtmlConfig:
    """Build an HtmlConfig from the ``output.html`` mapping."""
    base = HtmlConfig()
    return HtmlConfig(
        curly_quotes=_coerce_bool(
            payload.get("curly_quotes"),
            default=base.curly_quotes,
            field="html.curly_quotes",
        ),
        mathjax_support=_coerce_bool(
            payload.get("mathjax_support"),
            default=base.mathjax_support,
            field="html.mathjax_support",
        ),
        additional_css=_path_list(
            payload.get("additional_css"), base=root, field="html.additional_css"
        ),
        additional_js=_path_list(
            payload.get("additional_js"), base=root, field="html.additional_js"
        ),
        playpen=_build_playpen_config(
            _mapping(payload.get("playpen"), field="html.playpen")
        ),
        search=_build_search_config(
            _mapping(payload.get("search"), field="html.search")
        ),
        google_analytics=_optional_str(payload.get("google_analytics")),
        livereload_url=_optional_str(payload.get("livereload_url")),
    )


def _build_summary(entries: object, *, field: str = "summary") -> list[SummaryEntry]:
    """Convert nested summary mappings into SummaryEntry trees."""
    if entries is None:
        return []
    if not isinstance(entries, list):
        msg = f"'{field}' must be a list."
        raise BookConfigError(msg)

    result: list[SummaryEntry] = []
    for idx, payload in enumerate(entries):
        location = f"{field}[{idx}]"
        match payload:
            case {"separator": True}:
                result.append(SummaryEntry(separator=True))
            case dict():
                title = _optional_str(payload.get("title"))
                path = _optional_str(payload.get("path"))
                if not title or not path:
                    msg = f"'{location}' needs both 'title' and 'path'."
                    raise BookConfigError(msg)
                children = _build_summary(
                    payload.get("children"), field=f"{location}.children"
                )
                result.append(
                    SummaryEntry(title=title, path=Path(path), children=children)
                )
            case _:
                msg = f"'{location}' must be a mapping."
                raise BookConfigError(msg)
    return result


__all__ = [
    "DEFAULT_BUILD_DIR",
    "DEFAULT_LANGUAGE",
    "DEFAULT_SRC_DIR",
    "_build_html_config",
    "_build_playpen_config",
    "_build_search_config",
    "_build_summary",
    "_coerce_bool",
    "_coerce_int",
    "_mapping",
    "_optional_str",
    "_path_list",
]
