"""Fixed post-processing pipeline applied to every rendered page.

The passes run in this order, once per page:

1. :func:`~bookpages.generator.header_links.build_header_links`
2. :func:`~bookpages.generator.link_rewriter.fix_anchor_links`
3. :func:`~bookpages.generator.code_blocks.fix_code_blocks`
4. :func:`~bookpages.generator.code_blocks.add_playpen_pre`

Header links are emitted page-qualified, so the fragment rewrite leaves them
alone. Class normalization runs before the playpen pass so wrapped blocks
carry space-separated classes.
"""

from __future__ import annotations

import typing as typ

from .code_blocks import add_playpen_pre, fix_code_blocks
from .header_links import build_header_links
from .link_rewriter import fix_anchor_links

if typ.TYPE_CHECKING:
    from bookpages.config import PlaypenConfig


class PostProcessor(typ.Protocol):
    """A pure transform from page HTML to page HTML."""

    def __call__(
        self, html: str, filepath: str, playpen_config: PlaypenConfig
    ) -> str: ...


def _header_links(html: str, filepath: str, _playpen: PlaypenConfig) -> str:
    return build_header_links(html, filepath)


def _anchor_links(html: str, filepath: str, _playpen: PlaypenConfig) -> str:
    return fix_anchor_links(html, filepath)


def _code_classes(html: str, _filepath: str, _playpen: PlaypenConfig) -> str:
    return fix_code_blocks(html)


def _playpen(html: str, _filepath: str, playpen_config: PlaypenConfig) -> str:
    return add_playpen_pre(html, playpen_config)


POST_PROCESSORS: tuple[PostProcessor, ...] = (
    _header_links,
    _anchor_links,
    _code_classes,
    _playpen,
)


def post_process(html: str, filepath: str, playpen_config: PlaypenConfig) -> str:
    """Run every pass in :data:`POST_PROCESSORS` over ``html``.

    Parameters
    ----------
    html : str
        Page HTML as produced by the template.
    filepath : str
        Page path relative to the book root, with ``/`` separators.
    playpen_config : PlaypenConfig
        Options for runnable code blocks.

    Returns
    -------
    str
        Final page HTML.
    """
    for processor in POST_PROCESSORS:
        html = processor(html, filepath, playpen_config)
    return html


__all__ = ["POST_PROCESSORS", "PostProcessor", "post_process"]
