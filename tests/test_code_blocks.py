"""Unit tests for code-block class normalisation and playpen wrapping.

The HTML fixtures follow what the markdown renderer emits for fenced blocks:
``<pre><code class="language-…">…</code></pre>`` with the info string copied
verbatim into the class attribute.
"""

from __future__ import annotations

import pytest

from bookpages.config import PlaypenConfig
from bookpages.generator.code_blocks import (
    add_playpen_pre,
    fix_code_blocks,
    partition_source,
)

SCAFFOLD_OPEN = "\n# #![allow(unused_variables)]\n"


def test_commas_in_code_class_become_spaces() -> None:
    """Comma-separated annotations turn into separate classes."""
    html = '<pre><code class="language-rust,should_panic">panic!();</code></pre>'
    assert fix_code_blocks(html) == (
        '<pre><code class="language-rust should_panic">panic!();</code></pre>'
    )


def test_space_separated_classes_are_idempotent() -> None:
    """Already normalised classes are returned unchanged."""
    html = '<code class="language-rust should_panic">x</code>'
    assert fix_code_blocks(html) == html
    assert fix_code_blocks(fix_code_blocks(html)) == html


def test_surrounding_code_attributes_preserved() -> None:
    """Only the class value changes; other attributes stay in place."""
    html = '<code data-lang="rust" class="a,b,c" id="snippet">x</code>'
    assert fix_code_blocks(html) == (
        '<code data-lang="rust" class="a b c" id="snippet">x</code>'
    )


def test_inline_code_without_class_untouched() -> None:
    """Commas inside inline code text are not touched."""
    html = "<p><code>a, b</code></p>"
    assert fix_code_blocks(html) == html


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        (
            "#![feature(x)]\n\nlet x = 1;\n#![not_header]\n",
            ("#![feature(x)]\n\n", "let x = 1;\n#![not_header]\n"),
        ),
        ("", ("", "")),
        ("let x;", ("", "let x;\n")),
        ("   \n  #![a]\n", ("   \n  #![a]\n", "")),
        ("struct S;\n\n#![late]\n", ("", "struct S;\n\n#![late]\n")),
    ],
)
def test_partition_source(source: str, expected: tuple[str, str]) -> None:
    """Header lines latch into the body at the first non-header line."""
    assert partition_source(source) == expected


def test_runnable_block_gets_implicit_main() -> None:
    """Blocks without an entry point are wrapped in hidden scaffolding."""
    html = '<pre><code class="language-rust">let x = 5;\nprintln!(x);\n</code></pre>'
    actual = add_playpen_pre(html, PlaypenConfig(editable=False))
    assert actual == (
        '<pre><pre class="playpen"><code class="language-rust">'
        f"{SCAFFOLD_OPEN}"
        "#fn main() {\n"
        "let x = 5;\n"
        "println!(x);\n"
        "#}</code></pre></pre>"
    )


def test_attribute_lines_stay_above_implicit_main() -> None:
    """Leading crate attributes are kept before the injected ``main``."""
    html = '<code class="language-rust">#![allow(dead_code)]\nstruct S;\n</code>'
    actual = add_playpen_pre(html, PlaypenConfig())
    assert actual == (
        '<pre class="playpen"><code class="language-rust">'
        f"{SCAFFOLD_OPEN}"
        "#![allow(dead_code)]\n"
        "#fn main() {\n"
        "struct S;\n"
        "#}</code></pre>"
    )


@pytest.mark.parametrize(
    "code",
    ["fn main() {\n    run();\n}\n", "quick_main!(run);\n"],
)
def test_block_with_entry_point_wrapped_as_is(code: str) -> None:
    """Snippets that define their own entry point are not rewritten."""
    block = f'<code class="language-rust">{code}</code>'
    actual = add_playpen_pre(block, PlaypenConfig())
    assert actual == f'<pre class="playpen">{block}</pre>'


def test_editable_block_wrapped_as_is_when_enabled() -> None:
    """Editable blocks keep their source when the playpen is editable."""
    block = '<code class="language-rust editable">let x = 1;\n</code>'
    actual = add_playpen_pre(block, PlaypenConfig(editable=True))
    assert actual == f'<pre class="playpen">{block}</pre>'


def test_editable_class_ignored_when_playpen_not_editable() -> None:
    """Without the editable option the block is scaffolded as usual."""
    block = '<code class="language-rust editable">let x = 1;\n</code>'
    actual = add_playpen_pre(block, PlaypenConfig(editable=False))
    assert "#fn main() {\nlet x = 1;\n#}" in actual


def test_generic_runnable_marker_enables_wrapping() -> None:
    """The generic marker works regardless of the block's language."""
    block = '<code class="language-text bookpages-runnable">hello\n</code>'
    actual = add_playpen_pre(block, PlaypenConfig())
    assert actual.startswith('<pre class="playpen"><code class="language-text bookpages-runnable">')


@pytest.mark.parametrize(
    "html",
    [
        '<pre><code class="language-toml">a = 1\n</code></pre>',
        '<pre><code class="language-rust ignore">let x = 1;\n</code></pre>',
        "<p><code>let x = 1;</code></p>",
        "<p>No code at all</p>",
    ],
)
def test_non_runnable_blocks_are_byte_identical(html: str) -> None:
    """Blocks without a runnable marker pass through unchanged."""
    assert add_playpen_pre(html, PlaypenConfig()) == html


def test_multiple_blocks_handled_independently() -> None:
    """Each block on the page is judged on its own classes."""
    html = (
        '<code class="language-rust">fn main() {}</code>'
        '<code class="language-python">print(1)</code>'
    )
    actual = add_playpen_pre(html, PlaypenConfig())
    assert actual == (
        '<pre class="playpen"><code class="language-rust">fn main() {}</code></pre>'
        '<code class="language-python">print(1)</code>'
    )
