from __future__ import annotations

from pagereader.dispatch import render
from pagereader.html_adapter import node_to_html, render_page, to_html
from pagereader.json_tree import render_json
from pagereader.nodes import CodeBlock, PlainLine, TagList


def test_heading_and_paragraph() -> None:
    assert to_html(render("# T\nSome **b**")) == "<h1>T</h1>\n<p>Some <strong>b</strong></p>"


def test_text_is_escaped() -> None:
    assert to_html(render("a < b & c")) == "<p>a &lt; b &amp; c</p>"


def test_links_open_in_new_context() -> None:
    assert to_html(render("[d](https://x.io)")) == (
        '<p><a href="https://x.io" target="_blank" rel="noopener noreferrer">d</a></p>'
    )


def test_lists() -> None:
    assert to_html(render("- a\n- b")) == "<ul><li>a</li><li>b</li></ul>"
    assert to_html(render("1. a")) == "<ol><li>a</li></ol>"


def test_code_block_with_language_header() -> None:
    html = node_to_html(CodeBlock(language="py", lines=("if a < b:", "    pass")))
    assert '<div class="code-language">py</div>' in html
    assert '<code class="language-py">if a &lt; b:\n    pass</code>' in html


def test_code_block_without_language() -> None:
    assert node_to_html(CodeBlock(language="", lines=("x",))) == (
        '<div class="code-block"><pre><code>x</code></pre></div>'
    )


def test_blockquote_and_rule() -> None:
    assert to_html(render("> a\n> b\n---")) == "<blockquote><p>a</p><p>b</p></blockquote>\n<hr>"


def test_tags() -> None:
    assert node_to_html(TagList(tags=("x", "y"))) == (
        '<div class="tags"><span class="tags-label">Tags:</span>'
        '<span class="tag">x</span><span class="tag">y</span></div>'
    )


def test_raw_html_is_not_escaped() -> None:
    assert to_html(render("<b>x</b>", "html")) == '<div class="html-content"><b>x</b></div>'


def test_json_inline_array() -> None:
    assert node_to_html(render_json("[1, 2]")) == (
        '<div class="json"><span><span class="json-punct">[</span>'
        '<span class="json-number">1</span><span class="json-punct">, </span>'
        '<span class="json-number">2</span><span class="json-punct">]</span></span></div>'
    )


def test_json_object_entries() -> None:
    html = node_to_html(render_json('{"k": "v<", "n": null, "o": {"b": false}}'))
    assert '<span class="json-key">k</span>' in html
    assert '<span class="json-string">&quot;v&lt;&quot;</span>' in html
    assert '<span class="json-null">null</span>' in html
    assert '<div class="json-value"><div class="json-object nested">' in html
    assert '<span class="json-bool">false</span>' in html


def test_json_block_array_has_trailing_commas() -> None:
    html = node_to_html(render_json('[{"a": 1}, {"a": 2}]'))
    assert html.count('<div class="json-item nested">') == 2
    assert html.count('<span class="json-punct">,</span>') == 1


def test_json_empty_containers() -> None:
    assert node_to_html(render_json("[]")) == '<div class="json"><span class="json-punct">[]</span></div>'
    assert node_to_html(render_json("{}")) == '<div class="json"><span class="json-punct">{}</span></div>'


def test_json_fallback_is_preformatted() -> None:
    assert to_html(render("<oops>", "json")) == '<pre class="preformatted">&lt;oops&gt;</pre>'


def test_plain_lines() -> None:
    assert node_to_html(PlainLine(style="heading", text="TITLE")) == (
        '<h3 class="plain-heading">TITLE</h3>'
    )
    assert node_to_html(PlainLine(style="list-like", text="- a")) == '<p class="plain-list">- a</p>'
    assert node_to_html(PlainLine(style="spacer", text="")) == '<div class="spacer"></div>'
    assert node_to_html(PlainLine(style="text", text=" t ")) == "<p> t </p>"


def test_render_page() -> None:
    page = render_page("# Hi", "markdown", title="A & B")
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>A &amp; B</title>" in page
    assert "<h1>Hi</h1>" in page
    assert page.endswith("</html>\n")
