"""Presentation adapter: document nodes to HTML.

This layer is swappable; the parsers never import it. Every piece of text is
escaped except `Raw.html`, which the HTML path has already sanitized (see
`pagereader.sanitize` for what that does and does not cover).
"""

from __future__ import annotations

from collections.abc import Iterable
from html import escape

from pagereader.dispatch import render
from pagereader.nodes import (
    Blockquote,
    Bold,
    Code,
    CodeBlock,
    Heading,
    HorizontalRule,
    Italic,
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    Link,
    ListBlock,
    Paragraph,
    PlainLine,
    Preformatted,
    Raw,
    RenderNode,
    Span,
    TagList,
    Text,
)

DEFAULT_TITLE = "Page Reader Result"

_PAGE_STYLE = """\
body { font-family: system-ui, sans-serif; max-width: 48rem; margin: 2rem auto; line-height: 1.6; }
.code-block { border: 1px solid #ccc; border-radius: 8px; margin: 1rem 0; overflow: hidden; }
.code-language { font: 0.75rem monospace; padding: 0.25rem 0.75rem; background: #eee; }
.code-block pre { margin: 0; padding: 0.75rem; overflow-x: auto; }
blockquote { border-left: 4px solid #88a; margin: 1rem 0; padding: 0.25rem 1rem; font-style: italic; }
.tags { margin-top: 1.5rem; border-top: 1px solid #ccc; padding-top: 1rem; }
.tag { display: inline-block; padding: 0 0.5rem; margin: 0 0.25rem; border-radius: 999px; background: #dde; }
.json { font-family: monospace; }
.json .nested { margin-left: 1rem; }
.json-object.nested { border-left: 2px solid #ccc; padding-left: 0.75rem; }
.json-string { color: #197; } .json-number { color: #b70; } .json-bool { color: #74b; }
.json-null { color: #888; font-style: italic; } .json-key { font-weight: 600; }
.plain-list { padding-left: 1rem; } .spacer { height: 0.5rem; }
"""


def spans_to_html(spans: Iterable[Span]) -> str:
    out: list[str] = []
    for span in spans:
        if isinstance(span, Text):
            out.append(escape(span.text))
        elif isinstance(span, Bold):
            out.append(f"<strong>{escape(span.text)}</strong>")
        elif isinstance(span, Italic):
            out.append(f"<em>{escape(span.text)}</em>")
        elif isinstance(span, Code):
            out.append(f"<code>{escape(span.text)}</code>")
        elif isinstance(span, Link):
            out.append(
                f'<a href="{escape(span.url)}" target="_blank" rel="noopener noreferrer">'
                f"{escape(span.label)}</a>"
            )
    return "".join(out)


def _punct(s: str) -> str:
    return f'<span class="json-punct">{escape(s)}</span>'


def _nested_class(base: str, depth: int) -> str:
    return f"{base} nested" if depth > 0 else base


def json_to_html(value: JsonValue) -> str:
    if isinstance(value, JsonNull):
        return '<span class="json-null">null</span>'
    if isinstance(value, JsonBool):
        return f'<span class="json-bool">{"true" if value.value else "false"}</span>'
    if isinstance(value, JsonNumber):
        return f'<span class="json-number">{escape(value.literal)}</span>'
    if isinstance(value, JsonString):
        return f'<span class="json-string">&quot;{escape(value.value)}&quot;</span>'
    if isinstance(value, JsonArray):
        if not value.items:
            return _punct("[]")
        if value.inline:
            inner = _punct(", ").join(json_to_html(item) for item in value.items)
            return f"<span>{_punct('[')}{inner}{_punct(']')}</span>"
        rows = []
        last = len(value.items) - 1
        for i, item in enumerate(value.items):
            comma = _punct(",") if i < last else ""
            rows.append(f'<div class="json-item nested">{json_to_html(item)}{comma}</div>')
        cls = _nested_class("json-array", value.depth)
        return f'<div class="{cls}">{_punct("[")}{"".join(rows)}{_punct("]")}</div>'
    if isinstance(value, JsonObject):
        if not value.entries:
            return _punct("{}")
        rows = []
        for entry in value.entries:
            rendered = json_to_html(entry.value)
            if entry.nested:
                rendered = f'<div class="json-value">{rendered}</div>'
            rows.append(
                f'<div class="json-entry"><span class="json-key">{escape(entry.key)}</span>'
                f"{_punct(': ')}{rendered}</div>"
            )
        return f'<div class="{_nested_class("json-object", value.depth)}">{"".join(rows)}</div>'
    raise TypeError(f"not a JSON node: {type(value).__name__}")


def node_to_html(node: RenderNode) -> str:
    """Render a single document node."""

    if isinstance(node, Heading):
        return f"<h{node.level}>{spans_to_html(node.spans)}</h{node.level}>"
    if isinstance(node, Paragraph):
        return f"<p>{spans_to_html(node.spans)}</p>"
    if isinstance(node, ListBlock):
        tag = "ol" if node.ordered else "ul"
        items = "".join(f"<li>{spans_to_html(item)}</li>" for item in node.items)
        return f"<{tag}>{items}</{tag}>"
    if isinstance(node, CodeBlock):
        body = escape("\n".join(node.lines))
        if not node.language:
            return f'<div class="code-block"><pre><code>{body}</code></pre></div>'
        lang = escape(node.language)
        return (
            f'<div class="code-block"><div class="code-language">{lang}</div>'
            f'<pre><code class="language-{lang}">{body}</code></pre></div>'
        )
    if isinstance(node, Blockquote):
        lines = "".join(f"<p>{spans_to_html(line)}</p>" for line in node.lines)
        return f"<blockquote>{lines}</blockquote>"
    if isinstance(node, HorizontalRule):
        return "<hr>"
    if isinstance(node, TagList):
        tags = "".join(f'<span class="tag">{escape(t)}</span>' for t in node.tags)
        return f'<div class="tags"><span class="tags-label">Tags:</span>{tags}</div>'
    if isinstance(node, Raw):
        return f'<div class="html-content">{node.html}</div>'
    if isinstance(node, Preformatted):
        return f'<pre class="preformatted">{escape(node.text)}</pre>'
    if isinstance(node, PlainLine):
        if node.style == "heading":
            return f'<h3 class="plain-heading">{escape(node.text)}</h3>'
        if node.style == "list-like":
            return f'<p class="plain-list">{escape(node.text)}</p>'
        if node.style == "spacer":
            return '<div class="spacer"></div>'
        return f"<p>{escape(node.text)}</p>"
    return f'<div class="json">{json_to_html(node)}</div>'


def to_html(nodes: Iterable[RenderNode]) -> str:
    """Render document nodes as an HTML fragment, one block per line."""

    return "\n".join(node_to_html(node) for node in nodes)


def wrap_page(body: str, *, title: str = DEFAULT_TITLE) -> str:
    """Wrap an HTML fragment in a minimal standalone document."""

    return (
        "<!DOCTYPE html>\n"
        '<html>\n<head>\n<meta charset="utf-8">\n'
        f"<title>{escape(title)}</title>\n"
        f"<style>\n{_PAGE_STYLE}</style>\n"
        f"</head>\n<body>\n{body}\n</body>\n</html>\n"
    )


def render_page(text: str, format: str | None = None, *, title: str = DEFAULT_TITLE) -> str:
    """Render `text` as a standalone HTML document."""

    return wrap_page(to_html(render(text, format)), title=title)
