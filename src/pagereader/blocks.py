"""Block-level parser for the Markdown-like dialect models tend to emit.

The parser is a single forward pass over lines. Pending lists, the open code
fence and the current blockquote live in an immutable `_BlockState` that each
step replaces; a step may also emit finished nodes. Nothing emitted is ever
revisited.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from pagereader.inline import parse_spans
from pagereader.nodes import (
    Blockquote,
    CodeBlock,
    Heading,
    HorizontalRule,
    ListBlock,
    Paragraph,
    RenderNode,
    Span,
    TagList,
)

FENCE = "```"
MAX_HEADING_LEVEL = 5

_ORDERED_ITEM_RE = re.compile(r"^[0-9]+\.\s")
_RULES = frozenset({"---", "***", "___"})

Emitted = tuple[RenderNode, ...]


@dataclass(frozen=True, slots=True)
class _BlockState:
    bullets: tuple[tuple[Span, ...], ...] = ()
    numbered: tuple[tuple[Span, ...], ...] = ()
    quote: tuple[tuple[Span, ...], ...] = ()
    code: tuple[str, ...] = ()
    language: str = ""
    in_fence: bool = False


def _flush_bullets(state: _BlockState) -> tuple[_BlockState, Emitted]:
    if not state.bullets:
        return state, ()
    return replace(state, bullets=()), (ListBlock(ordered=False, items=state.bullets),)


def _flush_numbered(state: _BlockState) -> tuple[_BlockState, Emitted]:
    if not state.numbered:
        return state, ()
    return replace(state, numbered=()), (ListBlock(ordered=True, items=state.numbered),)


def _flush_lists(state: _BlockState) -> tuple[_BlockState, Emitted]:
    state, bullets = _flush_bullets(state)
    state, numbered = _flush_numbered(state)
    return state, bullets + numbered


def _flush_quote(state: _BlockState) -> tuple[_BlockState, Emitted]:
    if not state.quote:
        return state, ()
    return replace(state, quote=()), (Blockquote(lines=state.quote),)


def _flush_code(state: _BlockState) -> tuple[_BlockState, Emitted]:
    if not state.code:
        return state, ()
    node = CodeBlock(language=state.language, lines=state.code)
    return replace(state, code=(), language=""), (node,)


def _heading_level(trimmed: str) -> int:
    for level in range(MAX_HEADING_LEVEL, 0, -1):
        if trimmed.startswith("#" * level + " "):
            return level
    return 0


def _parse_tags(rest: str) -> tuple[str, ...]:
    return tuple(t.strip() for t in rest.split(",") if t.strip())


def _step(state: _BlockState, line: str) -> tuple[_BlockState, Emitted]:
    """Consume one line and return the next state plus any finished nodes."""

    trimmed = line.strip()

    if trimmed.startswith(FENCE):
        if state.in_fence:
            return _flush_code(replace(state, in_fence=False))
        state, lists = _flush_lists(state)
        state, quote = _flush_quote(state)
        language = trimmed[len(FENCE) :].strip()
        return replace(state, in_fence=True, language=language), lists + quote

    if state.in_fence:
        # Fenced content is kept verbatim, markers and indentation included.
        return replace(state, code=(*state.code, line)), ()

    if trimmed.startswith("> "):
        state, lists = _flush_lists(state)
        return replace(state, quote=(*state.quote, tuple(parse_spans(trimmed[2:])))), lists

    state, out = _flush_quote(state)

    level = _heading_level(trimmed)
    if level:
        state, lists = _flush_lists(state)
        heading = Heading(level=level, spans=tuple(parse_spans(trimmed[level + 1 :])))
        return state, out + lists + (heading,)

    if trimmed in _RULES:
        state, lists = _flush_lists(state)
        return state, out + lists + (HorizontalRule(),)

    if trimmed.startswith(("- ", "* ")):
        state, numbered = _flush_numbered(state)
        item = tuple(parse_spans(trimmed[2:]))
        return replace(state, bullets=(*state.bullets, item)), out + numbered

    m = _ORDERED_ITEM_RE.match(trimmed)
    if m is not None:
        state, bullets = _flush_bullets(state)
        item = tuple(parse_spans(trimmed[m.end() :]))
        return replace(state, numbered=(*state.numbered, item)), out + bullets

    if trimmed.startswith("Tags:"):
        state, lists = _flush_lists(state)
        return state, out + lists + (TagList(tags=_parse_tags(trimmed[len("Tags:") :])),)

    if trimmed:
        state, lists = _flush_lists(state)
        return state, out + lists + (Paragraph(spans=tuple(parse_spans(trimmed))),)

    # Blank lines separate blocks but leave pending lists open.
    return state, out


def parse_blocks(text: str) -> list[RenderNode]:
    """Parse `text` into block nodes, in input order.

    Whatever is still pending at end of input is flushed in a fixed order:
    unordered list, ordered list, blockquote, code block. An unterminated
    fence therefore still yields its lines as a `CodeBlock`.
    """

    state = _BlockState()
    nodes: list[RenderNode] = []
    for line in text.split("\n"):
        state, emitted = _step(state, line)
        nodes.extend(emitted)

    for flush in (_flush_bullets, _flush_numbered, _flush_quote, _flush_code):
        state, emitted = flush(state)
        nodes.extend(emitted)
    return nodes
