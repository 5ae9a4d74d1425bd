"""Inline span tokenizer.

Patterns are tried in a fixed priority order (bold, italic, inline code,
link), not by position: the first *pattern* that matches anywhere in the
remaining text wins. This is not CommonMark nesting. An italic run that
straddles a bold one, such as ``*a **b** c*``, loses its markers to the bold
match and they stay literal text.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from pagereader.nodes import Bold, Code, Italic, Link, Span, Text

_BOLD_RE = re.compile(r"(\*\*|__)(.+?)\1", re.DOTALL)
# Italic content may not contain either wrapping character.
_ITALIC_RE = re.compile(r"(\*|_)([^*_]+)\1")
_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

_PATTERNS: tuple[tuple[re.Pattern[str], Callable[[re.Match[str]], Span]], ...] = (
    (_BOLD_RE, lambda m: Bold(m.group(2))),
    (_ITALIC_RE, lambda m: Italic(m.group(2))),
    (_CODE_RE, lambda m: Code(m.group(1))),
    (_LINK_RE, lambda m: Link(label=m.group(1), url=m.group(2))),
)


def _first_match(text: str) -> tuple[re.Match[str], Callable[[re.Match[str]], Span]] | None:
    for pattern, build in _PATTERNS:
        m = pattern.search(text)
        if m is not None:
            return m, build
    return None


def parse_spans(line: str) -> list[Span]:
    """Split one line of text into a flat list of inline spans.

    Text before a match is tokenized with the same rules (it can only hold
    lower-priority constructs), text after it is scanned again from the top of
    the priority list. Unbalanced markers are kept as literal text. Empty
    input gives an empty list.
    """

    spans: list[Span] = []
    remaining = line
    while remaining:
        found = _first_match(remaining)
        if found is None:
            spans.append(Text(remaining))
            break

        m, build = found
        prefix = remaining[: m.start()]
        if prefix:
            spans.extend(parse_spans(prefix))
        spans.append(build(m))
        remaining = remaining[m.end() :]
    return spans
