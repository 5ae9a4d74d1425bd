"""Line classifier for unstructured text.

Each line is classified on its own; there is no state carried between lines.
"""

from __future__ import annotations

import re

from pagereader.nodes import PlainLine, PlainStyle, RenderNode

# ALL CAPS titles such as "KEY FEATURES" or "Q&A SECTION".
_CAPS_HEADING_RE = re.compile(r"[A-Z][A-Z\s&]+")
_MIN_HEADING_LEN = 4


def classify_line(line: str) -> PlainStyle:
    trimmed = line.strip()
    if len(trimmed) >= _MIN_HEADING_LEN and _CAPS_HEADING_RE.fullmatch(trimmed):
        return "heading"
    if trimmed.startswith("-"):
        return "list-like"
    if not trimmed:
        return "spacer"
    return "text"


def render_plain(text: str) -> list[RenderNode]:
    """Return one `PlainLine` per input line.

    Headings, list-like lines and text keep the raw line, surrounding spaces
    included. Spacers carry no text.
    """

    nodes: list[RenderNode] = []
    for line in text.split("\n"):
        style = classify_line(line)
        nodes.append(PlainLine(style=style, text="" if style == "spacer" else line))
    return nodes
