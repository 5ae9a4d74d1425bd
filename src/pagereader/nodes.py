"""Document tree produced by the renderers.

Every node and span is a frozen dataclass; sequences are tuples so a tree can
be neither mutated after it is emitted nor shared by accident between calls.
The vocabulary here is closed: no renderer produces anything else.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import ClassVar, Literal

# ---------------------------------------------------------------------------
# Inline spans
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Text:
    kind: ClassVar[str] = "text"
    text: str


@dataclass(frozen=True, slots=True)
class Bold:
    kind: ClassVar[str] = "bold"
    text: str


@dataclass(frozen=True, slots=True)
class Italic:
    kind: ClassVar[str] = "italic"
    text: str


@dataclass(frozen=True, slots=True)
class Code:
    kind: ClassVar[str] = "code"
    text: str


@dataclass(frozen=True, slots=True)
class Link:
    kind: ClassVar[str] = "link"
    label: str
    url: str


Span = Text | Bold | Italic | Code | Link

# ---------------------------------------------------------------------------
# Block nodes (markdown path)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Heading:
    kind: ClassVar[str] = "heading"
    level: int
    spans: tuple[Span, ...]


@dataclass(frozen=True, slots=True)
class Paragraph:
    kind: ClassVar[str] = "paragraph"
    spans: tuple[Span, ...]


@dataclass(frozen=True, slots=True)
class ListBlock:
    kind: ClassVar[str] = "list"
    ordered: bool
    items: tuple[tuple[Span, ...], ...]


@dataclass(frozen=True, slots=True)
class CodeBlock:
    kind: ClassVar[str] = "code_block"
    language: str
    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Blockquote:
    kind: ClassVar[str] = "blockquote"
    lines: tuple[tuple[Span, ...], ...]


@dataclass(frozen=True, slots=True)
class HorizontalRule:
    kind: ClassVar[str] = "horizontal_rule"


@dataclass(frozen=True, slots=True)
class TagList:
    kind: ClassVar[str] = "tag_list"
    tags: tuple[str, ...]


# ---------------------------------------------------------------------------
# HTML / JSON / plain paths
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Raw:
    """Sanitized HTML, handed to the presentation layer as-is."""

    kind: ClassVar[str] = "raw"
    html: str


@dataclass(frozen=True, slots=True)
class Preformatted:
    """Verbatim text shown in a monospace block (JSON fallback)."""

    kind: ClassVar[str] = "preformatted"
    text: str


@dataclass(frozen=True, slots=True)
class JsonNull:
    kind: ClassVar[str] = "json_null"


@dataclass(frozen=True, slots=True)
class JsonBool:
    kind: ClassVar[str] = "json_bool"
    value: bool


@dataclass(frozen=True, slots=True)
class JsonNumber:
    """A JSON number; `literal` is the exact source spelling (``1.50``, ``2e3``)."""

    kind: ClassVar[str] = "json_number"
    literal: str


@dataclass(frozen=True, slots=True)
class JsonString:
    kind: ClassVar[str] = "json_string"
    value: str


@dataclass(frozen=True, slots=True)
class JsonArray:
    """An array; `inline` arrays print on one line, others one item per line."""

    kind: ClassVar[str] = "json_array"
    items: tuple[JsonValue, ...]
    inline: bool
    depth: int


@dataclass(frozen=True, slots=True)
class JsonEntry:
    """One ``key: value`` row; `nested` values go on their own indented block."""

    kind: ClassVar[str] = "json_entry"
    key: str
    value: JsonValue
    nested: bool


@dataclass(frozen=True, slots=True)
class JsonObject:
    kind: ClassVar[str] = "json_object"
    entries: tuple[JsonEntry, ...]
    depth: int


JsonValue = JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject

PlainStyle = Literal["heading", "list-like", "spacer", "text"]


@dataclass(frozen=True, slots=True)
class PlainLine:
    kind: ClassVar[str] = "plain_line"
    style: PlainStyle
    text: str


RenderNode = (
    Heading
    | Paragraph
    | ListBlock
    | CodeBlock
    | Blockquote
    | HorizontalRule
    | TagList
    | Raw
    | Preformatted
    | JsonNull
    | JsonBool
    | JsonNumber
    | JsonString
    | JsonArray
    | JsonObject
    | PlainLine
)


def to_dict(value: object) -> object:
    """Convert a node, span, or nested tuple of them into JSON-serializable data.

    Dataclasses become dicts with a leading ``"type"`` key taken from `kind`.
    """

    if isinstance(value, tuple):
        return [to_dict(v) for v in value]
    kind = getattr(type(value), "kind", None)
    if kind is None:
        return value
    out: dict[str, object] = {"type": kind}
    for f in fields(value):  # type: ignore[arg-type]
        out[f.name] = to_dict(getattr(value, f.name))
    return out
