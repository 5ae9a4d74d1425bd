"""JSON display-tree renderer.

Layout rules (these are display heuristics, not a pretty-printer):
- arrays of at most five primitives print inline: ``[1, 2, 3]``;
- every other non-empty array prints one item per line;
- an object entry's value goes on its own indented block when it is a
  non-empty object, or a non-empty array whose *first* element is an object,
  an array or null. Other values stay on the ``key: value`` line.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass

from pagereader.nodes import (
    JsonArray,
    JsonBool,
    JsonEntry,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    Preformatted,
    RenderNode,
)

logger = logging.getLogger("pagereader.json_tree")

INLINE_ARRAY_MAX = 5

# First fenced block, tagged ``json`` or untagged.
_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


@dataclass(frozen=True, slots=True)
class _Number:
    literal: str


def _reject_constant(name: str) -> object:
    raise ValueError(f"non-standard JSON constant: {name}")


def extract_json_source(text: str) -> str:
    """Return the JSON candidate inside `text`: a fenced block's body, or the trimmed text."""

    m = _FENCED_JSON_RE.search(text)
    if m is not None:
        return m.group(1).strip()
    return text.strip()


def _loads(source: str) -> object:
    return json.loads(
        source,
        parse_int=_Number,
        parse_float=_Number,
        parse_constant=_reject_constant,
    )


def _is_container(value: object) -> bool:
    return isinstance(value, (dict, list))


def _is_nested(value: object) -> bool:
    if isinstance(value, dict):
        return bool(value)
    if isinstance(value, list) and value:
        first = value[0]
        return first is None or _is_container(first)
    return False


def _render_value(value: object, depth: int) -> JsonValue:
    if value is None:
        return JsonNull()
    if isinstance(value, bool):
        return JsonBool(value)
    if isinstance(value, _Number):
        return JsonNumber(value.literal)
    if isinstance(value, str):
        return JsonString(value)
    if isinstance(value, list):
        simple = not any(_is_container(item) for item in value)
        items = tuple(_render_value(item, depth + 1) for item in value)
        return JsonArray(items=items, inline=simple and len(value) <= INLINE_ARRAY_MAX, depth=depth)
    if isinstance(value, dict):
        entries = tuple(
            JsonEntry(key=key, value=_render_value(v, depth + 1), nested=_is_nested(v))
            for key, v in value.items()
        )
        return JsonObject(entries=entries, depth=depth)
    # json.loads only produces the types above.
    raise TypeError(f"unexpected JSON value: {type(value).__name__}")


def render_json(text: str) -> RenderNode:
    """Render JSON `text` (optionally inside a code fence) as a display tree.

    Anything that does not parse as strict JSON comes back unchanged as a
    `Preformatted` node; this function does not raise.
    """

    try:
        data = _loads(extract_json_source(text))
        return _render_value(data, 0)
    except (ValueError, RecursionError) as e:
        logger.debug("falling back to preformatted text: %s", e)
        return Preformatted(text)
