from __future__ import annotations

from pagereader.json_tree import extract_json_source, render_json
from pagereader.nodes import (
    JsonArray,
    JsonBool,
    JsonEntry,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    Preformatted,
)


def test_fenced_object_with_simple_array() -> None:
    node = render_json('```json\n{"a":1,"b":[1,2,3]}\n```')
    assert node == JsonObject(
        entries=(
            JsonEntry(key="a", value=JsonNumber("1"), nested=False),
            JsonEntry(
                key="b",
                value=JsonArray(
                    items=(JsonNumber("1"), JsonNumber("2"), JsonNumber("3")),
                    inline=True,
                    depth=1,
                ),
                nested=False,
            ),
        ),
        depth=0,
    )


def test_invalid_json_falls_back_to_original_text() -> None:
    assert render_json("not json") == Preformatted("not json")


def test_fallback_keeps_fences_and_whitespace() -> None:
    text = "  ```json\n{bad}\n```\n"
    assert render_json(text) == Preformatted(text)


def test_key_order_follows_source() -> None:
    node = render_json('{"z": 1, "a": 2, "2": 3, "1": 4}')
    assert isinstance(node, JsonObject)
    assert [e.key for e in node.entries] == ["z", "a", "2", "1"]


def test_non_standard_constants_are_rejected() -> None:
    assert render_json("NaN") == Preformatted("NaN")
    assert render_json('{"a": Infinity}') == Preformatted('{"a": Infinity}')


def test_number_literals_are_kept_verbatim() -> None:
    node = render_json("[1.50, 2e3, -0]")
    assert node == JsonArray(
        items=(JsonNumber("1.50"), JsonNumber("2e3"), JsonNumber("-0")),
        inline=True,
        depth=0,
    )


def test_scalars() -> None:
    assert render_json("null") == JsonNull()
    assert render_json("true") == JsonBool(True)
    assert render_json('"he said \\"hi\\""') == JsonString('he said "hi"')


def test_long_simple_array_is_block() -> None:
    node = render_json("[1, 2, 3, 4, 5, 6]")
    assert isinstance(node, JsonArray)
    assert node.inline is False
    assert len(node.items) == 6


def test_five_item_simple_array_is_inline() -> None:
    node = render_json('[1, "a", null, true, 2]')
    assert isinstance(node, JsonArray)
    assert node.inline is True


def test_array_of_objects_is_nested_block() -> None:
    node = render_json('{"features": [{"name": "x"}, {"name": "y"}]}')
    assert isinstance(node, JsonObject)
    entry = node.entries[0]
    assert entry.nested is True
    assert isinstance(entry.value, JsonArray)
    assert entry.value.inline is False
    assert entry.value.depth == 1
    first = entry.value.items[0]
    assert isinstance(first, JsonObject)
    assert first.depth == 2


def test_nested_rule_only_looks_at_first_element() -> None:
    node = render_json('{"mixed": [1, {"a": 1}]}')
    assert isinstance(node, JsonObject)
    entry = node.entries[0]
    assert entry.nested is False
    assert isinstance(entry.value, JsonArray)
    assert entry.value.inline is False


def test_null_first_element_counts_as_nested() -> None:
    node = render_json('{"a": [null, 1]}')
    assert isinstance(node, JsonObject)
    assert node.entries[0].nested is True


def test_object_value_is_nested_unless_empty() -> None:
    node = render_json('{"o": {"k": "v"}, "e": {}, "l": []}')
    assert isinstance(node, JsonObject)
    nested = {e.key: e.nested for e in node.entries}
    assert nested == {"o": True, "e": False, "l": False}
    by_key = {e.key: e.value for e in node.entries}
    assert by_key["e"] == JsonObject(entries=(), depth=1)
    assert by_key["l"] == JsonArray(items=(), inline=True, depth=1)


def test_untagged_fence_inside_prose() -> None:
    assert render_json("Here you go:\n```\n[1]\n```\nbye") == JsonArray(
        items=(JsonNumber("1"),), inline=True, depth=0
    )


def test_extract_json_source() -> None:
    assert extract_json_source('  {"a": 1}  ') == '{"a": 1}'
    assert extract_json_source('x\n```json\n {"a": 1} \n```') == '{"a": 1}'


def test_deep_nesting_does_not_raise() -> None:
    text = "[" * 100_000 + "]" * 100_000
    assert render_json(text) == Preformatted(text)
