from __future__ import annotations

import dataclasses

import pytest

from pagereader.blocks import parse_blocks
from pagereader.nodes import (
    Blockquote,
    Bold,
    CodeBlock,
    Heading,
    HorizontalRule,
    Italic,
    ListBlock,
    Paragraph,
    TagList,
    Text,
)


def test_empty_input_yields_nothing() -> None:
    assert parse_blocks("") == []
    assert parse_blocks("\n\n   \n") == []


def test_heading_paragraph_and_tags() -> None:
    assert parse_blocks("# Title\n\nSome *x* and **y**.\nTags: a, b") == [
        Heading(level=1, spans=(Text("Title"),)),
        Paragraph(spans=(Text("Some "), Italic("x"), Text(" and "), Bold("y"), Text("."))),
        TagList(tags=("a", "b")),
    ]


def test_heading_levels() -> None:
    nodes = parse_blocks("## Two\n### Three\n#### Four\n##### Five")
    assert [n.level for n in nodes] == [2, 3, 4, 5]  # type: ignore[union-attr]


def test_six_hashes_is_a_paragraph() -> None:
    assert parse_blocks("###### six") == [Paragraph(spans=(Text("###### six"),))]


def test_hash_without_space_is_a_paragraph() -> None:
    assert parse_blocks("#hashtag") == [Paragraph(spans=(Text("#hashtag"),))]


def test_code_block_with_language() -> None:
    assert parse_blocks("```js\nconsole.log(1)\n```") == [
        CodeBlock(language="js", lines=("console.log(1)",)),
    ]


def test_code_block_keeps_lines_verbatim() -> None:
    text = "```\n  - not a list\n# not a heading\n**not bold**\n```"
    assert parse_blocks(text) == [
        CodeBlock(language="", lines=("  - not a list", "# not a heading", "**not bold**")),
    ]


def test_unterminated_fence_flushes_at_end() -> None:
    assert parse_blocks("intro\n```py\na = 1\n\nb = 2") == [
        Paragraph(spans=(Text("intro"),)),
        CodeBlock(language="py", lines=("a = 1", "", "b = 2")),
    ]


def test_empty_fence_emits_nothing() -> None:
    assert parse_blocks("```\n```") == []


def test_fence_open_flushes_pending_list() -> None:
    assert parse_blocks("- a\n```\ncode\n```") == [
        ListBlock(ordered=False, items=((Text("a"),),)),
        CodeBlock(language="", lines=("code",)),
    ]


def test_list_kind_switch() -> None:
    assert parse_blocks("- a\n- b\n1. c") == [
        ListBlock(ordered=False, items=((Text("a"),), (Text("b"),))),
        ListBlock(ordered=True, items=((Text("c"),),)),
    ]


def test_star_bullets_and_multi_digit_numbers() -> None:
    assert parse_blocks("* x\n10. ten\n11. eleven") == [
        ListBlock(ordered=False, items=((Text("x"),),)),
        ListBlock(ordered=True, items=((Text("ten"),), (Text("eleven"),))),
    ]


def test_blank_lines_do_not_flush_lists() -> None:
    assert parse_blocks("- a\n\n- b") == [
        ListBlock(ordered=False, items=((Text("a"),), (Text("b"),))),
    ]


def test_paragraph_splits_a_list() -> None:
    assert parse_blocks("- a\ntext\n- b") == [
        ListBlock(ordered=False, items=((Text("a"),),)),
        Paragraph(spans=(Text("text"),)),
        ListBlock(ordered=False, items=((Text("b"),),)),
    ]


def test_indented_items_are_trimmed() -> None:
    assert parse_blocks("   - **x**") == [ListBlock(ordered=False, items=((Bold("x"),),))]


def test_blockquote_groups_consecutive_lines() -> None:
    assert parse_blocks("> one\n> *two*\nafter") == [
        Blockquote(lines=((Text("one"),), (Italic("two"),))),
        Paragraph(spans=(Text("after"),)),
    ]


def test_blank_line_ends_blockquote() -> None:
    assert parse_blocks("> a\n\n> b") == [
        Blockquote(lines=((Text("a"),),)),
        Blockquote(lines=((Text("b"),),)),
    ]


def test_blockquote_flushes_list_first() -> None:
    assert parse_blocks("1. a\n> q") == [
        ListBlock(ordered=True, items=((Text("a"),),)),
        Blockquote(lines=((Text("q"),),)),
    ]


def test_thematic_breaks() -> None:
    assert parse_blocks("- a\n---\n***\n___") == [
        ListBlock(ordered=False, items=((Text("a"),),)),
        HorizontalRule(),
        HorizontalRule(),
        HorizontalRule(),
    ]


def test_tags_drop_empty_tokens() -> None:
    assert parse_blocks("Tags: a, , b ,") == [TagList(tags=("a", "b"))]


def test_paragraph_per_non_blank_line() -> None:
    text = "one\ntwo\n\n  three  \n"
    nodes = parse_blocks(text)
    assert nodes == [
        Paragraph(spans=(Text("one"),)),
        Paragraph(spans=(Text("two"),)),
        Paragraph(spans=(Text("three"),)),
    ]


def test_end_of_input_flush_order() -> None:
    assert parse_blocks("# h\n- a\n- b") == [
        Heading(level=1, spans=(Text("h"),)),
        ListBlock(ordered=False, items=((Text("a"),), (Text("b"),))),
    ]


def test_nodes_are_immutable() -> None:
    node = parse_blocks("# h")[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.level = 2  # type: ignore[misc, union-attr]


def test_same_input_same_tree() -> None:
    text = "# A\n- x\n> q\n```\nc\n```\nTags: t"
    assert parse_blocks(text) == parse_blocks(text)
