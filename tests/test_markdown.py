"""Tests for Markdown serialization."""

from __future__ import annotations

import pytest

from mdtasks.markdown import escape_text, render_inline, serialize_document
from mdtasks.markdown_parser import parse_markdown
from mdtasks.schemas import (
    Document,
    HeadingNode,
    InlineNode,
    ListItemNode,
    ListNode,
    ParagraphNode,
    TextNode,
)


def _item(text: str) -> ListItemNode:
    return ListItemNode(children=[ParagraphNode(children=[TextNode(value=text)])])


class TestSerializeDocument:
    """Tests for serialize_document."""

    def test_empty_document(self) -> None:
        """An empty document serializes to an empty string."""
        assert serialize_document(Document()) == ""

    def test_blocks_are_separated_by_blank_lines(self) -> None:
        """Headings and lists are joined with a blank line and end with a newline."""
        document = Document(
            children=[
                HeadingNode(depth=2, children=[TextNode(value="first")]),
                ListNode(children=[_item("a: one"), _item("b: two")]),
                HeadingNode(depth=2, children=[TextNode(value="second")]),
            ]
        )

        assert serialize_document(document) == "## first\n\n* a: one\n* b: two\n\n## second\n"

    def test_empty_list_is_dropped(self) -> None:
        """Lists left empty by removals do not leave blank output."""
        document = Document(
            children=[
                HeadingNode(depth=2, children=[TextNode(value="first")]),
                ListNode(children=[]),
                HeadingNode(depth=2, children=[TextNode(value="second")]),
            ]
        )

        assert serialize_document(document) == "## first\n\n## second\n"

    def test_ordered_list_numbers(self) -> None:
        """Ordered lists are numbered from their start."""
        document = Document(
            children=[ListNode(ordered=True, start=3, marker=".", children=[_item("a"), _item("b")])]
        )

        assert serialize_document(document) == "3. a\n4. b\n"

    def test_spread_list(self) -> None:
        """Spread lists keep a blank line between items."""
        document = Document(children=[ListNode(spread=True, children=[_item("a"), _item("b")])])

        assert serialize_document(document) == "* a\n\n* b\n"

    def test_nested_list_is_indented(self) -> None:
        """Child blocks of an item are indented under the marker."""
        child = ListNode(marker="-", children=[_item("child")])
        parent = ListItemNode(
            children=[ParagraphNode(children=[TextNode(value="parent")]), child]
        )
        document = Document(children=[ListNode(children=[parent])])

        assert serialize_document(document) == "* parent\n  - child\n"

    @pytest.mark.parametrize(
        "text",
        [
            "## first\n\n* a: one\n* b: two\n\n## second\n\nSome *emph* text.\n\n```\ncode\n```\n",
            "# Tasks\n\n## Todo\n\n- x: one\n- y: two\n\n## Done\n\n1. z: three\n",
            "## first\n\n* parent\n  * child\n\n> quote\n",
            "1986\\. A great year\n",
            "[link](http://example.com) and `code` and ![img](a.png)\n",
            "## C \\#\n",
            "## Todo\n\n* a: see [docs][d]\n\n[d]: https://example.com\n",
            "text\n\n[unused]: http://x.test\n",
            "![logo][img] and [home] and [site][]\n\n[img]: logo.png \"Logo\"\n[home]: /\n[site]: http://site.test\n",
        ],
    )
    def test_round_trip(self, text: str) -> None:
        """Normalized Markdown survives a parse/serialize round trip."""
        assert serialize_document(parse_markdown(text)) == text

    def test_round_trip_normalizes_spacing(self) -> None:
        """Missing blank lines between blocks are added."""
        text = "## first\n* a: one\n## second\n"

        assert serialize_document(parse_markdown(text)) == "## first\n\n* a: one\n\n## second\n"


class TestEscaping:
    """Tests for text escaping."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("plain text", "plain text"),
            ("a*b", "a\\*b"),
            ("[x]", "\\[x\\]"),
            ("snake_case", "snake_case"),
            ("_lead", "\\_lead"),
            ("a < b", "a < b"),
            ("<div>", "\\<div>"),
            ("&amp;", "\\&amp;"),
            ("C:\\path", "C:\\path"),
            ("back\\*", "back\\\\\\*"),
        ],
    )
    def test_escape_text(self, value: str, expected: str) -> None:
        """Only characters that would start markup are escaped."""
        assert escape_text(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("# not a heading", "\\# not a heading"),
            ("- not a list", "\\- not a list"),
            ("2. not a list", "2\\. not a list"),
            ("> not a quote", "\\> not a quote"),
            ("---", "\\---"),
            ("id: text", "id: text"),
        ],
    )
    def test_block_markers_at_line_start(self, value: str, expected: str) -> None:
        """Text that would start a block is escaped at the start of a line."""
        assert render_inline([TextNode(value=value)]) == expected

    def test_text_after_inline_is_not_block_escaped(self) -> None:
        """Only text at the start of a line is block-escaped."""
        children = [InlineNode(value="**a**"), TextNode(value="- b")]

        assert render_inline(children) == "**a**- b"

    def test_escaped_text_round_trips(self) -> None:
        """Escaped text parses back to the original value."""
        value = "1. *not* [markup] # here"
        document = Document(children=[ParagraphNode(children=[TextNode(value=value)])])

        reparsed = parse_markdown(serialize_document(document))

        assert reparsed.children[0].children == [TextNode(value=value)]

    def test_heading_ending_in_hash(self) -> None:
        """A trailing run of # in a title is escaped so it is not a closing sequence."""
        document = Document(children=[HeadingNode(depth=2, children=[TextNode(value="C #")])])

        text = serialize_document(document)

        assert text == "## C \\#\n"
        assert parse_markdown(text).children[0].children == [TextNode(value="C #")]
