#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_nodes.py
"""Unit tests for node kinds and payload classes.

Tests cover:
- The closed set of node kinds and their handler names
- Payload type table and payload matching
- Frozen payload dataclasses

"""

import dataclasses

import pytest

from markdown_walker import (
    PAYLOAD_TYPES,
    MarkdownWalker,
    NodeCodeBlock,
    NodeHeading,
    NodeKind,
    NodeLink,
    NodeList,
    NodeMath,
    ListDelimType,
    ListType,
    has_payload,
)
from markdown_walker.ast.nodes import BLOCK_KINDS, payload_matches

PAYLOAD_FREE = {
    NodeKind.DOCUMENT,
    NodeKind.BLOCK_QUOTE,
    NodeKind.DESCRIPTION_LIST,
    NodeKind.DESCRIPTION_TERM,
    NodeKind.DESCRIPTION_DETAILS,
    NodeKind.PARAGRAPH,
    NodeKind.THEMATIC_BREAK,
    NodeKind.TABLE_CELL,
    NodeKind.SOFT_BREAK,
    NodeKind.LINE_BREAK,
    NodeKind.ESCAPED,
    NodeKind.EMPH,
    NodeKind.STRONG,
    NodeKind.STRIKETHROUGH,
    NodeKind.SUPERSCRIPT,
    NodeKind.SUBSCRIPT,
    NodeKind.UNDERLINE,
    NodeKind.SPOILERED_TEXT,
}


@pytest.mark.unit
class TestNodeKind:
    """Tests for the NodeKind enumeration."""

    def test_kind_count(self):
        """Test that the taxonomy has exactly 41 kinds."""
        assert len(NodeKind) == 41

    def test_every_kind_has_a_handler(self):
        """Test that MarkdownWalker defines a handler for every kind."""
        for kind in NodeKind:
            assert callable(getattr(MarkdownWalker, kind.handler_name))

    def test_handler_name(self):
        """Test handler names are derived from kind values."""
        assert NodeKind.CODE_BLOCK.handler_name == "visit_code_block"
        assert NodeKind.SPOILERED_TEXT.handler_name == "visit_spoilered_text"

    def test_block_kinds(self):
        """Test block/inline classification."""
        assert NodeKind.PARAGRAPH.is_block
        assert NodeKind.TABLE_CELL.is_block
        assert not NodeKind.TEXT.is_block
        assert not NodeKind.MATH.is_block
        assert len(BLOCK_KINDS) == 20


@pytest.mark.unit
class TestPayloadTypes:
    """Tests for the payload type table."""

    def test_every_kind_listed(self):
        """Test that every kind has an entry."""
        assert set(PAYLOAD_TYPES) == set(NodeKind)

    def test_has_payload(self):
        """Test the payload-free kinds."""
        assert {kind for kind in NodeKind if not has_payload(kind)} == PAYLOAD_FREE

    def test_string_payloads(self):
        """Test kinds carrying plain strings."""
        for kind in (NodeKind.TEXT, NodeKind.RAW, NodeKind.HTML_INLINE, NodeKind.ESCAPED_TAG, NodeKind.FRONT_MATTER):
            assert payload_matches(kind, "content")
            assert not payload_matches(kind, None)

    def test_task_item_marker_is_optional(self):
        """Test task items accept a marker string or None."""
        assert payload_matches(NodeKind.TASK_ITEM, "x")
        assert payload_matches(NodeKind.TASK_ITEM, None)
        assert not payload_matches(NodeKind.TASK_ITEM, True)

    def test_table_row_requires_bool(self):
        """Test table rows accept only a bool header flag."""
        assert payload_matches(NodeKind.TABLE_ROW, True)
        assert payload_matches(NodeKind.TABLE_ROW, False)
        assert not payload_matches(NodeKind.TABLE_ROW, 1)
        assert not payload_matches(NodeKind.TABLE_ROW, None)

    def test_bool_rejected_for_non_bool_kinds(self):
        """Test bool payloads never match kinds that do not list bool."""
        assert not payload_matches(NodeKind.TEXT, True)
        assert not payload_matches(NodeKind.DOCUMENT, False)

    def test_list_and_item_share_descriptor(self):
        """Test lists and items accept the same descriptor type."""
        assert PAYLOAD_TYPES[NodeKind.LIST] == PAYLOAD_TYPES[NodeKind.ITEM] == (NodeList,)

    def test_link_and_image_share_payload(self):
        """Test links and images both carry NodeLink."""
        assert payload_matches(NodeKind.LINK, NodeLink("a"))
        assert payload_matches(NodeKind.IMAGE, NodeLink("a.png"))
        assert not payload_matches(NodeKind.LINK, "a")


@pytest.mark.unit
class TestPayloadClasses:
    """Tests for the payload dataclasses."""

    def test_payloads_are_frozen(self):
        """Test payloads cannot be mutated."""
        heading = NodeHeading(level=2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            heading.level = 3

    def test_payload_equality(self):
        """Test payloads compare by value."""
        assert NodeLink("a", "t") == NodeLink("a", "t")
        assert NodeLink("a") != NodeLink("b")

    def test_heading_defaults(self):
        """Test heading payload defaults to ATX style."""
        assert NodeHeading(level=1).setext is False

    def test_code_block_language(self):
        """Test the language is the first word of the info string."""
        block = NodeCodeBlock(fenced=True, fence_char="`", fence_length=3, info="python title=x", literal="")
        assert block.language == "python"

    def test_code_block_without_info(self):
        """Test indented code blocks have no language."""
        block = NodeCodeBlock(fenced=False, fence_char="", fence_length=0, info="", literal="code\n")
        assert block.language is None

    def test_list_descriptor_defaults(self):
        """Test a list is not a task list unless stated."""
        descriptor = NodeList(ListType.BULLET, 1, ListDelimType.PERIOD, "-", tight=True)
        assert descriptor.is_task_list is False

    def test_math_payload(self):
        """Test math payload fields."""
        math = NodeMath(dollar_math=True, display_math=False, literal="x^2")
        assert math.literal == "x^2"
        assert math.dollar_math and not math.display_math
