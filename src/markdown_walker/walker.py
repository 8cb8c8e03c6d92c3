#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markdown_walker/walker.py
"""Visitor base class for walking Markdown document trees.

``MarkdownWalker`` exposes one ``visit_<kind>`` handler per ``NodeKind``, each
a no-op by default. Subclasses override only the handlers they need and keep
whatever state they accumulate on the instance.

The walk is depth-first and pre-order: a node is dispatched to its handler,
then each of its children is walked in document order. There is no post-order
hook and no way to skip a subtree. The only way to stop early is to raise from
a handler, which aborts the whole walk; the exception reaches the caller
unchanged and the walker keeps every mutation made before the failing node.

Examples
--------
Count images in a document:

    >>> class ImageCounter(MarkdownWalker):
    ...     def __init__(self):
    ...         self.count = 0
    ...
    ...     def visit_image(self, node, link):
    ...         self.count += 1
    ...
    >>> ImageCounter.from_markdown("![a](a.png) ![b](b.png)").count
    2

Walk a tree parsed separately:

    >>> root = parse_document("# Title")
    >>> walker = ImageCounter()
    >>> walker.visit(root)

"""

from __future__ import annotations

import logging
import sys

if sys.version_info >= (3, 11):
    from typing import Self, assert_never
else:
    from typing_extensions import Self, assert_never

from markdown_walker.ast import (
    Arena,
    Node,
    NodeCode,
    NodeCodeBlock,
    NodeDescriptionItem,
    NodeFootnoteDefinition,
    NodeFootnoteReference,
    NodeHeading,
    NodeHtmlBlock,
    NodeKind,
    NodeLink,
    NodeList,
    NodeMath,
    NodeMultilineBlockQuote,
    NodeShortCode,
    NodeTable,
    NodeWikiLink,
)
from markdown_walker.options import WALKER_EXTENSIONS
from markdown_walker.parsers.markdown import parse_document

logger = logging.getLogger(__name__)


class MarkdownWalker:
    """Base class for Markdown tree walkers.

    Every handler receives the node being visited and, for kinds that carry
    one, the node's payload. Default handlers do nothing. A handler signals
    failure by raising, conventionally ``WalkError``.

    Subclasses that are constructible without arguments can be built and run
    in one step with ``from_markdown``.

    """

    @classmethod
    def from_markdown(cls, markdown: str) -> Self:
        """Parse Markdown, walk the tree with a fresh walker and return it.

        The parser runs with the fixed ``WALKER_EXTENSIONS`` configuration.

        Parameters
        ----------
        markdown : str
            Markdown source

        Returns
        -------
        Self
            The walker, after visiting every node

        Raises
        ------
        ValidationError
            If ``markdown`` is not a string
        ParsingError
            If the Markdown parser fails
        Exception
            Whatever a handler raises, unchanged

        """
        arena = Arena()
        root = parse_document(markdown, arena=arena, extensions=WALKER_EXTENSIONS)
        walker = cls()
        logger.debug("Walking %d nodes with %s", len(arena), cls.__name__)
        walker.visit(root)
        return walker

    def visit(self, node: Node) -> None:
        """Dispatch ``node``, then visit each of its children in order.

        Parameters
        ----------
        node : Node
            Root of the subtree to walk

        """
        self.dispatch(node)
        for child in node.children:
            self.visit(child)

    def dispatch(self, node: Node) -> None:
        """Call the handler matching the kind of ``node``.

        Parameters
        ----------
        node : Node
            Node to hand to its handler

        """
        kind = node.kind
        match kind:
            case NodeKind.DOCUMENT:
                self.visit_document(node)
            case NodeKind.FRONT_MATTER:
                self.visit_front_matter(node, node.payload)
            case NodeKind.BLOCK_QUOTE:
                self.visit_block_quote(node)
            case NodeKind.MULTILINE_BLOCK_QUOTE:
                self.visit_multiline_block_quote(node, node.payload)
            case NodeKind.LIST:
                self.visit_list(node, node.payload)
            case NodeKind.ITEM:
                self.visit_item(node, node.payload)
            case NodeKind.TASK_ITEM:
                self.visit_task_item(node, node.payload)
            case NodeKind.DESCRIPTION_LIST:
                self.visit_description_list(node)
            case NodeKind.DESCRIPTION_ITEM:
                self.visit_description_item(node, node.payload)
            case NodeKind.DESCRIPTION_TERM:
                self.visit_description_term(node)
            case NodeKind.DESCRIPTION_DETAILS:
                self.visit_description_details(node)
            case NodeKind.CODE_BLOCK:
                self.visit_code_block(node, node.payload)
            case NodeKind.HTML_BLOCK:
                self.visit_html_block(node, node.payload)
            case NodeKind.PARAGRAPH:
                self.visit_paragraph(node)
            case NodeKind.HEADING:
                self.visit_heading(node, node.payload)
            case NodeKind.THEMATIC_BREAK:
                self.visit_thematic_break(node)
            case NodeKind.FOOTNOTE_DEFINITION:
                self.visit_footnote_definition(node, node.payload)
            case NodeKind.TABLE:
                self.visit_table(node, node.payload)
            case NodeKind.TABLE_ROW:
                self.visit_table_row(node, node.payload)
            case NodeKind.TABLE_CELL:
                self.visit_table_cell(node)
            case NodeKind.TEXT:
                self.visit_text(node, node.payload)
            case NodeKind.SOFT_BREAK:
                self.visit_soft_break(node)
            case NodeKind.LINE_BREAK:
                self.visit_line_break(node)
            case NodeKind.CODE:
                self.visit_code(node, node.payload)
            case NodeKind.HTML_INLINE:
                self.visit_html_inline(node, node.payload)
            case NodeKind.RAW:
                self.visit_raw(node, node.payload)
            case NodeKind.ESCAPED:
                self.visit_escaped(node)
            case NodeKind.ESCAPED_TAG:
                self.visit_escaped_tag(node, node.payload)
            case NodeKind.EMPH:
                self.visit_emph(node)
            case NodeKind.STRONG:
                self.visit_strong(node)
            case NodeKind.STRIKETHROUGH:
                self.visit_strikethrough(node)
            case NodeKind.SUPERSCRIPT:
                self.visit_superscript(node)
            case NodeKind.SUBSCRIPT:
                self.visit_subscript(node)
            case NodeKind.UNDERLINE:
                self.visit_underline(node)
            case NodeKind.SPOILERED_TEXT:
                self.visit_spoilered_text(node)
            case NodeKind.LINK:
                self.visit_link(node, node.payload)
            case NodeKind.IMAGE:
                self.visit_image(node, node.payload)
            case NodeKind.WIKI_LINK:
                self.visit_wiki_link(node, node.payload)
            case NodeKind.FOOTNOTE_REFERENCE:
                self.visit_footnote_reference(node, node.payload)
            case NodeKind.SHORT_CODE:
                self.visit_short_code(node, node.payload)
            case NodeKind.MATH:
                self.visit_math(node, node.payload)
            case _:
                assert_never(kind)

    # ------------------------------------------------------------------
    # Block handlers
    # ------------------------------------------------------------------

    def visit_document(self, node: Node) -> None:
        """Visit the document root."""

    def visit_front_matter(self, node: Node, front_matter: str) -> None:
        """Visit a front matter block.

        Parameters
        ----------
        node : Node
            The front matter node, always the first child of the document
        front_matter : str
            The raw block, delimiter lines included

        """

    def visit_block_quote(self, node: Node) -> None:
        """Visit a ``>`` block quote."""

    def visit_multiline_block_quote(self, node: Node, quote: NodeMultilineBlockQuote) -> None:
        """Visit a block quote fenced by ``>>>`` lines."""

    def visit_list(self, node: Node, list_info: NodeList) -> None:
        """Visit a bullet or ordered list.

        Parameters
        ----------
        node : Node
            The list node; its children are ITEM or TASK_ITEM nodes
        list_info : NodeList
            List type, numbering, delimiter and tightness

        """

    def visit_item(self, node: Node, list_info: NodeList) -> None:
        """Visit a list item; ``list_info`` describes the containing list."""

    def visit_task_item(self, node: Node, marker: str | None) -> None:
        """Visit a task list item.

        Parameters
        ----------
        node : Node
            The task item node
        marker : str or None
            ``"x"`` for a completed task, None for an open one

        """

    def visit_description_list(self, node: Node) -> None:
        pass

    def visit_description_item(self, node: Node, item: NodeDescriptionItem) -> None:
        pass

    def visit_description_term(self, node: Node) -> None:
        pass

    def visit_description_details(self, node: Node) -> None:
        pass

    def visit_code_block(self, node: Node, code_block: NodeCodeBlock) -> None:
        """Visit a fenced or indented code block."""

    def visit_html_block(self, node: Node, html_block: NodeHtmlBlock) -> None:
        """Visit a raw HTML block."""

    def visit_paragraph(self, node: Node) -> None:
        """Visit a paragraph."""

    def visit_heading(self, node: Node, heading: NodeHeading) -> None:
        """Visit a heading.

        Parameters
        ----------
        node : Node
            The heading node; its children are the heading's inline content
        heading : NodeHeading
            Level (1-6) and whether the heading is underlined (setext)

        """

    def visit_thematic_break(self, node: Node) -> None:
        """Visit a thematic break (``---``)."""

    def visit_footnote_definition(self, node: Node, footnote: NodeFootnoteDefinition) -> None:
        """Visit a footnote definition.

        Definitions are children of the document root, after all other
        content, in order of first reference.
        """

    def visit_table(self, node: Node, table: NodeTable) -> None:
        """Visit a table; its first row is the header row."""

    def visit_table_row(self, node: Node, header: bool) -> None:
        """Visit a table row; ``header`` is True for the header row."""

    def visit_table_cell(self, node: Node) -> None:
        pass

    # ------------------------------------------------------------------
    # Inline handlers
    # ------------------------------------------------------------------

    def visit_text(self, node: Node, text: str) -> None:
        """Visit a run of literal text."""

    def visit_soft_break(self, node: Node) -> None:
        """Visit a soft line break."""

    def visit_line_break(self, node: Node) -> None:
        """Visit a hard line break."""

    def visit_code(self, node: Node, code: NodeCode) -> None:
        """Visit an inline code span."""

    def visit_html_inline(self, node: Node, html: str) -> None:
        """Visit an inline raw HTML tag."""

    def visit_raw(self, node: Node, raw: str) -> None:
        """Visit raw output content.

        The Markdown parser never produces RAW nodes; they only appear in
        trees built with ``Arena.add``.
        """

    def visit_escaped(self, node: Node) -> None:
        """Visit an escaped character; never produced by the Markdown parser."""

    def visit_escaped_tag(self, node: Node, tag: str) -> None:
        """Visit a raw HTML tag escaped by the tag filter (``<script>``...)."""

    def visit_emph(self, node: Node) -> None:
        pass

    def visit_strong(self, node: Node) -> None:
        pass

    def visit_strikethrough(self, node: Node) -> None:
        pass

    def visit_superscript(self, node: Node) -> None:
        pass

    def visit_subscript(self, node: Node) -> None:
        pass

    def visit_underline(self, node: Node) -> None:
        pass

    def visit_spoilered_text(self, node: Node) -> None:
        pass

    def visit_link(self, node: Node, link: NodeLink) -> None:
        """Visit a link; its children are the link text."""

    def visit_image(self, node: Node, link: NodeLink) -> None:
        """Visit an image; its children are the alt text."""

    def visit_wiki_link(self, node: Node, wiki_link: NodeWikiLink) -> None:
        """Visit a wiki link; its child is the link title."""

    def visit_footnote_reference(self, node: Node, reference: NodeFootnoteReference) -> None:
        """Visit a footnote reference."""

    def visit_short_code(self, node: Node, short_code: NodeShortCode) -> None:
        """Visit a resolved emoji shortcode."""

    def visit_math(self, node: Node, math: NodeMath) -> None:
        """Visit a math span or block."""
