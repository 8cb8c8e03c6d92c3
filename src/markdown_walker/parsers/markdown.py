#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markdown_walker/parsers/markdown.py
"""Markdown to document tree converter.

This module parses Markdown with mistune and converts the resulting token
stream into a tree of ``Node`` objects stored in an ``Arena``. The set of
recognized syntax extensions is selected by ``ExtensionOptions``.

"""

from __future__ import annotations

import logging
from collections import Counter
from functools import lru_cache
from typing import Any, Iterable, Iterator, Optional

import mistune

from markdown_walker.ast import (
    Arena,
    ListDelimType,
    ListType,
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
    TableAlignment,
)
from markdown_walker.exceptions import ParsingError, ValidationError
from markdown_walker.options import WALKER_EXTENSIONS, ExtensionOptions
from markdown_walker.parsers.extensions import filtered_tag_name

logger = logging.getLogger(__name__)

_ALIGNMENTS = {
    None: TableAlignment.NONE,
    "left": TableAlignment.LEFT,
    "center": TableAlignment.CENTER,
    "right": TableAlignment.RIGHT,
}

# inline token types mapped straight to a payload-free container kind
_INLINE_CONTAINERS = {
    "emphasis": NodeKind.EMPH,
    "strong": NodeKind.STRONG,
    "strikethrough": NodeKind.STRIKETHROUGH,
    "superscript": NodeKind.SUPERSCRIPT,
    "subscript": NodeKind.SUBSCRIPT,
    "underline": NodeKind.UNDERLINE,
    "spoiler": NodeKind.SPOILERED_TEXT,
}


def _has_content(tokens: list[dict[str, Any]]) -> bool:
    return any(token.get("type") != "text" or token.get("raw") for token in tokens)


@lru_cache(maxsize=16)
def build_markdown(extensions: ExtensionOptions) -> mistune.Markdown:
    """Return the mistune parser for ``extensions``, built once per configuration."""
    logger.debug("Building mistune parser for %r", extensions)
    return mistune.create_markdown(renderer=None, plugins=extensions.plugins())


class MarkdownToTreeConverter:
    r"""Convert Markdown to a document tree.

    The converter runs mistune with the plugins selected by ``extensions`` and
    turns its tokens into nodes, parents before children and siblings in
    document order.

    Parameters
    ----------
    extensions : ExtensionOptions or None, default None
        Syntax extensions to recognize; ``WALKER_EXTENSIONS`` when None

    Examples
    --------
        >>> converter = MarkdownToTreeConverter()
        >>> root = converter.parse("# Hello\\n\\nThis is **bold**.")
        >>> [child.kind for child in root.children]
        [<NodeKind.HEADING: 'heading'>, <NodeKind.PARAGRAPH: 'paragraph'>]

    """

    def __init__(self, extensions: ExtensionOptions | None = None):
        if extensions is not None and not isinstance(extensions, ExtensionOptions):
            raise ValidationError(
                f"extensions must be ExtensionOptions, got {type(extensions).__name__}",
                parameter_name="extensions",
                parameter_value=extensions,
            )
        self.extensions: ExtensionOptions = extensions or WALKER_EXTENSIONS
        self._arena = Arena()
        self._footnote_totals: Counter[str] = Counter()
        self._footnote_seen: Counter[str] = Counter()

    def parse(self, markdown: str, arena: Arena | None = None) -> Node:
        """Parse Markdown text into a tree rooted at a DOCUMENT node.

        Parameters
        ----------
        markdown : str
            Markdown source
        arena : Arena or None, default None
            Store receiving the nodes; a new one when None

        Returns
        -------
        Node
            The DOCUMENT root

        Raises
        ------
        ValidationError
            If ``markdown`` is not a string
        ParsingError
            If mistune fails on the input

        """
        if not isinstance(markdown, str):
            raise ValidationError(
                f"Markdown input must be a str, got {type(markdown).__name__}",
                parameter_name="markdown",
                parameter_value=markdown,
            )

        # Reset parser state to prevent leakage across parse calls
        self._arena = arena if arena is not None else Arena()
        self._footnote_totals = Counter()
        self._footnote_seen = Counter()

        front_matter, body = self._extract_front_matter(markdown)

        logger.debug("Parsing %d characters of Markdown", len(body))
        try:
            tokens, _state = build_markdown(self.extensions).parse(body)
        except Exception as e:
            raise ParsingError(f"Failed to parse Markdown: {e}", parsing_stage="markdown", original_error=e) from e

        if not isinstance(tokens, list):
            raise ParsingError(
                f"Expected a token list from the Markdown parser, got {type(tokens).__name__}",
                parsing_stage="markdown",
            )
        self._footnote_totals = Counter(self._iter_footnote_keys(tokens))

        start = len(self._arena)
        root = self._arena.add(NodeKind.DOCUMENT)
        if front_matter is not None:
            self._arena.add(NodeKind.FRONT_MATTER, front_matter, parent=root)
        self._process_tokens(tokens, root)

        logger.debug("Built document tree with %d nodes", len(self._arena) - start)
        return root

    def _extract_front_matter(self, content: str) -> tuple[Optional[str], str]:
        """Split a leading front matter block from the content.

        Parameters
        ----------
        content : str
            Markdown content

        Returns
        -------
        tuple[str or None, str]
            (front matter including both delimiter lines, remaining content);
            the front matter is None when absent

        """
        delimiter = self.extensions.front_matter_delimiter
        if delimiter is None or not content.startswith(delimiter):
            return None, content

        lines = content.splitlines(keepends=True)
        if lines[0].strip() != delimiter:
            return None, content

        for i in range(1, len(lines)):
            if lines[i].strip() == delimiter:
                logger.debug("Found front matter block of %d lines", i + 1)
                return "".join(lines[: i + 1]), "".join(lines[i + 1 :])

        return None, content

    def _iter_footnote_keys(self, tokens: Iterable[dict[str, Any]]) -> Iterator[str]:
        """Yield the footnote key of every footnote reference, depth first."""
        for token in tokens:
            if token.get("type") == "footnote_ref":
                yield token.get("raw", "").lower()
            children = token.get("children")
            if isinstance(children, list):
                yield from self._iter_footnote_keys(children)

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]], parent: Node) -> None:
        """Process a list of mistune block tokens into children of ``parent``.

        Parameters
        ----------
        tokens : list of dict
            Mistune token dictionaries
        parent : Node
            Node receiving the new children

        """
        for token in tokens:
            self._process_token(token, parent)

    def _process_token(self, token: dict[str, Any], parent: Node) -> None:
        """Process a single mistune block token.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields
        parent : Node
            Node receiving the result

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            self._process_heading(token, parent)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items - treat like paragraph
            node = self._arena.add(NodeKind.PARAGRAPH, parent=parent)
            self._process_inline_tokens(token.get("children", []), node)
        elif token_type == "block_code":
            self._process_code_block(token, parent)
        elif token_type == "block_quote":
            node = self._arena.add(NodeKind.BLOCK_QUOTE, parent=parent)
            self._process_tokens(token.get("children", []), node)
        elif token_type == "multiline_block_quote":
            attrs = token.get("attrs", {})
            payload = NodeMultilineBlockQuote(fence_length=attrs["fence_length"], fence_offset=attrs["fence_offset"])
            node = self._arena.add(NodeKind.MULTILINE_BLOCK_QUOTE, payload, parent=parent)
            self._process_tokens(token.get("children", []), node)
        elif token_type == "list":
            self._process_list(token, parent)
        elif token_type == "table":
            self._process_table(token, parent)
        elif token_type == "thematic_break":
            self._arena.add(NodeKind.THEMATIC_BREAK, parent=parent)
        elif token_type == "block_html":
            self._arena.add(NodeKind.HTML_BLOCK, NodeHtmlBlock(literal=token.get("raw", "")), parent=parent)
        elif token_type == "block_math":
            payload = NodeMath(dollar_math=True, display_math=True, literal=token.get("raw", ""))
            self._arena.add(NodeKind.MATH, payload, parent=parent)
        elif token_type == "def_list":
            self._process_description_list(token, parent)
        elif token_type == "footnotes":
            self._process_footnotes(token, parent)
        elif token_type != "blank_line":
            logger.debug("Skipping unsupported block token %r", token_type)

    def _process_heading(self, token: dict[str, Any], parent: Node) -> None:
        level = token.get("attrs", {}).get("level", 1)
        payload = NodeHeading(level=level, setext=token.get("style") == "setext")
        node = self._arena.add(NodeKind.HEADING, payload, parent=parent)
        self._process_inline_tokens(token.get("children", []), node)

    def _process_code_block(self, token: dict[str, Any], parent: Node) -> None:
        """Process code block token.

        Fenced blocks carry their fence marker (e.g. ``"````"``) in 'marker'
        and the info string in ``attrs['info']``; indented blocks carry neither.
        """
        literal = token.get("raw", "")
        if token.get("style") == "fenced":
            marker = token.get("marker", "```")
            info = token.get("attrs", {}).get("info", "")
            payload = NodeCodeBlock(
                fenced=True, fence_char=marker[0], fence_length=len(marker), info=info, literal=literal
            )
        else:
            payload = NodeCodeBlock(fenced=False, fence_char="", fence_length=0, info="", literal=literal)
        self._arena.add(NodeKind.CODE_BLOCK, payload, parent=parent)

    def _process_list(self, token: dict[str, Any], parent: Node) -> None:
        """Process list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'tight', 'bullet' and 'attrs' (ordered, start)
        parent : Node
            Node receiving the list

        """
        attrs = token.get("attrs", {})
        children = token.get("children", [])
        bullet = token.get("bullet", "-")

        if attrs.get("ordered", False):
            list_type = ListType.ORDERED
            start = attrs.get("start", 1)
            delimiter = ListDelimType.PAREN if bullet == ")" else ListDelimType.PERIOD
            bullet_char = ""
        else:
            list_type = ListType.BULLET
            start = 1
            delimiter = ListDelimType.PERIOD
            bullet_char = bullet

        descriptor = NodeList(
            list_type=list_type,
            start=start,
            delimiter=delimiter,
            bullet_char=bullet_char,
            tight=token.get("tight", True),
            is_task_list=any(child.get("type") == "task_list_item" for child in children),
        )
        node = self._arena.add(NodeKind.LIST, descriptor, parent=parent)

        for child in children:
            if child.get("type") == "task_list_item":
                marker = "x" if child.get("attrs", {}).get("checked") else None
                item = self._arena.add(NodeKind.TASK_ITEM, marker, parent=node)
            else:
                item = self._arena.add(NodeKind.ITEM, descriptor, parent=node)
            self._process_tokens(child.get("children", []), item)

    def _process_table(self, token: dict[str, Any], parent: Node) -> None:
        """Process table token.

        The header cells are direct children of 'table_head'; body cells sit
        in 'table_row' tokens under 'table_body'.
        """
        header_cells: list[dict[str, Any]] = []
        body_rows: list[list[dict[str, Any]]] = []
        for section in token.get("children", []):
            if section.get("type") == "table_head":
                header_cells = section.get("children", [])
            elif section.get("type") == "table_body":
                body_rows = [row.get("children", []) for row in section.get("children", [])]

        rows = [header_cells, *body_rows]
        payload = NodeTable(
            alignments=tuple(_ALIGNMENTS.get(cell.get("attrs", {}).get("align")) for cell in header_cells),
            num_columns=len(header_cells),
            num_rows=len(rows),
            num_nonempty_cells=sum(1 for row in rows for cell in row if _has_content(cell.get("children", []))),
        )
        table = self._arena.add(NodeKind.TABLE, payload, parent=parent)

        for i, cells in enumerate(rows):
            row = self._arena.add(NodeKind.TABLE_ROW, i == 0, parent=table)
            for cell in cells:
                cell_node = self._arena.add(NodeKind.TABLE_CELL, parent=row)
                self._process_inline_tokens(cell.get("children", []), cell_node)

    def _process_description_list(self, token: dict[str, Any], parent: Node) -> None:
        """Process definition list token.

        mistune emits a flat sequence of 'def_list_head' and 'def_list_item'
        tokens; each head starts a new item holding the details that follow it.
        """
        groups: list[tuple[Optional[dict[str, Any]], list[dict[str, Any]]]] = []
        for child in token.get("children", []):
            child_type = child.get("type", "")
            if child_type == "def_list_head":
                groups.append((child, []))
            elif child_type == "def_list_item":
                if not groups:
                    groups.append((None, []))
                groups[-1][1].append(child)

        node = self._arena.add(NodeKind.DESCRIPTION_LIST, parent=parent)
        for head, details in groups:
            tight = all(block.get("type") != "paragraph" for item in details for block in item.get("children", []))
            item_node = self._arena.add(NodeKind.DESCRIPTION_ITEM, NodeDescriptionItem(tight=tight), parent=node)
            if head is not None:
                term = self._arena.add(NodeKind.DESCRIPTION_TERM, parent=item_node)
                paragraph = self._arena.add(NodeKind.PARAGRAPH, parent=term)
                self._process_inline_tokens(head.get("children", []), paragraph)
            for item in details:
                details_node = self._arena.add(NodeKind.DESCRIPTION_DETAILS, parent=item_node)
                self._process_tokens(item.get("children", []), details_node)

    def _process_footnotes(self, token: dict[str, Any], root: Node) -> None:
        """Add footnote definitions as children of the document root.

        mistune emits the footnotes token last among the top-level tokens,
        holding only the footnotes that are referenced, in order of first
        reference.
        """
        for item in token.get("children", []):
            name = item.get("attrs", {}).get("key", "").lower()
            payload = NodeFootnoteDefinition(name=name, total_references=self._footnote_totals[name])
            node = self._arena.add(NodeKind.FOOTNOTE_DEFINITION, payload, parent=root)
            self._process_tokens(item.get("children", []), node)

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[dict[str, Any]], parent: Node) -> None:
        """Process inline tokens into children of ``parent``.

        Adjacent text tokens are merged into a single TEXT node; empty text
        (mistune emits one for an empty table cell) produces no node.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries
        parent : Node
            Node receiving the new children

        """
        pending_text: list[str] = []
        for token in tokens:
            if token.get("type") == "text":
                pending_text.append(token.get("raw", ""))
                continue
            self._flush_text(pending_text, parent)
            pending_text = []
            self._process_inline_token(token, parent)
        self._flush_text(pending_text, parent)

    def _flush_text(self, parts: list[str], parent: Node) -> None:
        text = "".join(parts)
        if text:
            self._arena.add(NodeKind.TEXT, text, parent=parent)

    def _process_inline_token(self, token: dict[str, Any], parent: Node) -> None:
        """Process a single non-text inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary
        parent : Node
            Node receiving the result

        """
        token_type = token.get("type", "")

        container = _INLINE_CONTAINERS.get(token_type)
        if container is not None:
            node = self._arena.add(container, parent=parent)
            self._process_inline_tokens(token.get("children", []), node)
            return

        handler_map: dict[str, Any] = {
            "codespan": self._handle_codespan_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "inline_html": self._handle_inline_html_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "wiki_link": self._handle_wiki_link_token,
            "footnote_ref": self._handle_footnote_ref_token,
            "short_code": self._handle_short_code_token,
            "inline_math": self._handle_inline_math_token,
            "block_math": self._handle_display_math_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            handler(token, parent)
        else:
            logger.debug("Skipping unsupported inline token %r", token_type)

    def _handle_codespan_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle codespan token."""
        self._arena.add(NodeKind.CODE, NodeCode(literal=token.get("raw", "")), parent=parent)

    def _handle_linebreak_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle linebreak token."""
        self._arena.add(NodeKind.LINE_BREAK, parent=parent)

    def _handle_softbreak_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle softbreak token."""
        self._arena.add(NodeKind.SOFT_BREAK, parent=parent)

    def _handle_inline_html_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle inline_html token, escaping filtered tags."""
        content = token.get("raw", "")
        if self.extensions.tagfilter and filtered_tag_name(content) is not None:
            self._arena.add(NodeKind.ESCAPED_TAG, content, parent=parent)
        else:
            self._arena.add(NodeKind.HTML_INLINE, content, parent=parent)

    def _handle_link_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle link token."""
        attrs = token.get("attrs", {})
        payload = NodeLink(url=attrs.get("url", ""), title=attrs.get("title") or "")
        node = self._arena.add(NodeKind.LINK, payload, parent=parent)
        self._process_inline_tokens(token.get("children", []), node)

    def _handle_image_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle image token; its children are the alt text."""
        attrs = token.get("attrs", {})
        payload = NodeLink(url=attrs.get("url", ""), title=attrs.get("title") or "")
        node = self._arena.add(NodeKind.IMAGE, payload, parent=parent)
        self._process_inline_tokens(token.get("children", []), node)

    def _handle_wiki_link_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle wiki_link token."""
        node = self._arena.add(NodeKind.WIKI_LINK, NodeWikiLink(url=token["attrs"]["url"]), parent=parent)
        self._process_inline_tokens(token.get("children", []), node)

    def _handle_footnote_ref_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle footnote_ref token."""
        name = token.get("raw", "").lower()
        self._footnote_seen[name] += 1
        payload = NodeFootnoteReference(
            name=name,
            ref_num=self._footnote_seen[name],
            ix=token.get("attrs", {}).get("index", 0),
        )
        self._arena.add(NodeKind.FOOTNOTE_REFERENCE, payload, parent=parent)

    def _handle_short_code_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle short_code token."""
        attrs = token["attrs"]
        self._arena.add(NodeKind.SHORT_CODE, NodeShortCode(code=attrs["code"], emoji=attrs["emoji"]), parent=parent)

    def _handle_inline_math_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle inline_math token."""
        attrs = token.get("attrs", {})
        payload = NodeMath(
            dollar_math=attrs.get("dollar", True),
            display_math=attrs.get("display", False),
            literal=token.get("raw", ""),
        )
        self._arena.add(NodeKind.MATH, payload, parent=parent)

    def _handle_display_math_token(self, token: dict[str, Any], parent: Node) -> None:
        """Handle block_math tokens emitted inline for ``$$...$$`` spans."""
        payload = NodeMath(dollar_math=True, display_math=True, literal=token.get("raw", ""))
        self._arena.add(NodeKind.MATH, payload, parent=parent)


def parse_document(
    markdown: str,
    arena: Arena | None = None,
    extensions: ExtensionOptions = WALKER_EXTENSIONS,
) -> Node:
    r"""Parse Markdown text into a document tree.

    This is a convenience function that creates a converter and parses
    the markdown in one step.

    Parameters
    ----------
    markdown : str
        Markdown text to parse
    arena : Arena or None, default None
        Store receiving the nodes; a new one when None
    extensions : ExtensionOptions, default WALKER_EXTENSIONS
        Syntax extensions to recognize

    Returns
    -------
    Node
        The DOCUMENT root

    Examples
    --------
    >>> from markdown_walker.parsers.markdown import parse_document
    >>> root = parse_document("# Hello\\n\\nWorld")
    >>> len(root.children)
    2

    """
    converter = MarkdownToTreeConverter(extensions)
    return converter.parse(markdown, arena=arena)
