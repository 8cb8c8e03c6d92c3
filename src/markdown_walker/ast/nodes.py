#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markdown_walker/ast/nodes.py
"""Node kinds and payload classes for the Markdown document tree.

This module defines the closed taxonomy of node kinds a parsed Markdown
document is made of, together with the kind-specific payloads some of them
carry. Every node in an ``Arena`` is tagged with exactly one ``NodeKind``.

Node Kinds
----------
Block-level kinds represent structural document elements:
    - DOCUMENT, FRONT_MATTER, PARAGRAPH, HEADING, THEMATIC_BREAK
    - BLOCK_QUOTE, MULTILINE_BLOCK_QUOTE
    - LIST, ITEM, TASK_ITEM
    - DESCRIPTION_LIST, DESCRIPTION_ITEM, DESCRIPTION_TERM, DESCRIPTION_DETAILS
    - CODE_BLOCK, HTML_BLOCK
    - TABLE, TABLE_ROW, TABLE_CELL
    - FOOTNOTE_DEFINITION

Inline kinds represent text and formatting:
    - TEXT, SOFT_BREAK, LINE_BREAK, CODE, HTML_INLINE, RAW
    - ESCAPED, ESCAPED_TAG
    - EMPH, STRONG, STRIKETHROUGH, SUPERSCRIPT, SUBSCRIPT, UNDERLINE, SPOILERED_TEXT
    - LINK, IMAGE, WIKI_LINK, FOOTNOTE_REFERENCE
    - SHORT_CODE, MATH

Payloads
--------
Payload classes are frozen dataclasses. Some kinds carry a plain ``str``
(text, raw and HTML content, front matter, escaped tags), a ``bool`` (table
rows: header flag) or an optional ``str`` (task items: completion marker).
``PAYLOAD_TYPES`` records the accepted payload types for every kind.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NodeKind(Enum):
    """Closed set of node kinds.

    The value of each member is the suffix of its handler name on
    ``MarkdownWalker`` (``visit_<value>``).
    """

    DOCUMENT = "document"
    FRONT_MATTER = "front_matter"
    BLOCK_QUOTE = "block_quote"
    MULTILINE_BLOCK_QUOTE = "multiline_block_quote"
    LIST = "list"
    ITEM = "item"
    TASK_ITEM = "task_item"
    DESCRIPTION_LIST = "description_list"
    DESCRIPTION_ITEM = "description_item"
    DESCRIPTION_TERM = "description_term"
    DESCRIPTION_DETAILS = "description_details"
    CODE_BLOCK = "code_block"
    HTML_BLOCK = "html_block"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    THEMATIC_BREAK = "thematic_break"
    FOOTNOTE_DEFINITION = "footnote_definition"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    TEXT = "text"
    SOFT_BREAK = "soft_break"
    LINE_BREAK = "line_break"
    CODE = "code"
    HTML_INLINE = "html_inline"
    RAW = "raw"
    ESCAPED = "escaped"
    ESCAPED_TAG = "escaped_tag"
    EMPH = "emph"
    STRONG = "strong"
    STRIKETHROUGH = "strikethrough"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"
    UNDERLINE = "underline"
    SPOILERED_TEXT = "spoilered_text"
    LINK = "link"
    IMAGE = "image"
    WIKI_LINK = "wiki_link"
    FOOTNOTE_REFERENCE = "footnote_reference"
    SHORT_CODE = "short_code"
    MATH = "math"

    @property
    def handler_name(self) -> str:
        """Name of the ``MarkdownWalker`` method handling this kind."""
        return f"visit_{self.value}"

    @property
    def is_block(self) -> bool:
        """Whether this kind is a block-level construct."""
        return self in BLOCK_KINDS


BLOCK_KINDS = frozenset(
    {
        NodeKind.DOCUMENT,
        NodeKind.FRONT_MATTER,
        NodeKind.BLOCK_QUOTE,
        NodeKind.MULTILINE_BLOCK_QUOTE,
        NodeKind.LIST,
        NodeKind.ITEM,
        NodeKind.TASK_ITEM,
        NodeKind.DESCRIPTION_LIST,
        NodeKind.DESCRIPTION_ITEM,
        NodeKind.DESCRIPTION_TERM,
        NodeKind.DESCRIPTION_DETAILS,
        NodeKind.CODE_BLOCK,
        NodeKind.HTML_BLOCK,
        NodeKind.PARAGRAPH,
        NodeKind.HEADING,
        NodeKind.THEMATIC_BREAK,
        NodeKind.FOOTNOTE_DEFINITION,
        NodeKind.TABLE,
        NodeKind.TABLE_ROW,
        NodeKind.TABLE_CELL,
    }
)


class ListType(Enum):
    """Kind of list marker."""

    BULLET = "bullet"
    ORDERED = "ordered"


class ListDelimType(Enum):
    """Delimiter following the number of an ordered list marker."""

    PERIOD = "period"
    PAREN = "paren"


class TableAlignment(Enum):
    """Column alignment declared in a table's delimiter row."""

    NONE = "none"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class NodeCode:
    """Payload of an inline code span.

    Parameters
    ----------
    literal : str
        Code content, with line endings folded into spaces

    """

    literal: str


@dataclass(frozen=True)
class NodeCodeBlock:
    """Payload of a fenced or indented code block.

    Parameters
    ----------
    fenced : bool
        Whether the block uses a code fence (False for indented code)
    fence_char : str
        Fence character, ``"`"`` or ``"~"``; empty for indented code
    fence_length : int
        Length of the opening fence; 0 for indented code
    info : str
        Info string following the opening fence
    literal : str
        Code content

    """

    fenced: bool
    fence_char: str
    fence_length: int
    info: str
    literal: str

    @property
    def language(self) -> Optional[str]:
        """First word of the info string, or None."""
        parts = self.info.split(maxsplit=1)
        return parts[0] if parts else None


@dataclass(frozen=True)
class NodeDescriptionItem:
    """Payload of a description list item (one term with its details).

    Parameters
    ----------
    tight : bool
        Whether the details were written without separating blank lines

    """

    tight: bool


@dataclass(frozen=True)
class NodeFootnoteDefinition:
    """Payload of a footnote definition.

    Parameters
    ----------
    name : str
        Footnote label, normalized
    total_references : int
        Number of references to this footnote in the document

    """

    name: str
    total_references: int


@dataclass(frozen=True)
class NodeFootnoteReference:
    """Payload of a footnote reference.

    Parameters
    ----------
    name : str
        Footnote label, normalized
    ref_num : int
        1-based count of references to this footnote up to and including this one
    ix : int
        1-based index of the footnote, in order of first reference

    """

    name: str
    ref_num: int
    ix: int


@dataclass(frozen=True)
class NodeHeading:
    """Payload of a heading: level 1-6 and whether it was underlined (setext)."""

    level: int
    setext: bool = False


@dataclass(frozen=True)
class NodeHtmlBlock:
    """Payload of a raw HTML block."""

    literal: str


@dataclass(frozen=True)
class NodeLink:
    """Payload of a link or image.

    Parameters
    ----------
    url : str
        Link destination
    title : str, default ""
        Link title, empty when absent

    """

    url: str
    title: str = ""


@dataclass(frozen=True)
class NodeList:
    """Descriptor of a list, shared by the list and each of its plain items.

    Parameters
    ----------
    list_type : ListType
        Bullet or ordered
    start : int
        Start number of an ordered list (1 for bullet lists)
    delimiter : ListDelimType
        Ordered list delimiter (PERIOD for bullet lists)
    bullet_char : str
        Bullet character (``-``, ``*`` or ``+``); empty for ordered lists
    tight : bool
        Whether the list is tight (no blank lines between items)
    is_task_list : bool
        Whether at least one item is a task item

    """

    list_type: ListType
    start: int
    delimiter: ListDelimType
    bullet_char: str
    tight: bool
    is_task_list: bool = False


@dataclass(frozen=True)
class NodeMath:
    """Payload of a math span or block.

    Parameters
    ----------
    dollar_math : bool
        True for ``$...$``/``$$...$$`` syntax, False for ``$`...`$`` code syntax
    display_math : bool
        True for display math (``$$...$$``)
    literal : str
        TeX source

    """

    dollar_math: bool
    display_math: bool
    literal: str


@dataclass(frozen=True)
class NodeMultilineBlockQuote:
    """Payload of a ``>>>`` fenced block quote: fence length and indentation."""

    fence_length: int
    fence_offset: int


@dataclass(frozen=True)
class NodeShortCode:
    """Payload of an emoji shortcode such as ``:rocket:``.

    Parameters
    ----------
    code : str
        Shortcode name without the surrounding colons
    emoji : str
        Resolved emoji

    """

    code: str
    emoji: str


@dataclass(frozen=True)
class NodeTable:
    """Payload of a table.

    Parameters
    ----------
    alignments : tuple of TableAlignment
        Alignment of each column
    num_columns : int
        Number of columns
    num_rows : int
        Number of rows, header row included
    num_nonempty_cells : int
        Number of cells with content

    """

    alignments: tuple[TableAlignment, ...]
    num_columns: int
    num_rows: int
    num_nonempty_cells: int


@dataclass(frozen=True)
class NodeWikiLink:
    """Payload of a wiki link: the link target."""

    url: str


_NO_PAYLOAD: tuple[type, ...] = (type(None),)

PAYLOAD_TYPES: dict[NodeKind, tuple[type, ...]] = {
    NodeKind.DOCUMENT: _NO_PAYLOAD,
    NodeKind.FRONT_MATTER: (str,),
    NodeKind.BLOCK_QUOTE: _NO_PAYLOAD,
    NodeKind.MULTILINE_BLOCK_QUOTE: (NodeMultilineBlockQuote,),
    NodeKind.LIST: (NodeList,),
    NodeKind.ITEM: (NodeList,),
    NodeKind.TASK_ITEM: (str, type(None)),
    NodeKind.DESCRIPTION_LIST: _NO_PAYLOAD,
    NodeKind.DESCRIPTION_ITEM: (NodeDescriptionItem,),
    NodeKind.DESCRIPTION_TERM: _NO_PAYLOAD,
    NodeKind.DESCRIPTION_DETAILS: _NO_PAYLOAD,
    NodeKind.CODE_BLOCK: (NodeCodeBlock,),
    NodeKind.HTML_BLOCK: (NodeHtmlBlock,),
    NodeKind.PARAGRAPH: _NO_PAYLOAD,
    NodeKind.HEADING: (NodeHeading,),
    NodeKind.THEMATIC_BREAK: _NO_PAYLOAD,
    NodeKind.FOOTNOTE_DEFINITION: (NodeFootnoteDefinition,),
    NodeKind.TABLE: (NodeTable,),
    NodeKind.TABLE_ROW: (bool,),
    NodeKind.TABLE_CELL: _NO_PAYLOAD,
    NodeKind.TEXT: (str,),
    NodeKind.SOFT_BREAK: _NO_PAYLOAD,
    NodeKind.LINE_BREAK: _NO_PAYLOAD,
    NodeKind.CODE: (NodeCode,),
    NodeKind.HTML_INLINE: (str,),
    NodeKind.RAW: (str,),
    NodeKind.ESCAPED: _NO_PAYLOAD,
    NodeKind.ESCAPED_TAG: (str,),
    NodeKind.EMPH: _NO_PAYLOAD,
    NodeKind.STRONG: _NO_PAYLOAD,
    NodeKind.STRIKETHROUGH: _NO_PAYLOAD,
    NodeKind.SUPERSCRIPT: _NO_PAYLOAD,
    NodeKind.SUBSCRIPT: _NO_PAYLOAD,
    NodeKind.UNDERLINE: _NO_PAYLOAD,
    NodeKind.SPOILERED_TEXT: _NO_PAYLOAD,
    NodeKind.LINK: (NodeLink,),
    NodeKind.IMAGE: (NodeLink,),
    NodeKind.WIKI_LINK: (NodeWikiLink,),
    NodeKind.FOOTNOTE_REFERENCE: (NodeFootnoteReference,),
    NodeKind.SHORT_CODE: (NodeShortCode,),
    NodeKind.MATH: (NodeMath,),
}


def has_payload(kind: NodeKind) -> bool:
    """Return whether handlers for ``kind`` receive a payload argument."""
    return PAYLOAD_TYPES[kind] is not _NO_PAYLOAD


def payload_matches(kind: NodeKind, payload: object) -> bool:
    """Return whether ``payload`` is acceptable for a node of ``kind``.

    ``bool`` payloads are matched exactly, since ``bool`` is a subclass of
    ``int`` and would otherwise slip through for numeric kinds.
    """
    accepted = PAYLOAD_TYPES[kind]
    if isinstance(payload, bool) and bool not in accepted:
        return False
    return isinstance(payload, accepted)
