#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markdown_walker/ast/__init__.py
"""Document tree representation.

The module consists of two components:

- nodes: the closed ``NodeKind`` taxonomy and the kind-specific payload classes
- arena: the ``Arena`` backing store and its ``Node`` handles

Examples
--------
    >>> from markdown_walker.ast import Arena, NodeKind, NodeHeading
    >>> arena = Arena()
    >>> doc = arena.add(NodeKind.DOCUMENT)
    >>> heading = arena.add(NodeKind.HEADING, NodeHeading(level=1), parent=doc)

"""

from __future__ import annotations

from markdown_walker.ast.arena import Arena, Node
from markdown_walker.ast.nodes import (
    BLOCK_KINDS,
    PAYLOAD_TYPES,
    ListDelimType,
    ListType,
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
    has_payload,
    payload_matches,
)

__all__ = [
    "Arena",
    "BLOCK_KINDS",
    "ListDelimType",
    "ListType",
    "Node",
    "NodeCode",
    "NodeCodeBlock",
    "NodeDescriptionItem",
    "NodeFootnoteDefinition",
    "NodeFootnoteReference",
    "NodeHeading",
    "NodeHtmlBlock",
    "NodeKind",
    "NodeLink",
    "NodeList",
    "NodeMath",
    "NodeMultilineBlockQuote",
    "NodeShortCode",
    "NodeTable",
    "NodeWikiLink",
    "PAYLOAD_TYPES",
    "TableAlignment",
    "has_payload",
    "payload_matches",
]
