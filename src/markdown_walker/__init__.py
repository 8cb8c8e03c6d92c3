"""markdown_walker - Visitor framework for Markdown document trees.

markdown_walker parses Markdown into a tree of typed nodes and walks it with
a visitor. A walker overrides only the ``visit_*`` handlers for the node kinds
it cares about; every other kind falls through to a no-op default. The walk is
depth-first in document order, each node handled before its children.

Key Features
------------
- Closed taxonomy of 41 node kinds, each with a typed payload where relevant
- Exhaustive dispatch from node kind to handler
- Fail-fast traversal: raising from a handler stops the whole walk
- GitHub Flavored Markdown plus footnotes, description lists, math, wiki links,
  emoji shortcodes, spoilers, underline, multiline block quotes and front matter
- Ready-made walkers for counting, links, outlines, plain text and front matter

Requirements
------------
- Python 3.10+
- mistune 3, PyYAML, rich

Examples
--------
Collect every image URL:

    >>> from markdown_walker import MarkdownWalker
    >>> class Images(MarkdownWalker):
    ...     def __init__(self):
    ...         self.urls = []
    ...
    ...     def visit_image(self, node, link):
    ...         self.urls.append(link.url)
    ...
    >>> Images.from_markdown("![logo](logo.png)").urls
    ['logo.png']

Walk a tree you parsed yourself:

    >>> from markdown_walker import parse_document
    >>> root = parse_document("# Title")
    >>> Images().visit(root)

See Also
--------
markdown_walker.walkers : Ready-made walkers
markdown_walker.ast : Node kinds, payloads and the node store

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

__version__ = "1.0.0"

from markdown_walker.ast import (
    PAYLOAD_TYPES,
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
    has_payload,
)
from markdown_walker.exceptions import (
    FileError,
    MarkdownWalkerError,
    ParsingError,
    ValidationError,
    WalkError,
)
from markdown_walker.options import FRONT_MATTER_EXTENSIONS, WALKER_EXTENSIONS, ExtensionOptions
from markdown_walker.parsers.markdown import MarkdownToTreeConverter, parse_document
from markdown_walker.walker import MarkdownWalker

__all__ = [
    "__version__",
    # Walker
    "MarkdownWalker",
    "parse_document",
    "MarkdownToTreeConverter",
    "ExtensionOptions",
    "WALKER_EXTENSIONS",
    "FRONT_MATTER_EXTENSIONS",
    # Tree
    "Arena",
    "Node",
    "NodeKind",
    "PAYLOAD_TYPES",
    "has_payload",
    "ListType",
    "ListDelimType",
    "TableAlignment",
    "NodeCode",
    "NodeCodeBlock",
    "NodeDescriptionItem",
    "NodeFootnoteDefinition",
    "NodeFootnoteReference",
    "NodeHeading",
    "NodeHtmlBlock",
    "NodeLink",
    "NodeList",
    "NodeMath",
    "NodeMultilineBlockQuote",
    "NodeShortCode",
    "NodeTable",
    "NodeWikiLink",
    # Exceptions
    "MarkdownWalkerError",
    "ValidationError",
    "FileError",
    "ParsingError",
    "WalkError",
]
