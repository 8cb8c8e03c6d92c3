#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markdown_walker/walkers.py
"""Ready-made walkers.

Each walker here is constructible without arguments, so it can be run with
``from_markdown``:

    >>> outline = HeadingOutline.from_markdown("# Intro\\n\\n## Usage")
    >>> [(entry.level, entry.text) for entry in outline.entries]
    [(1, 'Intro'), (2, 'Usage')]

"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Optional

import yaml

from markdown_walker.ast import (
    Node,
    NodeCode,
    NodeCodeBlock,
    NodeHeading,
    NodeKind,
    NodeLink,
    NodeMath,
    NodeShortCode,
    NodeTable,
    NodeWikiLink,
)
from markdown_walker.constants import DEFAULT_FRONT_MATTER_DELIMITER
from markdown_walker.exceptions import WalkError
from markdown_walker.options import FRONT_MATTER_EXTENSIONS
from markdown_walker.parsers.markdown import parse_document
from markdown_walker.walker import MarkdownWalker

logger = logging.getLogger(__name__)


class NodeCounter(MarkdownWalker):
    """Count dispatched nodes by kind.

    Attributes
    ----------
    counts : Counter[NodeKind]
        Number of nodes of each kind

    """

    def __init__(self) -> None:
        self.counts: Counter[NodeKind] = Counter()

    def dispatch(self, node: Node) -> None:
        self.counts[node.kind] += 1
        super().dispatch(node)

    @property
    def total(self) -> int:
        """Total number of nodes visited."""
        return sum(self.counts.values())


class ImageCounter(MarkdownWalker):
    """Count image nodes."""

    def __init__(self) -> None:
        self.count = 0

    def visit_image(self, node: Node, link: NodeLink) -> None:
        self.count += 1


@dataclass(frozen=True)
class CollectedLink:
    """A link, image or wiki link target found in a document.

    Parameters
    ----------
    kind : NodeKind
        LINK, IMAGE or WIKI_LINK
    url : str
        Destination
    title : str, default ""
        Title, empty when absent

    """

    kind: NodeKind
    url: str
    title: str = ""


class LinkCollector(MarkdownWalker):
    """Collect link, image and wiki link destinations in document order."""

    def __init__(self) -> None:
        self.links: list[CollectedLink] = []

    def visit_link(self, node: Node, link: NodeLink) -> None:
        self.links.append(CollectedLink(NodeKind.LINK, link.url, link.title))

    def visit_image(self, node: Node, link: NodeLink) -> None:
        self.links.append(CollectedLink(NodeKind.IMAGE, link.url, link.title))

    def visit_wiki_link(self, node: Node, wiki_link: NodeWikiLink) -> None:
        self.links.append(CollectedLink(NodeKind.WIKI_LINK, wiki_link.url))


def _nearest(node: Node, *kinds: NodeKind) -> Optional[Node]:
    """Return the nearest ancestor of ``node`` whose kind is in ``kinds``."""
    for ancestor in node.ancestors():
        if ancestor.kind in kinds:
            return ancestor
    return None


@dataclass
class OutlineEntry:
    """One heading of a document outline."""

    level: int
    text: str = ""


class HeadingOutline(MarkdownWalker):
    """Collect headings with their plain text.

    Text inside a heading is attributed to it through a parent lookup, since
    the heading is always dispatched before its content.

    Attributes
    ----------
    entries : list of OutlineEntry
        Headings in document order

    """

    def __init__(self) -> None:
        self.entries: list[OutlineEntry] = []

    def visit_heading(self, node: Node, heading: NodeHeading) -> None:
        self.entries.append(OutlineEntry(level=heading.level))

    def _append(self, node: Node, text: str) -> None:
        if self.entries and _nearest(node, NodeKind.HEADING) is not None:
            self.entries[-1].text += text

    def visit_text(self, node: Node, text: str) -> None:
        self._append(node, text)

    def visit_code(self, node: Node, code: NodeCode) -> None:
        self._append(node, code.literal)

    def visit_soft_break(self, node: Node) -> None:
        self._append(node, " ")

    def visit_short_code(self, node: Node, short_code: NodeShortCode) -> None:
        self._append(node, short_code.emoji)


class PlainTextCollector(MarkdownWalker):
    """Extract the plain text of a document.

    Markup is dropped; soft breaks become spaces, hard breaks newlines, and
    blocks are separated by blank lines. Table cells are separated by tabs
    and rows by newlines. Raw HTML is skipped.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def _separate(self, separator: str) -> None:
        if self._parts:
            self._parts.append(separator)

    def visit_paragraph(self, node: Node) -> None:
        self._separate("\n\n")

    def visit_heading(self, node: Node, heading: NodeHeading) -> None:
        self._separate("\n\n")

    def visit_code_block(self, node: Node, code_block: NodeCodeBlock) -> None:
        self._separate("\n\n")
        self._parts.append(code_block.literal.rstrip("\n"))

    def visit_table(self, node: Node, table: NodeTable) -> None:
        self._separate("\n\n")

    def visit_table_row(self, node: Node, header: bool) -> None:
        if not header:
            self._separate("\n")

    def visit_table_cell(self, node: Node) -> None:
        parent = node.parent
        if parent is not None and parent.children[0] is not node:
            self._parts.append("\t")

    def visit_text(self, node: Node, text: str) -> None:
        self._parts.append(text)

    def visit_code(self, node: Node, code: NodeCode) -> None:
        self._parts.append(code.literal)

    def visit_soft_break(self, node: Node) -> None:
        self._parts.append(" ")

    def visit_line_break(self, node: Node) -> None:
        self._parts.append("\n")

    def visit_short_code(self, node: Node, short_code: NodeShortCode) -> None:
        self._parts.append(short_code.emoji)

    def visit_math(self, node: Node, math: NodeMath) -> None:
        if math.display_math and node.parent is not None and node.parent.kind.is_block:
            self._separate("\n\n")
        self._parts.append(math.literal)


class FrontMatterReader(MarkdownWalker):
    """Load the YAML front matter of a document.

    ``from_markdown`` parses without front matter, so documents are read with
    ``read``, which enables it.

    Attributes
    ----------
    data : dict
        Front matter mapping; empty when the document has none

    Raises
    ------
    WalkError
        If the front matter is not valid YAML or is not a mapping

    """

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}

    @classmethod
    def read(cls, markdown: str, delimiter: str = DEFAULT_FRONT_MATTER_DELIMITER) -> FrontMatterReader:
        """Parse ``markdown`` with front matter enabled and load it.

        Parameters
        ----------
        markdown : str
            Markdown source
        delimiter : str, default "---"
            Front matter delimiter line

        Returns
        -------
        FrontMatterReader
            The reader, with ``data`` loaded

        """
        extensions = FRONT_MATTER_EXTENSIONS.create_updated(front_matter_delimiter=delimiter)
        reader = cls()
        reader.visit(parse_document(markdown, extensions=extensions))
        return reader

    def visit_front_matter(self, node: Node, front_matter: str) -> None:
        body = "\n".join(front_matter.splitlines()[1:-1])
        try:
            data = yaml.safe_load(body)
        except yaml.YAMLError as e:
            raise WalkError(f"Invalid YAML front matter: {e}", node=node, original_error=e) from e

        if data is None:
            return
        if not isinstance(data, dict):
            raise WalkError(f"Front matter must be a mapping, got {type(data).__name__}", node=node)
        logger.debug("Loaded front matter with %d keys", len(data))
        self.data = data


class TaskCollector(MarkdownWalker):
    """Collect task list items with their completion state and text.

    Text is attributed to the nearest enclosing list item; text of a plain
    item nested in a task item does not belong to the task, nor does text
    whose task item was not visited.
    """

    def __init__(self) -> None:
        self._tasks: list[tuple[bool, list[str]]] = []
        self._positions: dict[Node, int] = {}

    @property
    def tasks(self) -> list[tuple[bool, str]]:
        """(checked, text) pairs in document order."""
        return [(checked, "".join(parts).strip()) for checked, parts in self._tasks]

    def visit_task_item(self, node: Node, marker: str | None) -> None:
        self._positions[node] = len(self._tasks)
        self._tasks.append((marker is not None, []))

    def _append(self, node: Node, text: str) -> None:
        item = _nearest(node, NodeKind.TASK_ITEM, NodeKind.ITEM)
        if item is None or item.kind is not NodeKind.TASK_ITEM:
            return
        position = self._positions.get(item)
        if position is not None:
            self._tasks[position][1].append(text)

    def visit_text(self, node: Node, text: str) -> None:
        self._append(node, text)

    def visit_code(self, node: Node, code: NodeCode) -> None:
        self._append(node, code.literal)

    def visit_soft_break(self, node: Node) -> None:
        self._append(node, " ")
