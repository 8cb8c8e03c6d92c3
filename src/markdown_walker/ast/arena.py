#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markdown_walker/ast/arena.py
"""Backing store for Markdown document trees.

Every node of a parsed document lives in a single ``Arena``. Nodes refer to
their parent by integer index into the arena's node list, and the arena keeps
each node's ordered child indices. Nodes never own each other; they are only
referenced through the arena that created them.

Examples
--------
Build a small tree by hand:

    >>> arena = Arena()
    >>> doc = arena.add(NodeKind.DOCUMENT)
    >>> para = arena.add(NodeKind.PARAGRAPH, parent=doc)
    >>> text = arena.add(NodeKind.TEXT, "hello", parent=para)
    >>> [child.kind for child in doc.children]
    [<NodeKind.PARAGRAPH: 'paragraph'>]
    >>> text.parent is para
    True

"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from markdown_walker.ast.nodes import PAYLOAD_TYPES, NodeKind, payload_matches
from markdown_walker.exceptions import ValidationError


class Node:
    """A single element of a document tree.

    Instances are created by ``Arena.add`` only.

    Parameters
    ----------
    kind : NodeKind
        Kind tag of the node
    payload : Any
        Kind-specific payload, None for payload-free kinds
    index : int
        Handle of the node within its arena
    arena : Arena
        Store owning the node
    parent_index : int or None
        Handle of the parent node, None for a root

    """

    __slots__ = ("kind", "payload", "index", "arena", "parent_index")

    def __init__(
        self,
        kind: NodeKind,
        payload: Any,
        index: int,
        arena: Arena,
        parent_index: Optional[int],
    ) -> None:
        self.kind = kind
        self.payload = payload
        self.index = index
        self.arena = arena
        self.parent_index = parent_index

    @property
    def children(self) -> tuple[Node, ...]:
        """Child nodes in document order."""
        return self.arena.children_of(self.index)

    @property
    def parent(self) -> Optional[Node]:
        """Parent node, or None for a root."""
        if self.parent_index is None:
            return None
        return self.arena.get(self.parent_index)

    @property
    def is_root(self) -> bool:
        return self.parent_index is None

    def ancestors(self) -> Iterator[Node]:
        """Iterate over the ancestors of this node, nearest first."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def __repr__(self) -> str:
        if self.payload is None:
            return f"Node({self.kind.name}, index={self.index})"
        return f"Node({self.kind.name}, {self.payload!r}, index={self.index})"


class Arena:
    """Integer-handle store owning every node of one or more trees.

    Nodes are appended in creation order. A parent is always created before
    its children, so the trees held by an arena are acyclic and finite.
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._children: list[list[int]] = []

    def add(self, kind: NodeKind, payload: Any = None, parent: Optional[Node] = None) -> Node:
        """Create a node and append it as the last child of ``parent``.

        Parameters
        ----------
        kind : NodeKind
            Kind of the new node
        payload : Any, optional
            Kind-specific payload; must match ``PAYLOAD_TYPES[kind]``
        parent : Node, optional
            Parent node from this arena; None creates a root

        Returns
        -------
        Node
            The new node

        Raises
        ------
        ValidationError
            If the payload does not match the kind or the parent belongs to
            another arena

        """
        if not isinstance(kind, NodeKind):
            raise ValidationError(
                f"Node kind must be a NodeKind, got {type(kind).__name__}",
                parameter_name="kind",
                parameter_value=kind,
            )
        if not payload_matches(kind, payload):
            expected = ", ".join(t.__name__ for t in PAYLOAD_TYPES[kind])
            raise ValidationError(
                f"Invalid payload for {kind.name}: expected {expected}, got {type(payload).__name__}",
                parameter_name="payload",
                parameter_value=payload,
            )
        if parent is not None and parent.arena is not self:
            raise ValidationError(
                "Parent node belongs to a different arena",
                parameter_name="parent",
                parameter_value=parent,
            )

        index = len(self._nodes)
        node = Node(kind, payload, index, self, None if parent is None else parent.index)
        self._nodes.append(node)
        self._children.append([])
        if parent is not None:
            self._children[parent.index].append(index)
        return node

    def get(self, index: int) -> Node:
        """Return the node with handle ``index``."""
        return self._nodes[index]

    def children_of(self, index: int) -> tuple[Node, ...]:
        """Return the children of the node with handle ``index``, in order."""
        return tuple(self._nodes[i] for i in self._children[index])

    def roots(self) -> list[Node]:
        """Return every parentless node, in creation order."""
        return [node for node in self._nodes if node.parent_index is None]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)
