"""Arena over a SyntaxNode tree with parent links and ancestry queries.

Nodes are numbered densely in pre-order while the arena is built, so every
per-run side table can be a plain list indexed by node number.
"""

from collections.abc import Callable, Iterator
from enum import Enum

from i18nlint.syntax.nodes import NodeKind, SyntaxNode

KindPredicate = NodeKind | Callable[[SyntaxNode], bool]


class Event(Enum):
    """Traversal event emitted by SyntaxTree.walk()."""

    ENTER = "enter"
    EXIT = "exit"


class SyntaxTree:
    """Indexed, bidirectionally navigable view of a SyntaxNode tree."""

    def __init__(self, root: SyntaxNode) -> None:
        self.root = root
        self._nodes: list[SyntaxNode] = []
        self._parent: list[int] = []
        self._children: list[list[int]] = []

        # Iterative pre-order numbering; deep trees must not hit the recursion limit.
        stack: list[tuple[SyntaxNode, int]] = [(root, -1)]
        while stack:
            node, parent = stack.pop()
            index = len(self._nodes)
            self._nodes.append(node)
            self._parent.append(parent)
            self._children.append([])
            if parent >= 0:
                self._children[parent].append(index)
            for child in reversed(node.children):
                stack.append((child, index))

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, index: int) -> SyntaxNode:
        return self._nodes[index]

    def parent_of(self, index: int) -> int | None:
        """Index of the parent node, or None for the root."""
        parent = self._parent[index]
        return parent if parent >= 0 else None

    def children_of(self, index: int) -> list[int]:
        return self._children[index]

    def role_of(self, index: int) -> str | None:
        return self._nodes[index].role

    def ancestors_of(self, index: int) -> Iterator[int]:
        """Strict ancestors from nearest to furthest. Empty for the root."""
        parent = self._parent[index]
        while parent >= 0:
            yield parent
            parent = self._parent[parent]

    def nearest_ancestor_of_kind(self, index: int, kind: KindPredicate) -> int | None:
        """Nearest strict ancestor matching a kind (or node predicate)."""
        for ancestor in self.ancestors_of(index):
            node = self._nodes[ancestor]
            if isinstance(kind, NodeKind):
                if node.kind == kind:
                    return ancestor
            elif kind(node):
                return ancestor
        return None

    def index_of(self, node: SyntaxNode) -> int:
        """Arena index of a node object (linear scan, for tests and tooling)."""
        for i, candidate in enumerate(self._nodes):
            if candidate is node:
                return i
        raise ValueError("node is not part of this tree")

    def walk(self) -> Iterator[tuple[Event, int]]:
        """Depth-first traversal yielding ENTER in pre-order and EXIT in post-order."""
        if not self._nodes:
            return
        stack: list[tuple[int, bool]] = [(0, False)]
        while stack:
            index, exiting = stack.pop()
            if exiting:
                yield Event.EXIT, index
                continue
            yield Event.ENTER, index
            stack.append((index, True))
            for child in reversed(self._children[index]):
                stack.append((child, False))
