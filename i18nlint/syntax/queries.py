"""Small structural queries over a SyntaxTree shared by the analyzers."""

from i18nlint.syntax.nodes import NodeKind
from i18nlint.syntax.tree import SyntaxTree


def child_with_role(tree: SyntaxTree, index: int, role: str) -> int | None:
    """Index of the first child occupying a role."""
    for child in tree.children_of(index):
        if tree.role_of(child) == role:
            return child
    return None


def dotted_name(tree: SyntaxTree, index: int) -> str | None:
    """Render an identifier or member chain as ``a.b.c``.

    Falls back to the node's source text for anything else in the chain.
    """
    node = tree.node(index)
    if node.kind == NodeKind.IDENTIFIER:
        return node.name
    if node.kind == NodeKind.MEMBER_ACCESS:
        obj = child_with_role(tree, index, "object")
        base = dotted_name(tree, obj) if obj is not None else None
        if base is None or node.name is None:
            return node.text or None
        return f"{base}.{node.name}"
    return node.text or None


def property_key_name(tree: SyntaxTree, prop: int) -> str | None:
    """Key of an ObjectProperty: identifier name or literal key value.

    Computed keys are treated the same way (``{[A_B]: ...}`` -> ``A_B``).
    """
    key = child_with_role(tree, prop, "key")
    if key is None:
        return None
    key_node = tree.node(key)
    if key_node.kind == NodeKind.IDENTIFIER:
        return key_node.name
    if key_node.kind == NodeKind.LITERAL and key_node.value is not None:
        return str(key_node.value)
    return None
