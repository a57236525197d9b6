"""Type-narrowing oracle contract and adapters.

The classifier asks one question of an (optional) type system: does the
contextual type of this expression include this string as a literal member?
Without an oracle the question is simply never asked.
"""

from typing import Protocol, runtime_checkable

from i18nlint.logging import logger
from i18nlint.syntax.nodes import DeclaredType, NodeKind, SyntaxNode
from i18nlint.syntax.queries import property_key_name
from i18nlint.syntax.tree import SyntaxTree

# Wrappers a literal can sit in without changing its contextual type.
_TRANSPARENT_LABELS = frozenset({
    "object",
    "object_pattern",
    "parenthesized_expression",
})


@runtime_checkable
class TypeOracle(Protocol):
    """Query contract of an external type checker."""

    def contextual_type_includes_literal(self, node: SyntaxNode, value: str) -> bool:
        """True if the contextual type of node is, or unions over, the literal value."""
        ...


class TypeNarrowingAdapter:
    """Applies an optional oracle to string Literal nodes only."""

    def __init__(self, oracle: TypeOracle | None = None) -> None:
        self.oracle = oracle

    def exempts(self, tree: SyntaxTree, index: int) -> bool:
        if self.oracle is None:
            return False
        node = tree.node(index)
        if node.kind != NodeKind.LITERAL or not isinstance(node.value, str):
            return False
        return bool(self.oracle.contextual_type_includes_literal(node, node.value))


class AnnotationTypeOracle:
    """Oracle over declared annotations attached to VariableBinding nodes.

    Handles the common shapes without a full type checker:

        var a: 'abc' | 'name' = 'abc';
        var a: {kind: 'b'} = {kind: 'b'};
        function Button({ t = 'name' }: {t: 'name'}) {}

    Type aliases are expected to be resolved by the front end; an
    unresolved reference answers False.
    """

    def __init__(self, tree: SyntaxTree) -> None:
        self.tree = tree
        self._index = {id(tree.node(i)): i for i in range(len(tree))}

    def contextual_type_includes_literal(self, node: SyntaxNode, value: str) -> bool:
        index = self._index.get(id(node))
        if index is None:
            return False

        declared, keys = self._binding_type(index)
        if declared is None:
            return False

        current: DeclaredType | None = declared
        for key in reversed(keys):
            current = _property_type(current, key)
            if current is None:
                return False

        included = value in current.string_literals()
        if included:
            logger.debug("  Literal %r narrowed by declared type", value)
        return included

    def _binding_type(self, index: int) -> tuple[DeclaredType | None, list[str]]:
        """Climb to the nearest binding, collecting property keys on the way."""
        keys: list[str] = []
        current = index
        while True:
            parent = self.tree.parent_of(current)
            if parent is None:
                return None, keys
            parent_node = self.tree.node(parent)
            role = self.tree.role_of(current)

            if parent_node.kind == NodeKind.OBJECT_PROPERTY:
                if role != "value":
                    return None, keys
                key = property_key_name(self.tree, parent)
                if key is None:
                    return None, keys
                keys.append(key)
            elif parent_node.kind == NodeKind.VARIABLE_BINDING:
                if role not in ("value", "pattern"):
                    return None, keys
                return parent_node.declared_type, keys
            elif parent_node.kind != NodeKind.OTHER or parent_node.type_label not in _TRANSPARENT_LABELS:
                return None, keys
            current = parent


def _property_type(declared: DeclaredType | None, key: str) -> DeclaredType | None:
    if declared is None:
        return None
    if declared.kind == "object":
        return declared.properties.get(key)
    return None
