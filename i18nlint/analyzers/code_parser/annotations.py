"""TypeScript type annotations reduced to DeclaredType.

Only the shapes literal narrowing cares about are modeled: string/number
literal types, unions, intersections, object types and same-file aliases
(``type X = ...`` and ``interface X {...}``). Everything else becomes an
opaque keyword, reference or other type.
"""

from tree_sitter import Node

from i18nlint.analyzers.code_parser.base import (
    _extract_string_value,
    _find_nodes,
    _get_child_by_field,
    _node_text,
)
from i18nlint.logging import logger
from i18nlint.syntax.nodes import DeclaredType

_ALIAS_TYPES = frozenset({"type_alias_declaration", "interface_declaration"})
_WRAPPER_TYPES = frozenset({"type_annotation", "parenthesized_type", "opting_type_annotation"})


def _literal_value(node: Node) -> object:
    """Python value of the expression inside a literal_type."""
    if node.type == "string":
        return _extract_string_value(_node_text(node))
    if node.type in ("true", "false"):
        return node.type == "true"
    if node.type in ("null", "undefined"):
        return None
    # number, possibly negated
    try:
        return float(_node_text(node).replace("_", ""))
    except ValueError:
        return None


class TypeResolver:
    """Converts annotation nodes of one file, resolving local aliases."""

    def __init__(self, root: Node) -> None:
        self._aliases: dict[str, Node] = {}
        for decl in _find_nodes(root, _ALIAS_TYPES):
            name = _get_child_by_field(decl, "name")
            target = _get_child_by_field(decl, "value" if decl.type == "type_alias_declaration" else "body")
            if name is not None and target is not None:
                self._aliases[_node_text(name)] = target
        self._resolving: set[str] = set()

    def convert(self, node: Node | None) -> DeclaredType | None:
        if node is None:
            return None
        while node.type in _WRAPPER_TYPES:
            inner = next((c for c in node.children if c.is_named), None)
            if inner is None:
                return None
            node = inner

        kind = node.type
        if kind == "literal_type":
            inner = next((c for c in node.children if c.is_named), None)
            if inner is None:
                return DeclaredType("other")
            return DeclaredType("literal", literal=_literal_value(inner))
        if kind in ("union_type", "intersection_type"):
            members = [self.convert(c) for c in node.children if c.is_named]
            return DeclaredType(
                "union" if kind == "union_type" else "intersection",
                members=[m for m in members if m is not None],
            )
        if kind in ("object_type", "interface_body"):
            return self._object_type(node)
        if kind == "predefined_type":
            return DeclaredType("keyword", name=_node_text(node))
        if kind == "type_identifier":
            return self._reference(_node_text(node))
        return DeclaredType("other", name=_node_text(node))

    def _object_type(self, node: Node) -> DeclaredType:
        properties: dict[str, DeclaredType] = {}
        for member in node.children:
            if member.type != "property_signature":
                continue
            name = _get_child_by_field(member, "name")
            declared = self.convert(_get_child_by_field(member, "type"))
            if name is None or declared is None:
                continue
            key = _node_text(name)
            if name.type == "string":
                key = _extract_string_value(key)
            properties[key] = declared
        return DeclaredType("object", properties=properties)

    def _reference(self, name: str) -> DeclaredType:
        target = self._aliases.get(name)
        if target is None or name in self._resolving:
            return DeclaredType("reference", name=name)
        self._resolving.add(name)
        try:
            resolved = self.convert(target)
        finally:
            self._resolving.discard(name)
        if resolved is None:
            return DeclaredType("reference", name=name)
        logger.debug("  Resolved type alias %s -> %s", name, resolved.kind)
        return resolved
