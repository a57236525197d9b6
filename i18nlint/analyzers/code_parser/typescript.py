"""TypeScript/JavaScript front end: tree-sitter trees to SyntaxNode trees.

Handles JS, JSX, TS and TSX. Each tree-sitter node maps to one SyntaxNode
except for parentheses and template substitutions (replaced by their inner
expression), call argument lists (flattened into the call) and closing JSX
tags and comments (dropped).
"""

from collections.abc import Callable

from tree_sitter import Node

from i18nlint.analyzers.code_parser.annotations import TypeResolver
from i18nlint.analyzers.code_parser.base import (
    _extract_string_value,
    _get_child_by_field,
    _named_children_with_fields,
    _node_span,
    _node_text,
)
from i18nlint.syntax.nodes import NodeKind, SyntaxNode

_SKIP_TYPES = frozenset({"comment", "html_comment", "jsx_closing_element"})

# Replaced by their single inner expression.
_TRANSPARENT_TYPES = frozenset({"parenthesized_expression", "template_substitution"})

_IDENTIFIER_TYPES = frozenset({
    "identifier",
    "property_identifier",
    "private_property_identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
    "type_identifier",
    "statement_identifier",
    "this",
    "super",
    "undefined",
})

_VALUE_LITERALS = {"true": True, "false": False, "null": None}

_TYPE_POSITION_TYPES = frozenset({
    "type_annotation",
    "opting_type_annotation",
    "omitting_type_annotation",
    "adding_type_annotation",
    "asserts_annotation",
    "type_predicate_annotation",
    "type_alias_declaration",
    "interface_declaration",
    "type_arguments",
    "type_parameters",
    "literal_type",
    "lookup_type",
    "index_type_query",
})

_KIND_BY_TYPE: dict[str, NodeKind] = {
    "import_statement": NodeKind.IMPORT_LIKE,
    "binary_expression": NodeKind.BINARY_OP,
    "member_expression": NodeKind.MEMBER_ACCESS,
    "subscript_expression": NodeKind.MEMBER_ACCESS,
    "pair": NodeKind.OBJECT_PROPERTY,
    "pair_pattern": NodeKind.OBJECT_PROPERTY,
    "object_assignment_pattern": NodeKind.OBJECT_PROPERTY,
    "variable_declarator": NodeKind.VARIABLE_BINDING,
    "required_parameter": NodeKind.VARIABLE_BINDING,
    "optional_parameter": NodeKind.VARIABLE_BINDING,
    "switch_case": NodeKind.SWITCH_CASE,
    "as_expression": NodeKind.TYPE_ASSERTION,
    "satisfies_expression": NodeKind.TYPE_ASSERTION,
    "type_assertion": NodeKind.TYPE_ASSERTION,
    "enum_assignment": NodeKind.ENUM_MEMBER,
    "module": NodeKind.MODULE_DECLARATION,
    "internal_module": NodeKind.MODULE_DECLARATION,
    "jsx_attribute": NodeKind.ATTRIBUTE,
    "jsx_opening_element": NodeKind.ELEMENT_OPENING,
}

# Grammar field -> role, per node type. Unlisted fields keep their own name.
_ROLE_BY_FIELD: dict[str, dict[str, str]] = {
    "call_expression": {"function": "callee"},
    "object_assignment_pattern": {"left": "key", "right": "value"},
    "switch_case": {"value": "test", "body": "consequent"},
    "ternary_expression": {"condition": "test", "consequence": "consequent", "alternative": "alternate"},
    "subscript_expression": {"index": "property"},
    "method_definition": {"name": "key"},
}


# (tree-sitter node, role, parent to append to, callback run on the converted node)
_Task = tuple[Node, str | None, SyntaxNode, Callable[[SyntaxNode], None] | None]


class TreeConverter:
    """Converts one parsed file into a SyntaxNode tree.

    Works from an explicit stack so nesting depth is bounded by memory,
    not by the interpreter's recursion limit.
    """

    def __init__(self, root: Node, typed: bool = False) -> None:
        self.root = root
        self.types = TypeResolver(root) if typed else None
        self._pending: list[_Task] = []

    def convert(self) -> SyntaxNode:
        holder = SyntaxNode(NodeKind.OTHER)
        stack: list[_Task] = [(self.root, None, holder, None)]
        while stack:
            node, role, parent, on_convert = stack.pop()
            node_type = node.type
            if node_type in _SKIP_TYPES:
                continue
            if node_type in _TRANSPARENT_TYPES:
                inner = next((c for c in node.children if c.is_named and c.type not in _SKIP_TYPES), None)
                if inner is not None:
                    stack.append((inner, role, parent, on_convert))
                continue

            self._pending = []
            result = self._convert(node, role)
            parent.children.append(result)
            if on_convert is not None:
                on_convert(result)
            # Reversed so children are converted, and appended, in source order
            stack.extend(reversed(self._pending))

        if not holder.children:
            return SyntaxNode(NodeKind.OTHER, type_label=self.root.type)
        return holder.children[0]

    def _defer(
        self,
        node: Node,
        role: str | None,
        parent: SyntaxNode,
        on_convert: Callable[[SyntaxNode], None] | None = None,
    ) -> None:
        self._pending.append((node, role, parent, on_convert))

    def _convert(self, node: Node, role: str | None) -> SyntaxNode:
        """Build the record for one node; its children are deferred."""
        node_type = node.type
        result = SyntaxNode(
            _KIND_BY_TYPE.get(node_type, NodeKind.OTHER),
            role=role,
            text=_node_text(node),
            span=_node_span(node),
            type_label=node_type,
        )

        if node_type == "string":
            result.kind = NodeKind.LITERAL
            result.value = _extract_string_value(result.text)
        elif node_type == "template_string":
            self._template(node, result)
        elif node_type == "number":
            result.kind = NodeKind.LITERAL
            result.value = _number_value(result.text)
        elif node_type in _VALUE_LITERALS:
            result.kind = NodeKind.LITERAL
            result.value = _VALUE_LITERALS[node_type]
        elif node_type == "regex":
            result.kind = NodeKind.LITERAL
        elif node_type == "jsx_text":
            result.kind = NodeKind.TEXT
            result.value = result.text
        elif node_type in _IDENTIFIER_TYPES:
            result.kind = NodeKind.IDENTIFIER
            result.name = result.text
        elif node_type == "call_expression":
            self._call(node, result)
        elif node_type in ("jsx_element", "jsx_self_closing_element"):
            self._element(node, result)
        elif node_type == "jsx_attribute":
            self._attribute(node, result)
        elif node_type in ("pair", "pair_pattern", "object_assignment_pattern"):
            self._property(node, result)
        elif node_type == "method_definition" and node.parent is not None and node.parent.type == "object":
            result.kind = NodeKind.OBJECT_PROPERTY
            self._children(node, result)
        elif result.kind == NodeKind.VARIABLE_BINDING:
            self._binding(node, result)
        elif result.kind == NodeKind.TYPE_ASSERTION:
            self._assertion(node, result)
        else:
            if node_type == "export_statement" and _get_child_by_field(node, "source") is not None:
                result.kind = NodeKind.IMPORT_LIKE
            elif node_type in _TYPE_POSITION_TYPES:
                result.kind = NodeKind.TYPE_LITERAL_POSITION
            self._fill_names(node, result)
            self._children(node, result)
        return result

    def _children(self, node: Node, result: SyntaxNode) -> None:
        roles = _ROLE_BY_FIELD.get(node.type, {})
        for child, field in _named_children_with_fields(node):
            role = roles.get(field, field) if field else "child"
            self._defer(child, role, result)

    def _fill_names(self, node: Node, result: SyntaxNode) -> None:
        if result.kind == NodeKind.BINARY_OP:
            operator = _get_child_by_field(node, "operator")
            result.operator = _node_text(operator) if operator is not None else None
        elif result.kind == NodeKind.MEMBER_ACCESS:
            if node.type == "subscript_expression":
                result.computed = True
            else:
                prop = _get_child_by_field(node, "property")
                result.name = _node_text(prop) if prop is not None else None
        elif result.kind == NodeKind.ELEMENT_OPENING:
            name = _get_child_by_field(node, "name")
            result.name = _node_text(name) if name is not None else None
        elif result.kind in (NodeKind.ENUM_MEMBER, NodeKind.MODULE_DECLARATION):
            name = _get_child_by_field(node, "name")
            result.name = _node_text(name) if name is not None else None

    def _template(self, node: Node, result: SyntaxNode) -> None:
        result.kind = NodeKind.TEMPLATE_LITERAL
        result.value = result.text[1:-1]
        for child in node.children:
            if child.type != "template_substitution":
                continue
            result.has_interpolation = True
            self._defer(child, "expression", result)

    def _call(self, node: Node, result: SyntaxNode) -> None:
        function = _get_child_by_field(node, "function")
        arguments = _get_child_by_field(node, "arguments")

        if arguments is not None and arguments.type == "template_string":
            # t`Hello` and T(opts)`Hello`
            result.kind = NodeKind.TAGGED_TEMPLATE
            if function is not None:

                def name_from_tag(tag: SyntaxNode) -> None:
                    if tag.kind == NodeKind.IDENTIFIER:
                        result.name = tag.name

                self._defer(function, "tag", result, name_from_tag)
            self._defer(arguments, "quasi", result)
            return

        result.kind = NodeKind.CALL
        if function is not None:
            result.is_import_like = function.type == "import"
            self._defer(function, "callee", result)
        if arguments is not None:
            for arg in arguments.children:
                if not arg.is_named:
                    continue
                self._defer(arg, "argument", result)

    def _element(self, node: Node, result: SyntaxNode) -> None:
        result.kind = NodeKind.ELEMENT
        if node.type == "jsx_self_closing_element":
            # <Foo a="b" /> is an element whose opening tag is the whole node
            opening = SyntaxNode(
                NodeKind.ELEMENT_OPENING,
                role="opening",
                text=result.text,
                span=result.span,
                type_label=node.type,
            )
            self._fill_names(node, opening)
            self._children(node, opening)
            result.name = opening.name
            result.children.append(opening)
            return

        def name_from_opening(opening: SyntaxNode) -> None:
            if opening.kind == NodeKind.ELEMENT_OPENING:
                result.name = opening.name

        for child, field in _named_children_with_fields(node):
            role = "opening" if field == "open_tag" else "child"
            self._defer(child, role, result, name_from_opening)

    def _attribute(self, node: Node, result: SyntaxNode) -> None:
        named = [c for c in node.children if c.is_named]
        if not named:
            return
        result.name = _node_text(named[0])
        for value in named[1:]:
            if value.type == "string":
                # JSX attribute strings have no escape sequences
                text = _node_text(value)
                result.children.append(
                    SyntaxNode(
                        NodeKind.LITERAL,
                        role="value",
                        value=_extract_string_value(text, decode_escapes=False),
                        text=text,
                        span=_node_span(value),
                        type_label=value.type,
                    )
                )
                continue
            self._defer(value, "value", result)

    def _property(self, node: Node, result: SyntaxNode) -> None:
        roles = _ROLE_BY_FIELD.get(node.type, {})
        for child, field in _named_children_with_fields(node):
            role = roles.get(field, field) if field else "child"
            if role == "key" and child.type == "computed_property_name":
                result.computed = True
                child = next((c for c in child.children if c.is_named), None)
                if child is None:
                    continue
            self._defer(child, role, result)

    def _binding(self, node: Node, result: SyntaxNode) -> None:
        target_field = "name" if node.type == "variable_declarator" else "pattern"
        for child, field in _named_children_with_fields(node):
            role = field or "child"
            if field == target_field:
                if child.type == "identifier":
                    role = "name"
                    # Parameters never count as constant-table bindings.
                    if node.type == "variable_declarator":
                        result.name = _node_text(child)
                else:
                    role = "pattern"
            self._defer(child, role, result)
        if self.types is not None:
            result.declared_type = self.types.convert(_get_child_by_field(node, "type"))

    def _assertion(self, node: Node, result: SyntaxNode) -> None:
        named = [c for c in node.children if c.is_named and c.type not in _SKIP_TYPES]
        for position, child in enumerate(named):
            if node.type == "type_assertion":
                role = "type" if child.type == "type_arguments" else "expression"
            else:
                role = "expression" if position == 0 else "type"
            self._defer(child, role, result)


def _number_value(text: str) -> int | float | None:
    cleaned = text.replace("_", "").rstrip("n")
    try:
        return int(cleaned, 0)
    except ValueError:
        pass
    try:
        return float(cleaned)
    except ValueError:
        return None


def convert_tree(root: Node, typed: bool = False) -> SyntaxNode:
    """Convert a tree-sitter root node.

    Args:
        root: Root node of a tree-sitter parse.
        typed: Attach declared types to bindings (TypeScript only).

    Returns:
        Root SyntaxNode of the converted program.
    """
    return TreeConverter(root, typed=typed).convert()
