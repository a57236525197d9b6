"""Builders for SyntaxNode trees.

Lets callers with their own parser (or tests) assemble trees without going
through a source front end. Each builder fills in roles for its children
and a rough rendered ``text`` used in finding messages.

Example:
    tree = program(var("a", lit("foo")))
"""

import json
import re
from typing import Any

from i18nlint.syntax.nodes import DeclaredType, NodeKind, SyntaxNode

_HOLE_RE = re.compile(r"\$\{[^}]+\}")

Child = SyntaxNode | str


def _with_role(node: SyntaxNode, role: str) -> SyntaxNode:
    node.role = role
    return node


def _as_expr(value: Child) -> SyntaxNode:
    """Strings become identifiers (dotted names become member chains)."""
    if isinstance(value, SyntaxNode):
        return value
    parts = value.split(".")
    node = ident(parts[0])
    for part in parts[1:]:
        node = member(node, part)
    return node


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def program(*body: SyntaxNode) -> SyntaxNode:
    for stmt in body:
        _with_role(stmt, "body")
    return SyntaxNode(
        NodeKind.OTHER,
        children=list(body),
        text="\n".join(stmt.text for stmt in body),
        type_label="program",
    )


def lit(value: Any) -> SyntaxNode:
    return SyntaxNode(NodeKind.LITERAL, value=value, text=_render_value(value), type_label="string")


def template(raw: str, *expressions: SyntaxNode) -> SyntaxNode:
    """Template literal from its raw text; holes are detected from ``${...}``."""
    for expr in expressions:
        _with_role(expr, "expression")
    return SyntaxNode(
        NodeKind.TEMPLATE_LITERAL,
        children=list(expressions),
        value=raw,
        has_interpolation=bool(expressions) or bool(_HOLE_RE.search(raw)),
        text=f"`{raw}`",
        type_label="template_string",
    )


def text(value: str) -> SyntaxNode:
    return SyntaxNode(NodeKind.TEXT, value=value, text=value, type_label="jsx_text")


def ident(name: str) -> SyntaxNode:
    return SyntaxNode(NodeKind.IDENTIFIER, name=name, text=name, type_label="identifier")


def member(obj: Child, prop: str) -> SyntaxNode:
    obj_node = _with_role(_as_expr(obj), "object")
    prop_node = _with_role(ident(prop), "property")
    return SyntaxNode(
        NodeKind.MEMBER_ACCESS,
        children=[obj_node, prop_node],
        name=prop,
        text=f"{obj_node.text}.{prop}",
        type_label="member_expression",
    )


def call(callee: Child, *args: Child) -> SyntaxNode:
    callee_node = _with_role(_as_expr(callee), "callee")
    arg_nodes = [_with_role(_as_expr(a), "argument") for a in args]
    return SyntaxNode(
        NodeKind.CALL,
        children=[callee_node, *arg_nodes],
        text=f"{callee_node.text}({', '.join(a.text for a in arg_nodes)})",
        type_label="call_expression",
    )


def dynamic_import(source: Child) -> SyntaxNode:
    node = call(ident("import"), source)
    node.is_import_like = True
    return node


def binary(left: Child, operator: str, right: Child) -> SyntaxNode:
    left_node = _with_role(_as_expr(left), "left")
    right_node = _with_role(_as_expr(right), "right")
    return SyntaxNode(
        NodeKind.BINARY_OP,
        children=[left_node, right_node],
        operator=operator,
        text=f"{left_node.text} {operator} {right_node.text}",
        type_label="binary_expression",
    )


def conditional(test: Child, consequent: Child, alternate: Child) -> SyntaxNode:
    nodes = [
        _with_role(_as_expr(test), "test"),
        _with_role(_as_expr(consequent), "consequent"),
        _with_role(_as_expr(alternate), "alternate"),
    ]
    return SyntaxNode(
        NodeKind.OTHER,
        children=nodes,
        text=f"{nodes[0].text} ? {nodes[1].text} : {nodes[2].text}",
        type_label="ternary_expression",
    )


def array(*items: Child) -> SyntaxNode:
    nodes = [_with_role(_as_expr(i), "element") for i in items]
    return SyntaxNode(
        NodeKind.OTHER,
        children=nodes,
        text=f"[{', '.join(n.text for n in nodes)}]",
        type_label="array",
    )


def prop(key: Child, value: Child, computed: bool = False) -> SyntaxNode:
    key_node = _with_role(ident(key) if isinstance(key, str) else key, "key")
    value_node = _with_role(_as_expr(value), "value")
    key_text = f"[{key_node.text}]" if computed else key_node.text
    return SyntaxNode(
        NodeKind.OBJECT_PROPERTY,
        children=[key_node, value_node],
        computed=computed,
        text=f"{key_text}: {value_node.text}",
        type_label="pair",
    )


def obj(*props: SyntaxNode) -> SyntaxNode:
    for p in props:
        _with_role(p, "property")
    return SyntaxNode(
        NodeKind.OTHER,
        children=list(props),
        text="{" + ", ".join(p.text for p in props) + "}",
        type_label="object",
    )


def var(name: str, init: Child | None = None, declared_type: DeclaredType | None = None) -> SyntaxNode:
    children = [_with_role(ident(name), "name")]
    rendered = name
    if init is not None:
        init_node = _with_role(_as_expr(init), "value")
        children.append(init_node)
        rendered = f"{name} = {init_node.text}"
    return SyntaxNode(
        NodeKind.VARIABLE_BINDING,
        children=children,
        name=name,
        text=rendered,
        type_label="variable_declarator",
        declared_type=declared_type,
    )


def expr_stmt(expr: SyntaxNode) -> SyntaxNode:
    return SyntaxNode(
        NodeKind.OTHER,
        children=[_with_role(expr, "expression")],
        text=f"{expr.text};",
        type_label="expression_statement",
    )


def import_decl(source: str, *names: str) -> SyntaxNode:
    children = [_with_role(ident(n), "specifier") for n in names]
    children.append(_with_role(lit(source), "source"))
    return SyntaxNode(
        NodeKind.IMPORT_LIKE,
        children=children,
        text=f"import {', '.join(names)} from {json.dumps(source)};",
        type_label="import_statement",
    )


def export_from(source: str, *names: str) -> SyntaxNode:
    node = import_decl(source, *names)
    node.text = f"export {{ {', '.join(names)} }} from {json.dumps(source)};"
    node.type_label = "export_statement"
    return node


def switch_case(test: Child | None, *consequent: SyntaxNode) -> SyntaxNode:
    children = []
    if test is not None:
        children.append(_with_role(_as_expr(test), "test"))
    children.extend(_with_role(c, "consequent") for c in consequent)
    label = f"case {children[0].text}:" if test is not None else "default:"
    return SyntaxNode(
        NodeKind.SWITCH_CASE,
        children=children,
        text=" ".join([label, *(c.text for c in consequent)]),
        type_label="switch_case",
    )


def switch(discriminant: Child, *cases: SyntaxNode) -> SyntaxNode:
    disc = _with_role(_as_expr(discriminant), "discriminant")
    for c in cases:
        _with_role(c, "case")
    return SyntaxNode(
        NodeKind.OTHER,
        children=[disc, *cases],
        text=f"switch ({disc.text}) {{ {' '.join(c.text for c in cases)} }}",
        type_label="switch_statement",
    )


def type_position(*children: SyntaxNode) -> SyntaxNode:
    for c in children:
        _with_role(c, "type")
    return SyntaxNode(
        NodeKind.TYPE_LITERAL_POSITION,
        children=list(children),
        text=" | ".join(c.text for c in children),
        type_label="literal_type",
    )


def as_expr(expr: Child, type_name: str) -> SyntaxNode:
    expr_node = _with_role(_as_expr(expr), "expression")
    type_node = _with_role(type_position(ident(type_name)), "type")
    return SyntaxNode(
        NodeKind.TYPE_ASSERTION,
        children=[expr_node, type_node],
        text=f"{expr_node.text} as {type_name}",
        type_label="as_expression",
    )


def enum_member(name: str, value: Child) -> SyntaxNode:
    value_node = _with_role(_as_expr(value), "value")
    return SyntaxNode(
        NodeKind.ENUM_MEMBER,
        children=[_with_role(ident(name), "name"), value_node],
        name=name,
        text=f"{name} = {value_node.text}",
        type_label="enum_assignment",
    )


def module_decl(name: str) -> SyntaxNode:
    name_node = _with_role(lit(name), "name")
    return SyntaxNode(
        NodeKind.MODULE_DECLARATION,
        children=[name_node],
        text=f"declare module {name_node.text}",
        type_label="module",
    )


def tagged(tag: Child, quasi: SyntaxNode) -> SyntaxNode:
    tag_node = _with_role(_as_expr(tag), "tag")
    _with_role(quasi, "quasi")
    return SyntaxNode(
        NodeKind.TAGGED_TEMPLATE,
        children=[tag_node, quasi],
        text=f"{tag_node.text}{quasi.text}",
        type_label="call_expression",
    )


def attr(name: str, value: Child | None = None) -> SyntaxNode:
    children = []
    rendered = name
    if value is not None:
        value_node = lit(value) if isinstance(value, str) else value
        children.append(_with_role(value_node, "value"))
        rendered = f"{name}={value_node.text}"
    return SyntaxNode(
        NodeKind.ATTRIBUTE,
        children=children,
        name=name,
        text=rendered,
        type_label="jsx_attribute",
    )


def expr_container(expr: SyntaxNode) -> SyntaxNode:
    return SyntaxNode(
        NodeKind.OTHER,
        children=[_with_role(expr, "expression")],
        text=f"{{{expr.text}}}",
        type_label="jsx_expression",
    )


def element(
    tag: str,
    attrs: list[SyntaxNode] | None = None,
    body: list[SyntaxNode] | None = None,
) -> SyntaxNode:
    """Markup element: an ElementOpening holding the attributes, then the body."""
    attrs = attrs or []
    body = body or []
    for a in attrs:
        _with_role(a, "attribute")
    opening_text = " ".join([tag, *(a.text for a in attrs)])
    opening = SyntaxNode(
        NodeKind.ELEMENT_OPENING,
        children=list(attrs),
        name=tag,
        role="opening",
        text=f"<{opening_text}>",
        type_label="jsx_opening_element",
    )
    for b in body:
        _with_role(b, "child")
    return SyntaxNode(
        NodeKind.ELEMENT,
        children=[opening, *body],
        name=tag,
        text=f"{opening.text}{''.join(b.text for b in body)}</{tag}>",
        type_label="jsx_element",
    )
