"""Syntax node records handed to the classifier by a source front end.

Pure data: the classifier never looks at a producer's native tree, only at
these records. Parent links live in SyntaxTree, not here.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class NodeKind(StrEnum):
    """Closed set of node kinds the classifier distinguishes."""

    LITERAL = "Literal"
    TEMPLATE_LITERAL = "TemplateLiteral"
    TEXT = "Text"
    IDENTIFIER = "Identifier"
    MEMBER_ACCESS = "MemberAccess"
    CALL = "Call"
    BINARY_OP = "BinaryOp"
    OBJECT_PROPERTY = "ObjectProperty"
    VARIABLE_BINDING = "VariableBinding"
    IMPORT_LIKE = "ImportLike"
    SWITCH_CASE = "SwitchCase"
    TYPE_LITERAL_POSITION = "TypeLiteralPosition"
    TYPE_ASSERTION = "TypeAssertion"
    ENUM_MEMBER = "EnumMember"
    MODULE_DECLARATION = "ModuleDeclaration"
    TAGGED_TEMPLATE = "TaggedTemplate"
    ELEMENT = "Element"
    ELEMENT_OPENING = "ElementOpening"
    ATTRIBUTE = "Attribute"
    OTHER = "Other"


# Kinds that carry text the classifier must rule on.
LITERAL_KINDS = frozenset({NodeKind.LITERAL, NodeKind.TEMPLATE_LITERAL, NodeKind.TEXT})


@dataclass(frozen=True)
class SourceSpan:
    """Position of a node in its source file (lines 1-based, columns 0-based)."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int


@dataclass
class DeclaredType:
    """A declared (annotated) type, reduced to what literal narrowing needs.

    kind is one of: literal, union, intersection, object, keyword,
    reference, other.
    """

    kind: str
    literal: Any = None
    members: list["DeclaredType"] = field(default_factory=list)
    properties: dict[str, "DeclaredType"] = field(default_factory=dict)
    name: str | None = None

    def string_literals(self) -> set[str]:
        """String literal members of this type, flattening nested unions."""
        if self.kind == "literal":
            return {self.literal} if isinstance(self.literal, str) else set()
        if self.kind == "union":
            found: set[str] = set()
            for member in self.members:
                found |= member.string_literals()
            return found
        return set()


@dataclass
class SyntaxNode:
    """One node of a program tree.

    Attributes:
        kind: Classification-relevant kind tag.
        children: Child nodes in source order.
        role: Field this node occupies in its parent (key, value, callee,
            argument, test, ...). None for the root.
        value: Decoded Python value for Literal/Text; raw text for templates.
        name: Identifier name, bound name, tag name, attribute name or
            member property name, depending on kind.
        operator: Operator of a BinaryOp.
        computed: True for computed object keys (``{[k]: v}``).
        has_interpolation: TemplateLiteral contains ``${...}`` holes.
        is_import_like: Call is a dynamic module inclusion (``import(...)``).
        text: Rendered source text of the node.
        span: Source position, passed through untouched into findings.
        type_label: The producer's own node type, for diagnostics only.
        declared_type: Annotated type of a VariableBinding, if any.
    """

    kind: NodeKind
    children: list["SyntaxNode"] = field(default_factory=list)
    role: str | None = None
    value: Any = None
    name: str | None = None
    operator: str | None = None
    computed: bool = False
    has_interpolation: bool = False
    is_import_like: bool = False
    text: str = ""
    span: SourceSpan | None = None
    type_label: str = ""
    declared_type: DeclaredType | None = None

    @property
    def is_string(self) -> bool:
        """Whether this node bears string text subject to classification."""
        if self.kind not in LITERAL_KINDS:
            return False
        return isinstance(self.value, str)

    def child(self, role: str) -> "SyntaxNode | None":
        """First child occupying the given role."""
        for c in self.children:
            if c.role == role:
                return c
        return None
