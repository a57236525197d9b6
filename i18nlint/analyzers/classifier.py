"""Exemption classifier: the ordered rules deciding whether a string literal
is user-facing text that must be translated.

Rules are evaluated in a fixed priority order and the first exemption wins:

    1. non-string literals are skipped
    2. structural positions (import sources, object keys, case labels, type
       positions, enum values, module names, comparison operands)
    3. initializer of an UPPER_CASE binding
    4. inside a technical container; inside a translation container (except
       a template using native ``${}`` holes, which is its own violation)
    5. value of an allow-listed markup attribute
    6. value of an object property (may record a deferred complaint)
    7. argument of a technical or translation call
    8. empty, UPPER_CASE, or pattern-matched text
    9. narrowed by the declared type (only with a type oracle)
   10. violation

Reordering these rules changes which real-world code is reported.
"""

import json
from enum import Enum

from i18nlint.analyzers.config import Configuration
from i18nlint.analyzers.constants import TEMPLATE_HOLE_RE, is_upper_case
from i18nlint.analyzers.containers import ContainerTags, is_technical_call, is_translation_call
from i18nlint.analyzers.emitter import Complaint
from i18nlint.analyzers.type_oracle import TypeNarrowingAdapter
from i18nlint.syntax.nodes import NodeKind, SyntaxNode
from i18nlint.syntax.queries import property_key_name
from i18nlint.syntax.tree import SyntaxTree

# Any literal below one of these is never display text.
_STRUCTURAL_ANCESTORS = frozenset({
    NodeKind.IMPORT_LIKE,
    NodeKind.TYPE_LITERAL_POSITION,
    NodeKind.ENUM_MEMBER,
    NodeKind.MODULE_DECLARATION,
})

CONCAT_OPERATOR = "+"


class Verdict(Enum):
    UNCLASSIFIED = 0
    EXEMPT = 1
    PENDING = 2


class ClassificationState:
    """Per-run verdict table, indexed by arena node number.

    Transitions: UNCLASSIFIED -> EXEMPT | PENDING, PENDING -> EXEMPT.
    A node is frozen once its verdict is final; nothing changes after that.
    """

    def __init__(self, size: int) -> None:
        self._verdicts = [Verdict.UNCLASSIFIED] * size
        self._complaints: list[Complaint | None] = [None] * size
        self._frozen = bytearray(size)

    def verdict(self, index: int) -> Verdict:
        return self._verdicts[index]

    def complaint(self, index: int) -> Complaint | None:
        return self._complaints[index]

    def exempt(self, index: int) -> None:
        if self._frozen[index]:
            return
        self._verdicts[index] = Verdict.EXEMPT
        self._complaints[index] = None

    def complain(self, index: int, complaint: Complaint) -> None:
        """Record (or replace) a pending complaint unless already exempt."""
        if self._frozen[index] or self._verdicts[index] == Verdict.EXEMPT:
            return
        self._verdicts[index] = Verdict.PENDING
        self._complaints[index] = complaint

    def freeze(self, index: int) -> None:
        self._frozen[index] = 1

    def is_frozen(self, index: int) -> bool:
        return bool(self._frozen[index])


def literal_text(node: SyntaxNode) -> str:
    """Text a literal carries: decoded value, or raw template body."""
    return node.value if isinstance(node.value, str) else ""


def _has_native_hole(node: SyntaxNode) -> bool:
    return node.has_interpolation or TEMPLATE_HOLE_RE.search(literal_text(node)) is not None


class ExemptionClassifier:
    """Applies the exemption rules to one literal-bearing node at a time."""

    def __init__(
        self,
        tree: SyntaxTree,
        config: Configuration,
        tags: ContainerTags,
        state: ClassificationState,
        types: TypeNarrowingAdapter | None = None,
    ) -> None:
        self.tree = tree
        self.config = config
        self.tags = tags
        self.state = state
        self.types = types or TypeNarrowingAdapter()

    def resolve(self, index: int) -> Complaint | None:
        """Decide the final verdict for a node and freeze it.

        Returns:
            The complaint to report, or None if the node is exempt or not a
            string-bearing node at all.
        """
        node = self.tree.node(index)
        if not node.is_string:
            return None

        if node.kind == NodeKind.TEXT:
            self._classify_text(index, node)
        else:
            self._classify_literal(index, node)

        self.state.freeze(index)
        if self.state.verdict(index) == Verdict.PENDING:
            return self.state.complaint(index)
        return None

    # ------------------------------------------------------------------
    # Rule chains
    # ------------------------------------------------------------------

    def _classify_text(self, index: int, node: SyntaxNode) -> None:
        if self.tags.inside_translation(self.tree, index):
            self.state.exempt(index)
            return
        trimmed = literal_text(node).strip()
        if self.value_exempt(trimmed):
            self.state.exempt(index)
            return
        self.state.complain(index, Complaint("text", {"string": trimmed}))

    def _classify_literal(self, index: int, node: SyntaxNode) -> None:
        tree = self.tree
        state = self.state

        if self.structural_position(index):
            state.exempt(index)
            return

        if self.constant_binding(index):
            state.exempt(index)
            return

        if self.tags.inside_technical(tree, index):
            state.exempt(index)
            return
        if self.tags.inside_translation(tree, index):
            if node.kind == NodeKind.TEMPLATE_LITERAL and _has_native_hole(node):
                state.complain(index, Complaint("placeholder", {"string": node.text, "code": node.text}))
            else:
                state.exempt(index)
            return

        attribute = tree.nearest_ancestor_of_kind(index, NodeKind.ATTRIBUTE)
        if attribute is not None and self.config.ignores_attribute(
            self._owner_tag(index), tree.node(attribute).name
        ):
            state.exempt(index)
            return

        prop = tree.nearest_ancestor_of_kind(index, NodeKind.OBJECT_PROPERTY)
        if prop is not None:
            if self.value_exempt(literal_text(node).strip()):
                state.exempt(index)
                return
            key = property_key_name(tree, prop)
            if key is not None and (key in self.config.ignore_properties or is_upper_case(key)):
                state.exempt(index)
                return
            state.complain(
                index,
                Complaint("property", {"string": node.text, "code": tree.node(prop).text}),
            )

        if self.argument_of_container_call(index):
            state.exempt(index)
            return

        if self.value_exempt(literal_text(node).strip()):
            state.exempt(index)
            return

        if self.types.exempts(tree, index):
            state.exempt(index)
            return

        if attribute is not None:
            state.complain(index, self._attribute_complaint(index, node, attribute))
        elif state.complaint(index) is None:
            state.complain(index, self._generic_complaint(index, node))

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def structural_position(self, index: int) -> bool:
        """Import sources, keys, case labels, type positions, enum values, module
        names and comparison operands are never display text."""
        tree = self.tree
        for ancestor in tree.ancestors_of(index):
            if tree.node(ancestor).kind in _STRUCTURAL_ANCESTORS:
                return True

        parent = tree.parent_of(index)
        if parent is None:
            return False
        parent_node = tree.node(parent)
        role = tree.role_of(index)
        if parent_node.kind == NodeKind.OBJECT_PROPERTY and role == "key":
            return True
        if parent_node.kind == NodeKind.SWITCH_CASE and role == "test":
            return True
        if parent_node.kind == NodeKind.TYPE_ASSERTION:
            return True
        if parent_node.kind == NodeKind.BINARY_OP and parent_node.operator != CONCAT_OPERATOR:
            return True
        return False

    def constant_binding(self, index: int) -> bool:
        """``const A_B = "..."``: constant tables are not display text."""
        parent = self.tree.parent_of(index)
        if parent is None or self.tree.role_of(index) != "value":
            return False
        parent_node = self.tree.node(parent)
        return (
            parent_node.kind == NodeKind.VARIABLE_BINDING
            and parent_node.name is not None
            and is_upper_case(parent_node.name)
        )

    def argument_of_container_call(self, index: int) -> bool:
        """Literal reaches its nearest enclosing call through an argument edge,
        and that call is a technical or translation call."""
        tree = self.tree
        current = index
        for ancestor in tree.ancestors_of(index):
            if tree.node(ancestor).kind == NodeKind.CALL and tree.role_of(current) == "argument":
                return is_technical_call(tree, ancestor, self.config) or is_translation_call(
                    tree, ancestor, self.config
                )
            current = ancestor
        return False

    def value_exempt(self, trimmed: str) -> bool:
        """Empty, UPPER_CASE, or matched by a value pattern."""
        if not trimmed:
            return True
        if is_upper_case(trimmed):
            return True
        return self.config.matches_value(trimmed)

    # ------------------------------------------------------------------
    # Complaint builders
    # ------------------------------------------------------------------

    def _owner_tag(self, index: int) -> str | None:
        opening = self.tree.nearest_ancestor_of_kind(index, NodeKind.ELEMENT_OPENING)
        return self.tree.node(opening).name if opening is not None else None

    def _attribute_complaint(self, index: int, node: SyntaxNode, attribute: int) -> Complaint:
        opening = self.tree.nearest_ancestor_of_kind(index, NodeKind.ELEMENT_OPENING)
        tag, code = "", ""
        if opening is not None:
            tag = self.tree.node(opening).name or ""
            code = self.tree.node(opening).text
        return Complaint(
            "attribute",
            {
                "string": node.text,
                "attribute": self.tree.node(attribute).name or "",
                "tag": tag,
                "code": code,
            },
        )

    def _generic_complaint(self, index: int, node: SyntaxNode) -> Complaint:
        parent = self.tree.parent_of(index)
        trail = [self.tree.node(a).kind.value for a in self.tree.ancestors_of(index)]
        trail.reverse()
        trail.append(node.kind.value)
        return Complaint(
            "literal",
            {
                "string": node.text,
                "code": self.tree.node(parent).text if parent is not None else node.text,
                "type": node.kind.value,
                "ancestry": json.dumps(trail),
            },
        )
