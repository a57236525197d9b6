"""Container tagging: calls, tagged templates and wrapper elements whose whole
subtree is exempt by virtue of the container itself.

Tagging runs on node entry (pre-order) so a literal's verdict, taken on node
exit, always sees every container above it.
"""

from i18nlint.analyzers.config import CalleeRules, Configuration
from i18nlint.analyzers.constants import (
    MODULE_CALLEES,
    TRANSLATION_COMPONENTS,
    TRANSLATION_TAGS,
)
from i18nlint.logging import logger
from i18nlint.syntax.nodes import NodeKind
from i18nlint.syntax.queries import child_with_role, dotted_name
from i18nlint.syntax.tree import SyntaxTree


def _callee_matches(tree: SyntaxTree, callee: int, rules: CalleeRules) -> bool:
    node = tree.node(callee)
    if node.kind == NodeKind.IDENTIFIER:
        return rules.matches_simple(node.name)
    if node.kind == NodeKind.MEMBER_ACCESS:
        if rules.matches_simple(node.name):
            return True
        return rules.matches_qualified(dotted_name(tree, callee))
    return False


def is_technical_call(tree: SyntaxTree, index: int, config: Configuration) -> bool:
    """Module inclusion, or a callee on the technical allow-list."""
    node = tree.node(index)
    if node.kind != NodeKind.CALL:
        return False
    if node.is_import_like:
        return True
    callee = child_with_role(tree, index, "callee")
    if callee is None:
        return False
    callee_node = tree.node(callee)
    if callee_node.kind == NodeKind.IDENTIFIER and callee_node.name in MODULE_CALLEES:
        return True
    return _callee_matches(tree, callee, config.technical_callees)


def is_translation_call(tree: SyntaxTree, index: int, config: Configuration) -> bool:
    node = tree.node(index)
    if node.kind != NodeKind.CALL:
        return False
    callee = child_with_role(tree, index, "callee")
    if callee is None:
        return False
    return _callee_matches(tree, callee, config.translator_callees)


def tag_name(tree: SyntaxTree, index: int) -> str | None:
    """Name of a tagged template's tag: ``t`...``` or ``t(opts)`...```."""
    node = tree.node(index)
    if node.name:
        return node.name
    tag = child_with_role(tree, index, "tag")
    if tag is None:
        return None
    tag_node = tree.node(tag)
    if tag_node.kind == NodeKind.IDENTIFIER:
        return tag_node.name
    if tag_node.kind == NodeKind.CALL:
        callee = child_with_role(tree, tag, "callee")
        if callee is not None and tree.node(callee).kind == NodeKind.IDENTIFIER:
            return tree.node(callee).name
    return None


class ContainerTags:
    """Per-run side table of translation / technical container marks."""

    def __init__(self, size: int) -> None:
        self._translation = bytearray(size)
        self._technical = bytearray(size)

    def mark_translation(self, index: int) -> None:
        self._translation[index] = 1

    def mark_technical(self, index: int) -> None:
        self._technical[index] = 1

    def inside_translation(self, tree: SyntaxTree, index: int) -> bool:
        return any(self._translation[a] for a in tree.ancestors_of(index))

    def inside_technical(self, tree: SyntaxTree, index: int) -> bool:
        return any(self._technical[a] for a in tree.ancestors_of(index))

    def counts(self) -> tuple[int, int]:
        return sum(self._translation), sum(self._technical)


class ContainerTagger:
    """Recognizes containers as the traversal enters each node."""

    def __init__(self, tree: SyntaxTree, config: Configuration, tags: ContainerTags) -> None:
        self.tree = tree
        self.config = config
        self.tags = tags

    def enter(self, index: int) -> None:
        node = self.tree.node(index)
        if node.kind == NodeKind.CALL:
            if is_translation_call(self.tree, index, self.config):
                self.tags.mark_translation(index)
            if is_technical_call(self.tree, index, self.config):
                self.tags.mark_technical(index)
        elif node.kind == NodeKind.TAGGED_TEMPLATE:
            if tag_name(self.tree, index) in TRANSLATION_TAGS:
                self.tags.mark_translation(index)
        elif node.kind == NodeKind.ELEMENT_OPENING:
            if node.name in TRANSLATION_COMPONENTS:
                parent = self.tree.parent_of(index)
                if parent is not None and self.tree.node(parent).kind == NodeKind.ELEMENT:
                    self.tags.mark_translation(parent)
                else:
                    self.tags.mark_translation(index)
                logger.debug("  Translation wrapper <%s> at node %d", node.name, index)
