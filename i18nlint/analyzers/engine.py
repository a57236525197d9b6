"""Single-pass lint engine over a SyntaxTree.

Containers are tagged when a node is entered; literal verdicts are taken when
a node is exited, so every container above (and every earlier sibling) has
already been seen.
"""

from collections.abc import Mapping
from typing import Any

from i18nlint.analyzers.classifier import ClassificationState, ExemptionClassifier
from i18nlint.analyzers.config import Configuration, compile_configuration
from i18nlint.analyzers.containers import ContainerTagger, ContainerTags
from i18nlint.analyzers.emitter import DiagnosticEmitter
from i18nlint.analyzers.type_oracle import TypeNarrowingAdapter, TypeOracle
from i18nlint.logging import logger
from i18nlint.models.findings import Finding
from i18nlint.models.options import LintOptions
from i18nlint.syntax.nodes import LITERAL_KINDS, SyntaxNode
from i18nlint.syntax.tree import Event, SyntaxTree

# Raised by a node whose shape does not match its kind; the node is skipped.
NODE_ERRORS = (AttributeError, TypeError, ValueError, KeyError, IndexError)


def run(
    tree: SyntaxTree,
    config: Configuration,
    oracle: TypeOracle | None = None,
) -> list[Finding]:
    """Classify every literal-bearing node of a tree.

    Args:
        tree: Indexed tree to traverse.
        config: Compiled configuration.
        oracle: Optional type oracle used for literal-type narrowing.

    Returns:
        Findings in traversal (node-exit) order.
    """
    tags = ContainerTags(len(tree))
    state = ClassificationState(len(tree))
    tagger = ContainerTagger(tree, config, tags)
    classifier = ExemptionClassifier(tree, config, tags, state, TypeNarrowingAdapter(oracle))
    emitter = DiagnosticEmitter()
    skipped = 0

    for event, index in tree.walk():
        node = tree.node(index)
        try:
            if event is Event.ENTER:
                tagger.enter(index)
                continue
            if node.kind not in LITERAL_KINDS:
                continue
            complaint = classifier.resolve(index)
            if complaint is not None:
                emitter.emit(node, complaint)
        except NODE_ERRORS as e:
            skipped += 1
            logger.debug("  Skipping malformed %s node %d: %s", node.kind, index, e)

    translation, technical = tags.counts()
    logger.debug(
        "  Linted %d nodes: %d findings, %d translation / %d technical containers, %d skipped",
        len(tree),
        len(emitter.findings),
        translation,
        technical,
        skipped,
    )
    return emitter.findings


def lint_tree(
    tree: SyntaxNode | SyntaxTree,
    options: LintOptions | Mapping[str, Any] | Configuration | None = None,
    oracle: TypeOracle | None = None,
) -> list[Finding]:
    """Lint an already-built syntax tree.

    The configuration is compiled before traversal starts, so a malformed
    pattern fails the call without producing partial findings.

    Args:
        tree: Root SyntaxNode or an existing SyntaxTree.
        options: LintOptions, a raw options mapping, a precompiled
            Configuration, or None for defaults.
        oracle: Optional type oracle.

    Returns:
        Ordered findings; empty for a clean tree.

    Raises:
        ConfigurationError: If the options cannot be compiled.
    """
    config = options if isinstance(options, Configuration) else compile_configuration(options)
    if isinstance(tree, SyntaxNode):
        tree = SyntaxTree(tree)
    return run(tree, config, oracle)
