"""Syntax model consumed by the classifier: node records and the ancestry arena."""

from i18nlint.syntax.nodes import (
    LITERAL_KINDS,
    DeclaredType,
    NodeKind,
    SourceSpan,
    SyntaxNode,
)
from i18nlint.syntax.tree import Event, SyntaxTree

__all__ = [
    "LITERAL_KINDS",
    "DeclaredType",
    "Event",
    "NodeKind",
    "SourceSpan",
    "SyntaxNode",
    "SyntaxTree",
]
