"""Source front end: parses JavaScript/TypeScript with tree-sitter.

Produces SyntaxNode trees for the classifier. Declared TypeScript types are
attached to variable bindings so the annotation type oracle can narrow
literal types without a full type checker.
"""

from pathlib import Path

from i18nlint.analyzers.code_parser.base import (
    EXTENSION_TO_LANGUAGE,
    LANGUAGES,
    _get_language,
    get_parser,
    language_for_path,
)
from i18nlint.analyzers.code_parser.typescript import TreeConverter, convert_tree
from i18nlint.errors import UnsupportedSourceError
from i18nlint.logging import logger
from i18nlint.syntax.nodes import SyntaxNode

TYPED_LANGUAGES = frozenset({"typescript", "tsx"})


def parse_source(source: str | bytes, language: str, use_types: bool = True) -> SyntaxNode:
    """Parse source text into a SyntaxNode tree.

    Args:
        source: Program text (str is encoded as UTF-8).
        language: One of ``javascript``, ``typescript`` or ``tsx``.
        use_types: Attach declared types to bindings (TypeScript only).

    Returns:
        Root SyntaxNode of the program.

    Raises:
        UnsupportedSourceError: If the language is unknown or its
            tree-sitter binding is not installed.
    """
    if language not in LANGUAGES:
        raise UnsupportedSourceError(f"Unknown language: {language}")
    parser = get_parser(language)
    if parser is None:
        raise UnsupportedSourceError(f"tree-sitter binding not available: {language}")

    data = source.encode("utf-8") if isinstance(source, str) else source
    tree = parser.parse(data)
    if tree.root_node.has_error:
        logger.debug("  Syntax errors in %s source; linting the recovered tree", language)
    return convert_tree(tree.root_node, typed=use_types and language in TYPED_LANGUAGES)


def parse_file(filepath: Path, language: str | None = None, use_types: bool = True) -> tuple[SyntaxNode, str]:
    """Parse a source file.

    Args:
        filepath: File to parse.
        language: Language override (detected from the extension if None).
        use_types: Attach declared types to bindings (TypeScript only).

    Returns:
        Tuple of (root SyntaxNode, language used).

    Raises:
        UnsupportedSourceError: If the language cannot be determined or loaded.
        OSError: If the file cannot be read.
    """
    if language is None:
        language = language_for_path(filepath.name)
        if language is None:
            raise UnsupportedSourceError(f"Unknown extension: {filepath.suffix}")
    return parse_source(filepath.read_bytes(), language, use_types=use_types), language


__all__ = [
    "EXTENSION_TO_LANGUAGE",
    "LANGUAGES",
    "TYPED_LANGUAGES",
    "TreeConverter",
    "_get_language",
    "convert_tree",
    "get_parser",
    "language_for_path",
    "parse_file",
    "parse_source",
]
