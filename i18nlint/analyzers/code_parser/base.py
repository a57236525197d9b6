"""Tree-sitter language loading and node helpers.

Provides the foundational pieces shared by the JavaScript/TypeScript front end.
"""

import re
import sys

from tree_sitter import Language, Node, Parser

from i18nlint.syntax.nodes import SourceSpan

# Lazy imports for tree-sitter language bindings
_LANGUAGES: dict[str, Language] = {}


def _get_language(name: str) -> Language | None:
    """Lazily load tree-sitter language bindings."""
    if name in _LANGUAGES:
        return _LANGUAGES[name]

    try:
        if name == "typescript":
            import tree_sitter_typescript as ts_typescript

            _LANGUAGES[name] = Language(ts_typescript.language_typescript())
        elif name == "tsx":
            import tree_sitter_typescript as ts_typescript

            _LANGUAGES[name] = Language(ts_typescript.language_tsx())
        elif name == "javascript":
            import tree_sitter_javascript as ts_javascript

            _LANGUAGES[name] = Language(ts_javascript.language())
        else:
            return None
    except ImportError:
        return None

    return _LANGUAGES.get(name)


def get_parser(language: str) -> Parser | None:
    """Create a parser for a language, or None if its binding is unavailable."""
    ts_language = _get_language(language)
    if ts_language is None:
        return None
    return Parser(ts_language)


# File extension to language mapping
EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}

LANGUAGES = frozenset(EXTENSION_TO_LANGUAGE.values())


def language_for_path(path: str) -> str | None:
    """Front-end language for a file name, by extension."""
    dot = path.rfind(".")
    if dot < 0:
        return None
    return EXTENSION_TO_LANGUAGE.get(path[dot:].lower())


# =============================================================================
# Tree-sitter Helper Functions
# =============================================================================


def _find_nodes(node: Node, types: set[str] | frozenset[str]) -> list[Node]:
    """Find all nodes of given types (pre-order)."""
    results = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type in types:
            results.append(current)
        stack.extend(reversed(current.children))
    return results


def _get_child_by_field(node: Node, field_name: str) -> Node | None:
    """Get child by field name."""
    return node.child_by_field_name(field_name)


def _named_children_with_fields(node: Node) -> list[tuple[Node, str | None]]:
    """Named children paired with the grammar field each occupies."""
    result: list[tuple[Node, str | None]] = []
    cursor = node.walk()
    if not cursor.goto_first_child():
        return result
    while True:
        child = cursor.node
        if child is not None and child.is_named:
            result.append((child, cursor.field_name))
        if not cursor.goto_next_sibling():
            break
    return result


def _node_text(node: Node) -> str:
    return node.text.decode(errors="replace") if node.text is not None else ""


def _node_span(node: Node) -> SourceSpan:
    """Span with 1-based lines (tree-sitter rows are 0-based)."""
    return SourceSpan(
        start_line=node.start_point[0] + 1,
        start_column=node.start_point[1],
        end_line=node.end_point[0] + 1,
        end_column=node.end_point[1],
    )


# Escape sequences of JS string and template literals.
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\n": "",
    "\r": "",
    "\r\n": "",
    "\u2028": "",
    "\u2029": "",
}


def _unescape_match(match: re.Match[str]) -> str:
    seq = match.group(1)
    if seq in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[seq]
    if seq.startswith(("u", "x")) and len(seq) > 1:
        digits = seq[2:-1] if seq.startswith("u{") else seq[1:]
        code_point = int(digits, 16)
        # Out-of-range \u{...} escapes are kept as written
        if code_point > sys.maxunicode:
            return match.group(0)
        return chr(code_point)
    return seq


def _extract_string_value(text: str, decode_escapes: bool = True) -> str:
    """Strip quotes from a string literal and (optionally) decode its escapes."""
    if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
        text = text[1:-1]
    if not decode_escapes:
        return text
    return _ESCAPE_RE.sub(_unescape_match, text)
