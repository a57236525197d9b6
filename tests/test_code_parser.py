"""Tests for the tree-sitter front end and source-level linting."""

import pytest

pytest.importorskip("tree_sitter_javascript")
pytest.importorskip("tree_sitter_typescript")

from i18nlint.analyzers import lint_source  # noqa: E402
from i18nlint.analyzers.code_parser import language_for_path, parse_file, parse_source  # noqa: E402
from i18nlint.analyzers.code_parser.base import _extract_string_value  # noqa: E402
from i18nlint.errors import UnsupportedSourceError  # noqa: E402
from i18nlint.syntax import NodeKind, SyntaxNode, SyntaxTree  # noqa: E402


def _nodes(root: SyntaxNode, kind: NodeKind) -> list[SyntaxNode]:
    tree = SyntaxTree(root)
    return [tree.node(i) for i in range(len(tree)) if tree.node(i).kind == kind]


class TestLanguageDetection:
    """Tests for extension mapping."""

    @pytest.mark.parametrize(
        ("name", "language"),
        [
            ("app.js", "javascript"),
            ("App.JSX", "javascript"),
            ("lib.mjs", "javascript"),
            ("index.ts", "typescript"),
            ("mod.cts", "typescript"),
            ("View.tsx", "tsx"),
            ("style.css", None),
            ("Makefile", None),
        ],
    )
    def test_language_for_path(self, name: str, language: str | None) -> None:
        """Languages are chosen by extension, case-insensitively."""
        assert language_for_path(name) == language


class TestStringValues:
    """Tests for quote stripping and escape decoding."""

    def test_simple_escapes(self) -> None:
        """Common escapes are decoded."""
        assert _extract_string_value(r'"a\nb\tc"') == "a\nb\tc"

    def test_unicode_escapes(self) -> None:
        """\\u, \\u{} and \\x escapes are decoded."""
        assert _extract_string_value(r"'A\u{1F600}\x42'") == "A\U0001f600B"

    def test_escaped_quote(self) -> None:
        """Escaped quotes lose their backslash."""
        assert _extract_string_value(r"'it\'s'") == "it's"

    def test_raw(self) -> None:
        """Decoding can be disabled."""
        assert _extract_string_value(r'"a\nb"', decode_escapes=False) == r"a\nb"

    @pytest.mark.parametrize("escape", [r"\u{110000}", r"\u{FFFFFFFFFFFF}"])
    def test_out_of_range_code_point_kept(self, escape: str) -> None:
        """Code points past U+10FFFF stay as written."""
        assert _extract_string_value(f"'a{escape}b'") == f"a{escape}b"


class TestConversion:
    """Tests for the shape of converted trees."""

    def test_variable_binding(self) -> None:
        """Declarators become bindings with a named literal value."""
        root = parse_source("const a = 'x';", "javascript")
        binding = _nodes(root, NodeKind.VARIABLE_BINDING)[0]
        assert binding.name == "a"
        value = binding.child("value")
        assert value.kind == NodeKind.LITERAL
        assert value.value == "x"

    def test_span(self) -> None:
        """Spans use 1-based lines and 0-based columns."""
        root = parse_source('let b;\nconst a = "foo";', "javascript")
        literal = _nodes(root, NodeKind.LITERAL)[0]
        assert literal.span.start_line == 2
        assert literal.span.start_column == 10

    def test_parentheses_unwrapped(self) -> None:
        """Parenthesized expressions are replaced by their content."""
        root = parse_source('const a = ("foo");', "javascript")
        binding = _nodes(root, NodeKind.VARIABLE_BINDING)[0]
        assert binding.child("value").kind == NodeKind.LITERAL

    def test_template(self) -> None:
        """Template literals keep their raw body and hole expressions."""
        root = parse_source("const a = `hi ${name}`;", "javascript")
        literal = _nodes(root, NodeKind.TEMPLATE_LITERAL)[0]
        assert literal.value == "hi ${name}"
        assert literal.has_interpolation
        assert literal.child("expression").name == "name"

    def test_tagged_template(self) -> None:
        """Tagged templates record their tag name."""
        root = parse_source("t`Hello`;", "javascript")
        node = _nodes(root, NodeKind.TAGGED_TEMPLATE)[0]
        assert node.name == "t"
        assert node.child("quasi").kind == NodeKind.TEMPLATE_LITERAL

    def test_call(self) -> None:
        """Calls have a callee and flattened arguments."""
        root = parse_source('a.b("x", 1);', "javascript")
        node = _nodes(root, NodeKind.CALL)[0]
        assert node.child("callee").kind == NodeKind.MEMBER_ACCESS
        assert node.child("callee").name == "b"
        assert [c.role for c in node.children] == ["callee", "argument", "argument"]

    def test_dynamic_import(self) -> None:
        """import() calls are import-like."""
        root = parse_source('import("./page");', "javascript")
        assert _nodes(root, NodeKind.CALL)[0].is_import_like

    def test_export_from(self) -> None:
        """Re-exports with a source are import-like."""
        root = parse_source('export * from "./all";', "javascript")
        assert _nodes(root, NodeKind.IMPORT_LIKE)

    def test_self_closing_element(self) -> None:
        """Self-closing elements get an opening tag holding the attributes."""
        root = parse_source('const x = <Trans i18nKey="k" />;', "javascript")
        element = _nodes(root, NodeKind.ELEMENT)[0]
        assert element.name == "Trans"
        opening = element.child("opening")
        assert opening.kind == NodeKind.ELEMENT_OPENING
        attribute = _nodes(root, NodeKind.ATTRIBUTE)[0]
        assert attribute.name == "i18nKey"
        assert attribute.child("value").value == "k"

    def test_attribute_string_not_decoded(self) -> None:
        """Markup attribute strings keep backslashes."""
        root = parse_source('const x = <div title="a\\nb" />;', "javascript")
        assert _nodes(root, NodeKind.ATTRIBUTE)[0].child("value").value == "a\\nb"

    def test_text(self) -> None:
        """Markup text becomes Text nodes."""
        root = parse_source("const x = <div>Hello</div>;", "javascript")
        assert [n.value for n in _nodes(root, NodeKind.TEXT)] == ["Hello"]

    def test_number(self) -> None:
        """Numbers are non-string literals."""
        root = parse_source("const a = 0x10;", "javascript")
        assert _nodes(root, NodeKind.LITERAL)[0].value == 16

    def test_declared_literal_type(self) -> None:
        """TypeScript annotations are attached to bindings."""
        root = parse_source("var a: 'abc' | 'name' = 'abc';", "typescript")
        declared = _nodes(root, NodeKind.VARIABLE_BINDING)[0].declared_type
        assert declared.kind == "union"
        assert declared.string_literals() == {"abc", "name"}

    def test_alias_resolved(self) -> None:
        """Local type aliases are resolved."""
        root = parse_source("type T = {name: 'b'};\nvar a: T = {name: 'b'};", "typescript")
        declared = _nodes(root, NodeKind.VARIABLE_BINDING)[0].declared_type
        assert declared.kind == "object"
        assert declared.properties["name"].literal == "b"

    def test_types_disabled(self) -> None:
        """use_types=False attaches nothing."""
        root = parse_source("var a: 'abc' = 'abc';", "typescript", use_types=False)
        assert _nodes(root, NodeKind.VARIABLE_BINDING)[0].declared_type is None

    def test_unknown_language(self) -> None:
        """Unknown languages are rejected."""
        with pytest.raises(UnsupportedSourceError):
            parse_source("x = 1", "python")

    def test_parse_file(self, tmp_path) -> None:
        """Files are parsed by extension."""
        path = tmp_path / "a.tsx"
        path.write_text("const x = <b>Hi</b>;")
        root, language = parse_file(path)
        assert language == "tsx"
        assert _nodes(root, NodeKind.TEXT)

    def test_parse_file_unknown_extension(self, tmp_path) -> None:
        """Unknown extensions are rejected."""
        path = tmp_path / "a.vue"
        path.write_text("<template></template>")
        with pytest.raises(UnsupportedSourceError):
            parse_file(path)


VALID_JAVASCRIPT = [
    'import("hello");',
    "name === 'Android' || name === 'iOS';",
    "switch(a){ case 'a': break; default: break;}",
    'a.indexOf("ios");',
    'import name from "hello";',
    'export * from "hello_export_all";',
    'export { a } from "hello_export";',
    'document.addEventListener("click", (event) => { event.preventDefault(); });',
    'const a = require(["hello"]);',
    'const a = require(["hel" + "lo"]);',
    'i18n("hello");',
    'store.dispatch("hello");',
    'store.commit("hello");',
    'i18n.t("hello");',
    'const a = "FOO";',
    'var A_B = "world";',
    'var a = {A_B: "hello world"};',
    'var a = {["A_B"]: "hello world"};',
    'var a = {foo: "FOO"};',
    'const a = "";',
    'const a = "  ";',
    'const a = "123";',
    '<div className="primary"></div>',
    '<div className={a ? "active" : "inactive"}></div>',
    '<div>{i18next.t("foo")}</div>',
    '<svg viewBox="0 0 20 40"></svg>',
    '<circle cx="10" cy="10" r="2" fill="red" />',
    "<Trans>Hello <b>World</b></Trans>",
    "t`Hello`;",
]

INVALID_JAVASCRIPT = [
    'a + "b";',
    "switch(a){ case 'a': var a ='b'; break; default: break;}",
    'export const a = "hello_string";',
    'const a = "foo";',
    'const a = call("Ffo");',
    'var a = {foo: "bar"};',
    "<div>foo</div>",
    '<img alt="A picture" />',
    "t(`hello ${name}`);",
]

VALID_TYPESCRIPT = [
    "var a: Element['nodeName'];",
    "var a: Omit<T, 'af'>;",
    "var a: 'abc' = 'abc';",
    "var a: 'abc' | 'name' | undefined = 'abc';",
    "type T = {name: 'b'}; var a: T = {name: 'b'};",
    "function Button({ t = 'name' }: {t: 'name'}) {}",
    "type T = {t?: 'name' | 'abc'}; function Button({ t = 'name' }: T) {}",
    "enum DialogKind { Closed = 'Closed', New = 'New value' }",
    "declare module 'i18next-pseudo' {}",
    'var a = "test" as string;',
    "interface Props { label: 'primary' | 'secondary' }",
]

INVALID_TYPESCRIPT = [
    "function Button({ t = 'name' }: {t: 'name' & 'abc'}) {}",
    "function Button({ t = 'name' }: {t: 1 | 'abc'}) {}",
    "var a: {type: string} = {type: 'bb'};",
    "var a: string = 'abc';",
]


class TestLintSource:
    """Source-level verdicts for common JavaScript and TypeScript code."""

    @pytest.mark.parametrize("source", VALID_JAVASCRIPT)
    def test_valid_javascript(self, source: str) -> None:
        """No findings."""
        assert lint_source(source, "javascript") == []

    @pytest.mark.parametrize("source", INVALID_JAVASCRIPT)
    def test_invalid_javascript(self, source: str) -> None:
        """Exactly one finding."""
        assert len(lint_source(source, "javascript")) == 1

    @pytest.mark.parametrize("source", VALID_TYPESCRIPT)
    def test_valid_typescript(self, source: str) -> None:
        """No findings."""
        assert lint_source(source, "typescript") == []

    @pytest.mark.parametrize("source", INVALID_TYPESCRIPT)
    def test_invalid_typescript(self, source: str) -> None:
        """Exactly one finding."""
        assert len(lint_source(source, "typescript")) == 1

    def test_tsx_text(self) -> None:
        """Markup text in TSX is reported."""
        findings = lint_source("const b = <button className={styles.btn}>loading</button>;", "tsx")
        assert [f.message for f in findings] == ["Forbidden text content loading"]

    def test_types_disabled_reports(self) -> None:
        """Without types, annotated literals are reported."""
        assert len(lint_source("var a: 'abc' = 'abc';", "typescript", use_types=False)) == 1

    def test_ignore_pattern(self) -> None:
        """Patterns match anywhere in the text."""
        assert lint_source('const a = "absfoo";', "javascript", {"ignore": ["foo"]}) == []
        assert len(lint_source('const a = "afoo";', "javascript", {"ignore": ["^foo"]})) == 1

    def test_finding_position(self) -> None:
        """Findings point at the literal."""
        finding = lint_source('const a = "foo";', "javascript")[0]
        assert (finding.position.start_line, finding.position.start_column) == (1, 10)
        assert finding.message == 'Forbidden literal string "foo" in a = "foo".'

    def test_syntax_error_tolerated(self) -> None:
        """Broken sources are linted as far as they parse."""
        findings = lint_source('const a = "foo";\nconst = ;', "javascript")
        assert any(f.data.get("string") == '"foo"' for f in findings)

    def test_out_of_range_escape_reported(self) -> None:
        """A literal with an unrepresentable escape is still linted."""
        findings = lint_source('const a = "\\u{110000}";', "javascript")
        assert [f.data["string"] for f in findings] == ['"\\u{110000}"']


class TestDeepNesting:
    """Sources nested far beyond the interpreter's recursion limit."""

    DEPTH = 1500

    def test_long_concatenation(self) -> None:
        """A left-nested + chain is converted and linted."""
        source = "const a = " + " + ".join(["x"] * self.DEPTH) + ' + "hello";'
        findings = lint_source(source, "javascript")
        assert [f.data["string"] for f in findings] == ['"hello"']

    def test_long_concatenation_typescript(self) -> None:
        """The typed path handles the same depth."""
        source = "const a: string = " + " + ".join(["x"] * self.DEPTH) + ' + "hello";'
        assert len(lint_source(source, "typescript")) == 1

    def test_nested_elements(self) -> None:
        """Deeply nested markup keeps element names and child order."""
        source = "const v = " + "<div>" * self.DEPTH + "deep" + "</div>" * self.DEPTH + ";"
        root = parse_source(source, "javascript")
        elements = _nodes(root, NodeKind.ELEMENT)
        assert len(elements) == self.DEPTH
        assert all(e.name == "div" for e in elements)
        assert [c.kind for c in elements[-1].children] == [NodeKind.ELEMENT_OPENING, NodeKind.TEXT]
        findings = lint_source(source, "javascript")
        assert [f.message for f in findings] == ["Forbidden text content deep"]
