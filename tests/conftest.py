"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from i18nlint.analyzers import lint_tree
from i18nlint.models.findings import Finding
from i18nlint.syntax import SyntaxNode
from i18nlint.syntax.build import program


@pytest.fixture
def lint():
    """Lint builder statements wrapped in a program; returns findings."""

    def _lint(*body: SyntaxNode, options=None, oracle=None) -> list[Finding]:
        return lint_tree(program(*body), options, oracle=oracle)

    return _lint


@pytest.fixture
def js_project(tmp_path: Path) -> Path:
    """Create a small JS/TS project with one violation per source file."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.js").write_text('const a = "foo";\nimport x from "hello";\n')
    (tmp_path / "src" / "view.tsx").write_text(
        "export const View = () => <div className=\"box\">Hello</div>;\n"
    )
    (tmp_path / "src" / "clean.ts").write_text('const A_B = "world";\ni18n.t("hello");\n')
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib" / "index.js").write_text('const b = "vendored";\n')
    (tmp_path / "README.md").write_text("# not linted\n")
    return tmp_path
