"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

pytest.importorskip("tree_sitter_javascript")
pytest.importorskip("tree_sitter_typescript")

from i18nlint import __version__  # noqa: E402
from i18nlint.cli import EXIT_CLEAN, EXIT_CONFIG_ERROR, EXIT_FINDINGS, cli  # noqa: E402
from i18nlint.models.options import CONFIG_FILENAME  # noqa: E402
from i18nlint.utils.cache import get_cache_path  # noqa: E402


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCheckCommand:
    """Tests for `i18nlint check`."""

    def test_findings_exit_code(self, runner: CliRunner, js_project: Path) -> None:
        """Findings exit with 1 and print file:line:col locations."""
        result = runner.invoke(cli, ["check", str(js_project)])
        assert result.exit_code == EXIT_FINDINGS
        assert "src/app.js:1:11" in result.stdout
        assert "2 finding(s) in 3 file(s), 0 error(s)" in result.stdout

    def test_clean_exit_code(self, runner: CliRunner, tmp_path: Path) -> None:
        """A clean tree exits with 0."""
        (tmp_path / "a.ts").write_text('i18n.t("hello");\n')
        result = runner.invoke(cli, ["check", str(tmp_path)])
        assert result.exit_code == EXIT_CLEAN

    def test_json_output(self, runner: CliRunner, js_project: Path) -> None:
        """JSON output is the serialized report."""
        result = runner.invoke(cli, ["check", str(js_project), "--format", "json"])
        data = json.loads(result.stdout)
        assert data["finding_count"] == 2
        assert data["metadata"]["analyzer"] == "i18nlint"
        assert data["files"][0]["findings"][0]["message_id"] == "literal"

    def test_ignore_flags(self, runner: CliRunner, js_project: Path) -> None:
        """--ignore adds value patterns."""
        result = runner.invoke(cli, ["check", str(js_project), "--ignore", "^foo$", "--ignore", "^Hello$"])
        assert result.exit_code == EXIT_CLEAN

    def test_exclude(self, runner: CliRunner, js_project: Path) -> None:
        """--exclude skips matching paths."""
        result = runner.invoke(cli, ["check", str(js_project), "--exclude", "src/view.tsx"])
        assert "view.tsx" not in result.stdout
        assert "1 finding(s) in 2 file(s)" in result.stdout

    def test_config_discovered(self, runner: CliRunner, js_project: Path) -> None:
        """.i18nlintrc.json in the scanned directory is used."""
        (js_project / CONFIG_FILENAME).write_text(json.dumps({"ignore": ["^foo$", "^Hello$"]}))
        result = runner.invoke(cli, ["check", str(js_project)])
        assert result.exit_code == EXIT_CLEAN

    def test_explicit_config(self, runner: CliRunner, js_project: Path, tmp_path_factory) -> None:
        """--config takes an options file from anywhere."""
        config = tmp_path_factory.mktemp("conf") / "options.json"
        config.write_text(json.dumps({"ignore": ["^foo$"]}))
        result = runner.invoke(cli, ["check", str(js_project), "--config", str(config)])
        assert "1 finding(s)" in result.stdout

    def test_invalid_pattern(self, runner: CliRunner, js_project: Path) -> None:
        """A bad pattern exits with 2 and lints nothing."""
        result = runner.invoke(cli, ["check", str(js_project), "--ignore", "("])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "Configuration error" in result.output
        assert not get_cache_path(js_project).exists()

    def test_invalid_config_file(self, runner: CliRunner, js_project: Path) -> None:
        """A malformed options file exits with 2."""
        (js_project / CONFIG_FILENAME).write_text("{not json")
        result = runner.invoke(cli, ["check", str(js_project)])
        assert result.exit_code == EXIT_CONFIG_ERROR

    def test_no_cache(self, runner: CliRunner, js_project: Path) -> None:
        """--no-cache leaves no cache behind."""
        runner.invoke(cli, ["check", str(js_project), "--no-cache"])
        assert not get_cache_path(js_project).exists()
        runner.invoke(cli, ["check", str(js_project)])
        assert get_cache_path(js_project).exists()

    def test_missing_path_rejected(self, runner: CliRunner, tmp_path: Path) -> None:
        """Nonexistent paths are usage errors."""
        result = runner.invoke(cli, ["check", str(tmp_path / "nope")])
        assert result.exit_code == 2

    def test_version(self, runner: CliRunner) -> None:
        """--version prints the package version."""
        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.output
