"""Tests for lint options and the configuration compiler."""

import json
from pathlib import Path

import pytest

from i18nlint.analyzers.config import CalleeRules, coerce_options, compile_configuration
from i18nlint.analyzers.constants import is_upper_case
from i18nlint.errors import ConfigurationError
from i18nlint.models.options import CONFIG_FILENAME, LintOptions, find_config, load_options


class TestLintOptions:
    """Tests for the raw options model."""

    def test_defaults_empty(self) -> None:
        """Every list defaults to empty."""
        options = LintOptions()
        assert options.ignore == []
        assert options.ignore_tags == []

    def test_camel_case_keys(self) -> None:
        """Options files use camelCase keys."""
        options = LintOptions.model_validate({"ignoreCallee": ["track"], "ignoreProperties": ["key"]})
        assert options.ignore_callee == ["track"]
        assert options.ignore_properties == ["key"]

    def test_snake_case_keys(self) -> None:
        """snake_case names are accepted too."""
        options = LintOptions(ignore_attributes=["title"])
        assert options.ignore_attributes == ["title"]

    def test_callee_names_stripped(self) -> None:
        """Blank callee names are dropped and names are stripped."""
        options = LintOptions.model_validate({"ignoreCallee": [" track ", "  "]})
        assert options.ignore_callee == ["track"]

    def test_tag_rule_single_or_list(self) -> None:
        """A tag rule accepts one tag or a list of tags."""
        options = LintOptions.model_validate(
            {"ignoreTags": [{"tag": "a", "attributes": ["href"]}, {"tag": ["img", "video"]}]}
        )
        assert options.ignore_tags[0].tags == ["a"]
        assert options.ignore_tags[1].tags == ["img", "video"]

    def test_merged_extends_lists(self) -> None:
        """merged() appends values and leaves the original untouched."""
        options = LintOptions(ignore=["^a"])
        merged = options.merged(ignore=["^b"], ignore_callee=[])
        assert merged.ignore == ["^a", "^b"]
        assert options.ignore == ["^a"]


class TestLoadOptions:
    """Tests for reading options files."""

    def test_load_valid(self, tmp_path: Path) -> None:
        """A valid file is loaded."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text(json.dumps({"ignore": ["^foo"], "ignoreAttributes": ["title"]}))
        options = load_options(path)
        assert options.ignore == ["^foo"]
        assert options.ignore_attributes == ["title"]

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Broken JSON is a configuration error."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text("{ignore: ")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_options(path)

    def test_wrong_shape(self, tmp_path: Path) -> None:
        """Values of the wrong type are configuration errors."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text(json.dumps({"ignore": "^foo"}))
        with pytest.raises(ConfigurationError, match="Invalid options"):
            load_options(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """An unreadable file is a configuration error."""
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_options(tmp_path / "missing.json")

    def test_find_config(self, tmp_path: Path) -> None:
        """find_config only finds the options file at the given root."""
        assert find_config(tmp_path) is None
        (tmp_path / CONFIG_FILENAME).write_text("{}")
        assert find_config(tmp_path) == tmp_path / CONFIG_FILENAME


class TestCompileConfiguration:
    """Tests for compile_configuration."""

    def test_defaults(self) -> None:
        """Baseline allow-lists are always present."""
        config = compile_configuration()
        assert config.matches_value("123 - !")
        assert not config.matches_value("Hello")
        assert config.technical_callees.matches_simple("addEventListener")
        assert config.translator_callees.matches_qualified("i18next.t")
        assert config.ignores_attribute("div", "className")
        assert config.ignores_attribute("path", "d")

    def test_user_entries_extend_baseline(self) -> None:
        """User options add to the baseline without replacing it."""
        config = compile_configuration({"ignoreAttributes": ["title"], "ignoreCallee": ["track"]})
        assert config.ignores_attribute(None, "title")
        assert config.ignores_attribute(None, "className")
        assert config.technical_callees.matches_simple("track")
        assert config.technical_callees.matches_simple("dispatch")

    def test_patterns_search_anywhere(self) -> None:
        """Patterns are searched, not anchored."""
        config = compile_configuration({"ignore": ["foo"]})
        assert config.matches_value("absfoo")

    def test_invalid_pattern(self) -> None:
        """One bad pattern fails the whole compilation."""
        with pytest.raises(ConfigurationError, match="Invalid ignore pattern"):
            compile_configuration({"ignore": ["^ok", "[unclosed"]})

    def test_tag_rules(self) -> None:
        """Tag rules apply to their tags only; '*' applies to all."""
        config = compile_configuration(
            {"ignoreTags": [{"tag": "a", "attributes": ["href"]}, {"tag": "*", "attributes": ["alt"]}]}
        )
        assert config.ignores_attribute("a", "href")
        assert not config.ignores_attribute("img", "href")
        assert not config.ignores_attribute(None, "href")
        assert config.ignores_attribute("img", "alt")

    def test_coerce_passthrough(self) -> None:
        """Validated options pass through coerce_options unchanged."""
        options = LintOptions(ignore=["x"])
        assert coerce_options(options) is options
        assert coerce_options(None) == LintOptions()


class TestCalleeRules:
    """Tests for simple and qualified callee matching."""

    def test_split(self) -> None:
        """Dotted names are qualified, others simple."""
        rules = CalleeRules.from_names(["t", "socket.on"])
        assert rules.simple == frozenset({"t"})
        assert rules.qualified == frozenset({"socket.on"})

    def test_qualified_suffix(self) -> None:
        """Qualified rules match exactly or as a dot-anchored suffix."""
        rules = CalleeRules.from_names(["socket.on"])
        assert rules.matches_qualified("socket.on")
        assert rules.matches_qualified("this.socket.on")
        assert not rules.matches_qualified("xsocket.on")
        assert not rules.matches_qualified(None)


class TestUpperCase:
    """Tests for the constant naming convention."""

    @pytest.mark.parametrize("value", ["FOO", "A_B", "HTTP-2", "V2", "123"])
    def test_upper(self, value: str) -> None:
        """Uppercase letters, digits, '_' and '-' only."""
        assert is_upper_case(value)

    @pytest.mark.parametrize("value", ["", "Foo", "FOO BAR", "a_b"])
    def test_not_upper(self, value: str) -> None:
        """Anything else, including empty text, is not uppercase."""
        assert not is_upper_case(value)
