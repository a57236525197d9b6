"""Raw lint options record, validated at the configuration boundary.

Field names follow the camelCase keys used in ``.i18nlintrc.json`` files;
snake_case names are accepted too.
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from i18nlint.errors import ConfigurationError

CONFIG_FILENAME = ".i18nlintrc.json"


class TagRule(BaseModel):
    """Attributes to ignore on specific markup tags (``*`` matches any tag)."""

    tag: str | list[str] = Field(description="Tag name, list of tag names, or '*'")
    attributes: list[str] = Field(default_factory=list, description="Attribute names to ignore")

    model_config = {"extra": "forbid"}

    @property
    def tags(self) -> list[str]:
        return [self.tag] if isinstance(self.tag, str) else list(self.tag)


class LintOptions(BaseModel):
    """User-supplied allow-lists for the literal string classifier."""

    ignore: list[str] = Field(
        default_factory=list, description="Regular expressions matched against trimmed literal text"
    )
    ignore_callee: list[str] = Field(
        default_factory=list,
        alias="ignoreCallee",
        description="Callee names whose arguments are technical (dotted names allowed)",
    )
    ignore_translator_callee: list[str] = Field(
        default_factory=list,
        alias="ignoreTranslatorCallee",
        description="Extra translation function names (dotted names allowed)",
    )
    ignore_properties: list[str] = Field(
        default_factory=list, alias="ignoreProperties", description="Object property keys to ignore"
    )
    ignore_attributes: list[str] = Field(
        default_factory=list, alias="ignoreAttributes", description="Markup attribute names to ignore"
    )
    ignore_tags: list[TagRule] = Field(
        default_factory=list, alias="ignoreTags", description="Tag + attribute pairs to ignore"
    )

    model_config = {"populate_by_name": True, "extra": "forbid", "frozen": True}

    @field_validator("ignore_callee", "ignore_translator_callee")
    @classmethod
    def _strip_names(cls, names: list[str]) -> list[str]:
        return [n.strip() for n in names if n.strip()]

    def merged(self, **extra: list[str]) -> "LintOptions":
        """Return a copy with list fields extended (e.g. by CLI flags)."""
        data = self.model_dump()
        for key, values in extra.items():
            if values:
                data[key] = [*data[key], *values]
        return LintOptions.model_validate(data)


def load_options(path: Path) -> LintOptions:
    """Load and validate a JSON options file.

    Raises:
        ConfigurationError: If the file cannot be read, is not JSON, or
            does not match the options schema.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    try:
        return LintOptions.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid options in {path}: {e}") from e


def find_config(root: Path) -> Path | None:
    """Locate ``.i18nlintrc.json`` at a scan root, if present."""
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None
