"""Configuration compiler: raw LintOptions -> immutable, matchable Configuration.

Compilation happens once per run, before any tree is traversed. A single
malformed pattern fails the whole compilation.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from i18nlint.analyzers.constants import (
    BASELINE_ATTRIBUTES,
    NO_LETTERS_PATTERN,
    POPULAR_CALLEES,
    SVG_ATTRIBUTES,
    TRANSLATOR_CALLEES,
)
from i18nlint.errors import ConfigurationError
from i18nlint.logging import logger
from i18nlint.models.options import LintOptions

WILDCARD_TAG = "*"


@dataclass(frozen=True)
class CalleeRules:
    """Callee names split into simple names and qualified ``object.property`` names."""

    simple: frozenset[str]
    qualified: frozenset[str]

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "CalleeRules":
        simple: set[str] = set()
        qualified: set[str] = set()
        for name in names:
            if "." in name:
                qualified.add(name)
            else:
                simple.add(name)
        return cls(frozenset(simple), frozenset(qualified))

    def matches_simple(self, name: str | None) -> bool:
        return name is not None and name in self.simple

    def matches_qualified(self, dotted: str | None) -> bool:
        """Exact ``object.property`` match, or a dotted suffix of a deeper chain.

        ``socket.on`` matches ``socket.on`` and ``this.socket.on`` but not
        ``xsocket.on``.
        """
        if not dotted:
            return False
        if dotted in self.qualified:
            return True
        anchored = "." + dotted
        return any(anchored.endswith("." + rule) for rule in self.qualified)


@dataclass(frozen=True)
class TagAttributeRule:
    """Attributes ignored on a set of tags."""

    tags: frozenset[str]
    attributes: frozenset[str]

    def covers(self, tag: str | None, attribute: str) -> bool:
        if attribute not in self.attributes:
            return False
        return WILDCARD_TAG in self.tags or (tag is not None and tag in self.tags)


@dataclass(frozen=True)
class Configuration:
    """Compiled allow-lists for one lint run."""

    value_patterns: tuple[re.Pattern[str], ...]
    technical_callees: CalleeRules
    translator_callees: CalleeRules
    ignore_properties: frozenset[str]
    ignore_attributes: frozenset[str]
    ignore_tags: tuple[TagAttributeRule, ...]

    def matches_value(self, text: str) -> bool:
        """Whether trimmed literal text matches any value pattern."""
        return any(pattern.search(text) for pattern in self.value_patterns)

    def ignores_attribute(self, tag: str | None, attribute: str | None) -> bool:
        """Whether an attribute (on an optional owner tag) is allow-listed."""
        if attribute is None:
            return False
        if attribute in self.ignore_attributes:
            return True
        return any(rule.covers(tag, attribute) for rule in self.ignore_tags)


def _compile_patterns(patterns: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    compiled = [re.compile(NO_LETTERS_PATTERN)]
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigurationError(f"Invalid ignore pattern {pattern!r}: {e}") from e
    return tuple(compiled)


def coerce_options(options: LintOptions | Mapping[str, Any] | None) -> LintOptions:
    """Validate a raw options mapping (None means defaults).

    Raises:
        ConfigurationError: If the mapping does not match the options schema.
    """
    if options is None:
        return LintOptions()
    if isinstance(options, LintOptions):
        return options
    try:
        return LintOptions.model_validate(options)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid options: {e}") from e


def compile_configuration(
    options: LintOptions | Mapping[str, Any] | None = None,
) -> Configuration:
    """Compile raw options into a Configuration.

    Args:
        options: Validated LintOptions, a raw mapping with the same keys, or
            None for defaults only.

    Returns:
        Immutable Configuration with baseline entries merged in.

    Raises:
        ConfigurationError: If a pattern is not a valid regular expression or
            the mapping does not match the options schema.
    """
    options = coerce_options(options)

    config = Configuration(
        value_patterns=_compile_patterns(options.ignore),
        technical_callees=CalleeRules.from_names([*POPULAR_CALLEES, *options.ignore_callee]),
        translator_callees=CalleeRules.from_names(
            [*TRANSLATOR_CALLEES, *options.ignore_translator_callee]
        ),
        ignore_properties=frozenset(options.ignore_properties),
        ignore_attributes=frozenset(
            [*BASELINE_ATTRIBUTES, *SVG_ATTRIBUTES, *options.ignore_attributes]
        ),
        ignore_tags=tuple(
            TagAttributeRule(frozenset(rule.tags), frozenset(rule.attributes))
            for rule in options.ignore_tags
        ),
    )
    logger.debug(
        "  Compiled configuration: %d patterns, %d callees, %d attributes",
        len(config.value_patterns),
        len(config.technical_callees.simple) + len(config.technical_callees.qualified),
        len(config.ignore_attributes),
    )
    return config
