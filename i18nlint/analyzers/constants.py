"""Baseline allow-lists shared by the configuration compiler and classifier.

These are always active; user options can only extend them.
"""

import re

# Constant-table naming convention: FOO, A_B, HTTP-2, V2
UPPERCASE_RE = re.compile(r"^[A-Z0-9_-]+$")

# Text without a single letter (in any script): punctuation, digits, spaces.
NO_LETTERS_PATTERN = r"^[\W\d_]*$"

# Native interpolation hole inside a template literal.
TEMPLATE_HOLE_RE = re.compile(r"\$\{[^}]+\}")

# Calls whose string arguments are never user-facing.
POPULAR_CALLEES: tuple[str, ...] = (
    "addEventListener",
    # store dispatch (vuex / redux style)
    "dispatch",
    "commit",
    # membership tests
    "includes",
    "indexOf",
)

# Module inclusion primitives.
MODULE_CALLEES = frozenset({"require"})

TRANSLATOR_CALLEES: tuple[str, ...] = ("i18n", "i18next", "t", "T", "i18n.t", "i18next.t")

# Tagged templates such as t`Hello` or T()`Hello`
TRANSLATION_TAGS = frozenset({"t", "T"})

# Wrapper components whose whole element subtree is translated.
TRANSLATION_COMPONENTS = frozenset({"Trans", "Translation"})

# Markup attributes that never carry display text.
BASELINE_ATTRIBUTES: tuple[str, ...] = (
    "className",
    "class",
    "styleName",
    "style",
    "id",
    "key",
    "type",
    "src",
    "srcSet",
    "width",
    "height",
    "htmlFor",
    "data-testid",
)

# Vector-graphics presentation and geometry attributes.
SVG_ATTRIBUTES: tuple[str, ...] = (
    "viewBox",
    "xmlns",
    "version",
    "preserveAspectRatio",
    "d",
    "points",
    "transform",
    "x",
    "y",
    "x1",
    "y1",
    "x2",
    "y2",
    "cx",
    "cy",
    "r",
    "rx",
    "ry",
    "dx",
    "dy",
    "fx",
    "fy",
    "fill",
    "fillRule",
    "fill-rule",
    "fillOpacity",
    "fill-opacity",
    "clipRule",
    "clip-rule",
    "clipPath",
    "clip-path",
    "stroke",
    "strokeWidth",
    "stroke-width",
    "strokeLinecap",
    "stroke-linecap",
    "strokeLinejoin",
    "stroke-linejoin",
    "strokeDasharray",
    "stroke-dasharray",
    "strokeOpacity",
    "stroke-opacity",
    "opacity",
    "offset",
    "stopColor",
    "stop-color",
    "gradientUnits",
    "gradientTransform",
    "patternUnits",
    "mask",
    "filter",
    "pathLength",
)


def is_upper_case(value: str) -> bool:
    """Check whether a name or text follows the constant naming convention.

    Args:
        value: Identifier or trimmed literal text.

    Returns:
        True if value is non-empty and only uppercase letters, digits, ``_`` or ``-``.
    """
    return UPPERCASE_RE.fullmatch(value) is not None
