"""Ignore pattern management for directory scans.

Configuration:
    - DEFAULT_IGNORES: Universal patterns (node_modules, build outputs, etc.)
    - FRAMEWORK_IGNORES: Build directories of common front-end frameworks
    - .i18nlintignore: Per-repo customization using gitignore-like syntax
"""

from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import Path

from i18nlint.logging import logger
from i18nlint.utils.cache import CACHE_DIRNAME

IGNORE_FILENAME = ".i18nlintignore"

# Universal ignore patterns - always excluded
DEFAULT_IGNORES: frozenset[str] = frozenset({
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Dependencies
    "node_modules",
    "bower_components",
    "jspm_packages",
    "vendor",
    # Build outputs (generic)
    "dist",
    "build",
    "out",
    # Bundled / minified sources
    "*.min.js",
    "*.bundle.js",
    # IDE
    ".idea",
    ".vscode",
    # Test coverage
    "coverage",
    ".nyc_output",
    # Our own cache
    CACHE_DIRNAME,
})

# Framework build and cache directories
FRAMEWORK_IGNORES: frozenset[str] = frozenset({
    ".next",
    ".nuxt",
    ".output",
    ".svelte-kit",
    ".astro",
    ".vite",
    ".cache",
    ".parcel-cache",
    ".turbo",
    "storybook-static",
})


def parse_ignore_file(root: Path) -> set[str]:
    """Parse .i18nlintignore if it exists.

    Supports gitignore-style syntax:
    - Lines starting with # are comments
    - Empty lines are ignored
    - Patterns are directory/file names or glob patterns, optionally
      relative paths (``src/legacy/*``)
    - Lines starting with ! are negations (not supported, skipped)

    Args:
        root: Scan root.

    Returns:
        Set of patterns, empty if the file doesn't exist.
    """
    ignore_file = root / IGNORE_FILENAME
    if not ignore_file.exists():
        return set()

    patterns: set[str] = set()
    try:
        content = ignore_file.read_text(encoding="utf-8")
        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("!"):
                logger.debug("  Negation patterns not supported: %s", line)
                continue
            # Remove leading/trailing slashes for consistency
            patterns.add(line.strip("/"))
    except OSError as e:
        logger.warning("  Failed to read %s: %s", ignore_file, e)

    return patterns


def load_ignore_patterns(root: Path, extra: Iterable[str] | None = None) -> set[str]:
    """Load all applicable ignore patterns for a scan root.

    Combines defaults, framework directories, .i18nlintignore and extra
    patterns (e.g. from the command line).
    """
    patterns = set(DEFAULT_IGNORES) | FRAMEWORK_IGNORES

    custom_patterns = parse_ignore_file(root)
    if custom_patterns:
        patterns.update(custom_patterns)
        logger.debug("  Loaded %d patterns from %s", len(custom_patterns), IGNORE_FILENAME)

    if extra:
        patterns.update(p.strip("/") for p in extra if p.strip("/"))

    return patterns


def should_ignore(path: Path, root: Path, patterns: set[str]) -> bool:
    """Check if a path should be ignored.

    A pattern matches any single component of the path relative to root
    (exactly or as a glob), or the whole relative path as a glob.

    Args:
        path: Path to check.
        root: Scan root for relative path calculation.
        patterns: Set of ignore patterns.

    Returns:
        True if path should be ignored.
    """
    try:
        rel_path = path.relative_to(root)
    except ValueError:
        # Path is outside the scan root
        return True

    rel_str = rel_path.as_posix()
    for pattern in patterns:
        if "/" in pattern:
            if fnmatch(rel_str, pattern) or rel_str.startswith(pattern + "/"):
                return True
            continue
        for part in rel_path.parts:
            if part == pattern or fnmatch(part, pattern):
                return True

    return False
