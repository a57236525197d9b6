"""i18nlint - find user-facing string literals that bypass translation."""

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"
