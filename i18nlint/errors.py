"""Exceptions raised by i18nlint."""


class ConfigurationError(ValueError):
    """Options could not be loaded or compiled (for example a malformed pattern)."""


class UnsupportedSourceError(ValueError):
    """A file's language is unknown or its tree-sitter binding is not installed."""
