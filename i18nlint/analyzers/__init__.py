"""Analyzers: configuration, container tagging, classification and file runners."""

from i18nlint.analyzers.classifier import ClassificationState, ExemptionClassifier, Verdict
from i18nlint.analyzers.config import (
    CalleeRules,
    Configuration,
    TagAttributeRule,
    coerce_options,
    compile_configuration,
)
from i18nlint.analyzers.containers import ContainerTagger, ContainerTags
from i18nlint.analyzers.emitter import MESSAGES, Complaint, DiagnosticEmitter
from i18nlint.analyzers.engine import lint_tree, run
from i18nlint.analyzers.runner import discover_files, lint_file, lint_paths, lint_source
from i18nlint.analyzers.type_oracle import AnnotationTypeOracle, TypeNarrowingAdapter, TypeOracle
from i18nlint.errors import ConfigurationError

__all__ = [
    "MESSAGES",
    "AnnotationTypeOracle",
    "CalleeRules",
    "ClassificationState",
    "Complaint",
    "Configuration",
    "ConfigurationError",
    "ContainerTagger",
    "ContainerTags",
    "DiagnosticEmitter",
    "ExemptionClassifier",
    "TagAttributeRule",
    "TypeNarrowingAdapter",
    "TypeOracle",
    "Verdict",
    "coerce_options",
    "compile_configuration",
    "discover_files",
    "lint_file",
    "lint_paths",
    "lint_source",
    "lint_tree",
    "run",
]
