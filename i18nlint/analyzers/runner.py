"""File-level linting: sources, single files and directory scans.

Uses the lint cache to skip files whose contents and options have not
changed since the last run.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from i18nlint import __version__
from i18nlint.analyzers.code_parser import EXTENSION_TO_LANGUAGE, TYPED_LANGUAGES, parse_file, parse_source
from i18nlint.analyzers.config import Configuration, coerce_options, compile_configuration
from i18nlint.analyzers.engine import lint_tree
from i18nlint.analyzers.ignore import load_ignore_patterns, should_ignore
from i18nlint.analyzers.type_oracle import AnnotationTypeOracle
from i18nlint.errors import UnsupportedSourceError
from i18nlint.logging import logger, progress_bar
from i18nlint.models.findings import FileReport, Finding, LintReport, ReportMetadata
from i18nlint.models.options import LintOptions
from i18nlint.syntax.nodes import SyntaxNode
from i18nlint.syntax.tree import SyntaxTree
from i18nlint.utils.cache import (
    LINT_CACHE_VERSION,
    FileCacheEntry,
    LintCache,
    compute_file_hash,
    is_file_stale,
    load_lint_cache,
    options_fingerprint,
    save_lint_cache,
)

OptionsLike = LintOptions | Mapping[str, Any] | None


def _lint_root(root: SyntaxNode, config: Configuration, typed: bool) -> list[Finding]:
    tree = SyntaxTree(root)
    oracle = AnnotationTypeOracle(tree) if typed else None
    return lint_tree(tree, config, oracle=oracle)


def lint_source(
    source: str | bytes,
    language: str,
    options: OptionsLike | Configuration = None,
    use_types: bool = True,
) -> list[Finding]:
    """Lint JavaScript/TypeScript source text.

    Args:
        source: Program text.
        language: ``javascript``, ``typescript`` or ``tsx``.
        options: Lint options (or a precompiled Configuration).
        use_types: Narrow literals by declared TypeScript types.

    Returns:
        Ordered findings.

    Raises:
        ConfigurationError: If the options cannot be compiled.
        UnsupportedSourceError: If the language is unknown or unavailable.
    """
    config = options if isinstance(options, Configuration) else compile_configuration(options)
    typed = use_types and language in TYPED_LANGUAGES
    root = parse_source(source, language, use_types=typed)
    return _lint_root(root, config, typed)


def lint_file(
    path: Path,
    options: OptionsLike | Configuration = None,
    root: Path | None = None,
    use_types: bool = True,
    language: str | None = None,
) -> FileReport:
    """Lint a single file.

    File-level problems (unreadable file, unknown extension, missing
    grammar, source nested too deeply or not convertible) are reported in
    ``FileReport.error`` rather than raised.

    Args:
        path: File to lint.
        options: Lint options (or a precompiled Configuration).
        root: Directory the reported path is made relative to.
        use_types: Narrow literals by declared TypeScript types.
        language: Language override (detected from the extension if None).

    Returns:
        FileReport with findings or an error.

    Raises:
        ConfigurationError: If the options cannot be compiled.
    """
    config = options if isinstance(options, Configuration) else compile_configuration(options)
    rel_path = path
    if root is not None:
        try:
            rel_path = path.relative_to(root)
        except ValueError:
            rel_path = path

    try:
        syntax_root, language = parse_file(path, language=language, use_types=use_types)
        findings = _lint_root(syntax_root, config, use_types and language in TYPED_LANGUAGES)
    except (OSError, UnsupportedSourceError) as e:
        logger.warning("  Skipping %s: %s", rel_path, e)
        return FileReport(file=str(rel_path), language=language, error=str(e))
    except RecursionError:
        logger.warning("  Skipping %s: syntax tree too deep", rel_path)
        return FileReport(file=str(rel_path), language=language, error="syntax tree too deep")
    except (ValueError, OverflowError) as e:
        logger.warning("  Skipping %s: cannot convert source: %s", rel_path, e)
        return FileReport(file=str(rel_path), language=language, error=f"cannot convert source: {e}")

    return FileReport(file=str(rel_path), language=language, findings=findings)


def discover_files(directory: Path, ignore: Iterable[str] | None = None) -> list[Path]:
    """Lintable files under a directory, honoring ignore patterns, sorted."""
    patterns = load_ignore_patterns(directory, ignore)
    extensions = set(EXTENSION_TO_LANGUAGE)
    files = []
    for filepath in directory.rglob("*"):
        if not filepath.is_file():
            continue
        if filepath.suffix.lower() not in extensions:
            continue
        if should_ignore(filepath, directory, patterns):
            continue
        files.append(filepath)
    return sorted(files)


def _lint_directory(
    directory: Path,
    options: LintOptions,
    config: Configuration,
    use_types: bool,
    use_cache: bool,
    ignore: Iterable[str] | None,
    show_progress: bool,
) -> list[FileReport]:
    files = discover_files(directory, ignore)
    logger.info("  %s: found %d files to lint", directory, len(files))

    fingerprint = options_fingerprint(options, use_types)
    cache: LintCache | None = None
    if use_cache:
        cache = load_lint_cache(directory, fingerprint)
        if cache:
            logger.info("  Loaded lint cache with %d entries", len(cache.files))
    if cache is None:
        cache = LintCache(
            version=LINT_CACHE_VERSION,
            fingerprint=fingerprint,
            created_at=datetime.now(UTC).isoformat(),
            files={},
        )

    reports: list[FileReport] = []
    current_files: set[str] = set()
    cached_count = 0

    for filepath in progress_bar(
        files, desc="Linting files", total=len(files), unit="files", disable=not show_progress
    ):
        rel_path_str = filepath.relative_to(directory).as_posix()
        current_files.add(rel_path_str)

        if use_cache and not is_file_stale(filepath, rel_path_str, cache):
            entry = cache.files[rel_path_str]
            reports.append(
                FileReport(
                    file=rel_path_str,
                    language=entry.language,
                    findings=[Finding.model_validate(f) for f in entry.findings],
                    cached=True,
                )
            )
            cached_count += 1
            continue

        report = lint_file(filepath, config, root=directory, use_types=use_types)
        report.file = rel_path_str
        reports.append(report)

        if use_cache and report.error is None:
            try:
                stat = filepath.stat()
            except OSError:
                continue
            cache.files[rel_path_str] = FileCacheEntry(
                mtime=stat.st_mtime,
                size=stat.st_size,
                language=report.language or "",
                findings=[f.model_dump(mode="json") for f in report.findings],
                content_hash=compute_file_hash(filepath),
            )

    if use_cache:
        deleted_files = set(cache.files) - current_files
        for deleted in deleted_files:
            del cache.files[deleted]
        if deleted_files:
            logger.info("  Removed %d deleted files from cache", len(deleted_files))
        cache.created_at = datetime.now(UTC).isoformat()
        save_lint_cache(directory, cache)

    logger.info("  %s: %d cached, %d linted", directory, cached_count, len(files) - cached_count)
    return reports


def lint_paths(
    paths: Iterable[Path | str],
    options: OptionsLike = None,
    use_types: bool = True,
    use_cache: bool = True,
    ignore: Iterable[str] | None = None,
    show_progress: bool = True,
) -> LintReport:
    """Lint files and directory trees.

    Directories are scanned recursively for ``.js .jsx .mjs .cjs .ts .mts
    .cts .tsx`` files, skipping ignored paths; files given explicitly are
    always linted.

    Args:
        paths: Files and/or directories.
        options: Lint options shared by every file.
        use_types: Narrow literals by declared TypeScript types.
        use_cache: Reuse findings of unchanged files (directories only).
        ignore: Extra ignore patterns for directory scans.
        show_progress: Show a progress bar on stderr.

    Returns:
        LintReport aggregating every file.

    Raises:
        ConfigurationError: If the options cannot be compiled; nothing is
            linted in that case.
    """
    options = coerce_options(options)
    config = compile_configuration(options)
    ignore = list(ignore or [])

    roots: list[str] = []
    files: list[FileReport] = []
    for raw in paths:
        path = Path(raw).resolve()
        roots.append(str(path))
        if path.is_dir():
            files.extend(
                _lint_directory(path, options, config, use_types, use_cache, ignore, show_progress)
            )
        elif path.exists():
            files.append(lint_file(path, config, root=Path.cwd(), use_types=use_types))
        else:
            logger.warning("  Path does not exist: %s", path)
            files.append(FileReport(file=str(raw), error="path does not exist"))

    return LintReport(
        files=files,
        metadata=ReportMetadata(version=__version__, roots=roots),
    )
