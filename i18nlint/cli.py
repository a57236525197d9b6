"""CLI interface for i18nlint.

Provides the ``check`` command for linting files and directories.
"""

import json
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env before importing other i18nlint modules
# This ensures env vars are set before module-level code reads them
load_dotenv()

from i18nlint import __version__  # noqa: E402
from i18nlint.errors import ConfigurationError  # noqa: E402
from i18nlint.logging import log_operation, set_verbose  # noqa: E402
from i18nlint.models.findings import LintReport  # noqa: E402
from i18nlint.models.options import LintOptions, find_config, load_options  # noqa: E402

EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_CONFIG_ERROR = 2


@click.group()
@click.version_option(version=__version__, prog_name="i18nlint")
def cli() -> None:
    """i18nlint - find user-facing string literals that bypass translation."""
    pass


def _resolve_options(
    config_path: str | None,
    paths: tuple[str, ...],
    extra: dict[str, list[str]],
) -> LintOptions:
    """Options from --config, else .i18nlintrc.json of the first directory, plus flags."""
    if config_path:
        options = load_options(Path(config_path))
    else:
        options = LintOptions()
        for raw in paths:
            path = Path(raw)
            found = find_config(path if path.is_dir() else path.parent)
            if found is not None:
                options = load_options(found)
                break
    return options.merged(**extra)


def _format_text(report: LintReport) -> str:
    lines = []
    for file_report in report.files:
        if file_report.error:
            lines.append(f"{file_report.file}: error: {file_report.error}")
            continue
        for finding in file_report.findings:
            position = finding.position
            where = f"{position.start_line}:{position.start_column + 1}" if position else "?:?"
            lines.append(f"{file_report.file}:{where}  {finding.message}")
    lines.append(
        f"{report.finding_count} finding(s) in {len(report.files)} file(s), "
        f"{report.error_count} error(s)"
    )
    return "\n".join(lines)


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Options file (default: .i18nlintrc.json in the scanned directory)",
)
@click.option(
    "--ignore", "ignore_patterns", multiple=True, help="Regex of literal text to ignore (repeatable)"
)
@click.option("--ignore-callee", multiple=True, help="Callee whose arguments are technical (repeatable)")
@click.option("--ignore-property", multiple=True, help="Object property key to ignore (repeatable)")
@click.option("--ignore-attribute", multiple=True, help="Markup attribute to ignore (repeatable)")
@click.option("--exclude", multiple=True, help="Path pattern to skip when scanning directories (repeatable)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text)",
)
@click.option("--no-types", is_flag=True, help="Do not narrow literals by declared TypeScript types")
@click.option("--cache/--no-cache", default=True, help="Reuse results for unchanged files (default: on)")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
def check(
    paths: tuple[str, ...],
    config_path: str | None,
    ignore_patterns: tuple[str, ...],
    ignore_callee: tuple[str, ...],
    ignore_property: tuple[str, ...],
    ignore_attribute: tuple[str, ...],
    exclude: tuple[str, ...],
    output_format: str,
    no_types: bool,
    cache: bool,
    verbose: bool,
) -> None:
    """Lint PATHS for untranslated user-facing strings.

    Exits 0 when clean, 1 when findings were reported, 2 on a configuration error.
    """
    from i18nlint.analyzers import lint_paths

    set_verbose(verbose)

    try:
        options = _resolve_options(
            config_path,
            paths,
            {
                "ignore": list(ignore_patterns),
                "ignore_callee": list(ignore_callee),
                "ignore_properties": list(ignore_property),
                "ignore_attributes": list(ignore_attribute),
            },
        )
        with log_operation("check", {"paths": len(paths)}):
            report = lint_paths(
                paths,
                options,
                use_types=not no_types,
                use_cache=cache,
                ignore=exclude,
                show_progress=output_format == "text",
            )
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if output_format == "json":
        click.echo(json.dumps(report.model_dump(mode="json"), indent=2))
    else:
        click.echo(_format_text(report))

    sys.exit(EXIT_FINDINGS if report.finding_count else EXIT_CLEAN)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
