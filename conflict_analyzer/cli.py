"""CLI entry point for conflict-analyzer."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Literal, Optional, cast

import click
from rich.console import Console

from conflict_analyzer import __version__
from conflict_analyzer.analysis.usage import build_usage_rows
from conflict_analyzer.config import AnalyzerConfig, load_config
from conflict_analyzer.constants import (
    CSV_SEPARATOR,
    EXIT_CONFLICTS,
    EXIT_ERROR,
    EXIT_SUCCESS,
)
from conflict_analyzer.exceptions import ConflictAnalyzerError, ReportError
from conflict_analyzer.models.analysis import AnalysisOptions, AnalysisResult, Verbosity
from conflict_analyzer.output.conflict_json import ConflictJsonFormatter
from conflict_analyzer.output.conflict_markdown import ConflictMarkdownFormatter
from conflict_analyzer.output.csv_export import (
    default_report_path,
    export_usage_csv,
    format_usage_csv,
)
from conflict_analyzer.output.table import format_usage_table
from conflict_analyzer.output.terminal import TerminalFormatter
from conflict_analyzer.output.text_report import generate_conflict_report
from conflict_analyzer.scanner import (
    analyze_solution,
    analyze_solution_transitive,
    create_metadata_source,
)

# Reports go to stdout; status lines and errors to stderr.
_console = Console()
_error_console = Console(stderr=True)

_LOG_LEVELS = {
    Verbosity.QUIET: logging.ERROR,
    Verbosity.NORMAL: logging.WARNING,
    Verbosity.VERBOSE: logging.INFO,
}


def _setup_logging(verbosity: Verbosity) -> None:
    """Configure logging for the selected verbosity."""
    logging.basicConfig(
        level=_LOG_LEVELS[verbosity],
        format="%(levelname)s: %(message)s",
        force=True,
    )


def _resolve_verbosity(verbose_flag: bool, quiet_flag: bool) -> Verbosity:
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")
    if quiet_flag:
        return Verbosity.QUIET
    if verbose_flag:
        return Verbosity.VERBOSE
    return Verbosity.NORMAL


def _validate_solution(solution: str) -> Path:
    path = Path(solution)
    if path.suffix.lower() != ".sln":
        raise click.BadParameter(
            f"'{solution}' is not a solution (.sln) file.",
            param_hint="SOLUTION",
        )
    return path


def _common_options(func):  # type: ignore[no-untyped-def]
    """Options shared by every analysis command."""
    options = [
        click.option(
            "--cache-dir",
            "cache_dir",
            type=click.Path(file_okay=False),
            default=None,
            help="NuGet global packages folder (default: $NUGET_PACKAGES "
            "or ~/.nuget/packages).",
        ),
        click.option(
            "--jobs",
            "-j",
            "jobs",
            type=click.IntRange(min=1),
            default=None,
            help="Number of projects expanded concurrently.",
        ),
        click.option(
            "--verbose",
            "-v",
            "verbose_flag",
            is_flag=True,
            default=False,
            help="Show informational messages and all warnings.",
        ),
        click.option(
            "--quiet",
            "-q",
            "quiet_flag",
            is_flag=True,
            default=False,
            help="Show only the conflict summary.",
        ),
        click.option(
            "--config",
            "-c",
            "config_path",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="Path to configuration file.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Solution Package Conflict Analyzer - Find NuGet version conflicts.

    Reads every project of a .NET solution, resolves the packages each one
    pulls in transitively from the local NuGet cache, and reports packages
    used at different versions across the solution.

    \b
    Examples:
        conflict-analyzer analyze MySolution.sln
        conflict-analyzer analyze MySolution.sln --format json
        conflict-analyzer analyze MySolution.sln --csv
        conflict-analyzer transitive MySolution.sln
        conflict-analyzer packages MySolution.sln --format csv
    """
    pass


@main.command()
@click.argument("solution", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "text", "markdown", "json"], case_sensitive=False),
    default="terminal",
    help="Output format for the conflict report (default: terminal).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write report to file instead of stdout.",
)
@click.option(
    "--csv",
    "csv_flag",
    is_flag=True,
    default=False,
    help="Also write a package usage CSV report next to the solution.",
)
@click.option(
    "--csv-path",
    "csv_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the package usage CSV report to this file.",
)
@_common_options
def analyze(
    solution: str,
    output_format: str,
    output_path: str | None,
    csv_flag: bool,
    csv_path: str | None,
    cache_dir: str | None,
    jobs: Optional[int],
    verbose_flag: bool,
    quiet_flag: bool,
    config_path: str | None,
) -> None:
    """Report packages used at different versions across a solution.

    Direct and transitive package references of every project are
    compared. Exits with code 1 when conflicts are found.

    \b
    Examples:
        conflict-analyzer analyze MySolution.sln
        conflict-analyzer analyze MySolution.sln --format markdown -o report.md
        conflict-analyzer analyze MySolution.sln --csv
        conflict-analyzer analyze MySolution.sln --csv-path packages.csv
        conflict-analyzer analyze MySolution.sln --cache-dir /tmp/nuget
    """
    verbosity = _resolve_verbosity(verbose_flag, quiet_flag)
    solution_path = _validate_solution(solution)
    _setup_logging(verbosity)

    format_value = cast(
        Literal["terminal", "text", "markdown", "json"], output_format.lower()
    )
    options = AnalysisOptions(format=format_value, verbosity=verbosity)

    try:
        config = load_config(config_path, solution_path)
        source = create_metadata_source(config, cache_dir)
        show_progress = options.format == "terminal" and verbosity != Verbosity.QUIET

        analysis = asyncio.run(
            analyze_solution(
                solution_path,
                config,
                source,
                max_workers=jobs,
                console=_console if show_progress else None,
                show_progress=show_progress,
            )
        )

        if csv_flag or csv_path:
            target = Path(csv_path) if csv_path else default_report_path(solution_path)
            written = export_usage_csv(
                target,
                build_usage_rows(analysis.projects),
                _csv_separator(config),
            )
            _status(f"[green]Package report written to {written}[/green]", options.format)

        _display_result(analysis.result, options, output_path)
        _exit_for(analysis.result)

    except ConflictAnalyzerError as e:
        _display_error(e, options.format)
        sys.exit(EXIT_ERROR)


@main.command()
@click.argument("solution", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "text", "markdown", "json"], case_sensitive=False),
    default="terminal",
    help="Output format for the conflict report (default: terminal).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write report to file instead of stdout.",
)
@_common_options
def transitive(
    solution: str,
    output_format: str,
    output_path: str | None,
    cache_dir: str | None,
    jobs: Optional[int],
    verbose_flag: bool,
    quiet_flag: bool,
    config_path: str | None,
) -> None:
    """Report transitive packages pulled in at different versions.

    Each direct package of each project is expanded separately and the
    resulting transitive packages are compared. Versions are attributed to
    the direct package that pulled them in.

    \b
    Examples:
        conflict-analyzer transitive MySolution.sln
        conflict-analyzer transitive MySolution.sln --format json
    """
    verbosity = _resolve_verbosity(verbose_flag, quiet_flag)
    solution_path = _validate_solution(solution)
    _setup_logging(verbosity)

    format_value = cast(
        Literal["terminal", "text", "markdown", "json"], output_format.lower()
    )
    options = AnalysisOptions(format=format_value, verbosity=verbosity)

    try:
        config = load_config(config_path, solution_path)
        source = create_metadata_source(config, cache_dir)
        show_progress = options.format == "terminal" and verbosity != Verbosity.QUIET

        result = asyncio.run(
            analyze_solution_transitive(
                solution_path,
                config,
                source,
                max_workers=jobs,
                console=_console if show_progress else None,
                show_progress=show_progress,
            )
        )

        _display_result(result, options, output_path)
        _exit_for(result)

    except ConflictAnalyzerError as e:
        _display_error(e, options.format)
        sys.exit(EXIT_ERROR)


@main.command()
@click.argument("solution", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "csv"], case_sensitive=False),
    default="table",
    help="Output format for the package list (default: table).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write report to file instead of stdout.",
)
@_common_options
def packages(
    solution: str,
    output_format: str,
    output_path: str | None,
    cache_dir: str | None,
    jobs: Optional[int],
    verbose_flag: bool,
    quiet_flag: bool,
    config_path: str | None,
) -> None:
    """List every package version used in a solution and how it is reached.

    \b
    Examples:
        conflict-analyzer packages MySolution.sln
        conflict-analyzer packages MySolution.sln --format csv -o packages.csv
    """
    verbosity = _resolve_verbosity(verbose_flag, quiet_flag)
    solution_path = _validate_solution(solution)
    _setup_logging(verbosity)
    format_value = output_format.lower()

    try:
        config = load_config(config_path, solution_path)
        source = create_metadata_source(config, cache_dir)

        analysis = asyncio.run(
            analyze_solution(solution_path, config, source, max_workers=jobs, show_progress=False)
        )
        rows = build_usage_rows(analysis.projects)

        if format_value == "csv":
            if output_path:
                written = export_usage_csv(output_path, rows, _csv_separator(config))
                _console.print(f"[green]Report written to {written}[/green]")
            else:
                click.echo(format_usage_csv(rows, _csv_separator(config)), nl=False)
        else:
            content = format_usage_table(rows)
            if output_path:
                _write_report(content, output_path)
            else:
                click.echo(content, nl=False)
        sys.exit(EXIT_SUCCESS)

    except ConflictAnalyzerError as e:
        _display_error(e, "text")
        sys.exit(EXIT_ERROR)


def _csv_separator(config: AnalyzerConfig) -> str:
    return config.csv_separator or CSV_SEPARATOR


def _exit_for(result: AnalysisResult) -> None:
    """Exit with the code matching the analysis outcome."""
    if result.has_conflicts:
        sys.exit(EXIT_CONFLICTS)
    sys.exit(EXIT_SUCCESS)


def _status(message: str, format_type: str) -> None:
    """Print a status line without corrupting machine-readable stdout."""
    if format_type == "terminal":
        _console.print(message)
    else:
        _error_console.print(message)


def _write_report(content: str, path: str) -> None:
    """Save a rendered report, creating missing parent directories.

    Raises:
        ReportError: If the file cannot be written.
    """
    target = Path(path)
    replacing = target.exists()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReportError(f"Cannot write to file '{path}': {e}") from e

    verb = "replaced" if replacing else "written"
    _error_console.print(f"[green]Report {verb}: {path}[/green]")


def _display_result(
    result: AnalysisResult,
    options: AnalysisOptions,
    output_path: str | None = None,
) -> None:
    """Display analysis results in the specified format.

    Args:
        result: The analysis result to display.
        options: Analysis options including format and verbosity.
        output_path: Optional file path to write output to.
    """
    if options.format == "json":
        content = ConflictJsonFormatter().format_result(result)
    elif options.format == "markdown":
        content = ConflictMarkdownFormatter().format_result(result)
    elif options.format == "text":
        content = generate_conflict_report(result.conflicts)
    else:  # terminal
        if output_path:
            # Terminal format to file uses markdown instead
            content = ConflictMarkdownFormatter().format_result(result)
        else:
            TerminalFormatter(
                console=_console, verbosity=options.verbosity
            ).format_result(result)
            return

    if output_path:
        _write_report(content, output_path)
    else:
        click.echo(content)


def _display_error(error: ConflictAnalyzerError, format_type: str) -> None:
    """Report a failed run on stderr, keeping stdout free for reports."""
    message = f"Error: {type(error).__name__}: {error}"
    if format_type == "terminal":
        _error_console.print(message, style="bold red", markup=False)
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
