"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from conflict_analyzer.models.analysis import AnalysisResult, Verbosity


class TerminalFormatter:
    """Format conflict analysis results for terminal display using Rich."""

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_result(self, result: AnalysisResult) -> None:
        """Format and display analysis results.

        Args:
            result: The analysis result to display.
        """
        if self._verbosity == Verbosity.QUIET:
            self._print_quiet_output(result)
            return

        if result.total_projects == 0:
            self._console.print("[yellow]No projects found[/yellow]")
            return

        self._print_summary(result)

        if result.has_conflicts:
            self._print_conflicts(result)
        else:
            self._console.print("[green]No package version conflicts found.[/green]")

        if result.warnings and self._verbosity == Verbosity.VERBOSE:
            self._print_warnings(result)

    def _print_quiet_output(self, result: AnalysisResult) -> None:
        """Print minimal output for quiet mode.

        Args:
            result: The analysis result to display.
        """
        if result.total_projects == 0:
            self._console.print("[yellow]No projects found[/yellow]")
            return

        if result.has_conflicts:
            self._console.print(
                f"[red]CONFLICTS FOUND[/red] - "
                f"{len(result.conflicts)} package(s) used at several versions"
            )
            for conflict in result.conflicts:
                versions = ", ".join(conflict.get_version_strings())
                self._console.print(f"  - {conflict.package_name}: {versions}")
        else:
            self._console.print(
                f"[green]PASS[/green] - No conflicts in {result.total_projects} project(s)"
            )

    def _print_summary(self, result: AnalysisResult) -> None:
        """Print summary panel.

        Args:
            result: The analysis result to summarize.
        """
        if result.has_conflicts:
            status = "CONFLICTS FOUND"
            status_color = "red"
        else:
            status = "PASS"
            status_color = "green"

        summary_lines = [
            f"Projects: {result.total_projects}",
            f"Packages: {result.total_packages}",
            f"Conflicts: {len(result.conflicts)}",
        ]
        if result.ignored_count > 0:
            summary_lines.append(f"Conflicts Ignored: {result.ignored_count}")
        if result.warnings:
            summary_lines.append(
                f"Warnings: {len(result.warnings)} (analysis may be incomplete)"
            )
        summary_lines.extend([
            "",
            f"Status: [{status_color}]{status}[/{status_color}]",
        ])

        title = (
            "TRANSITIVE CONFLICT SUMMARY"
            if result.mode == "transitive"
            else "CONFLICT SUMMARY"
        )
        panel = Panel(
            "\n".join(summary_lines),
            title=f"[bold]{title}[/bold]",
            border_style=status_color,
        )
        self._console.print(panel)
        self._console.print("")

    def _print_conflicts(self, result: AnalysisResult) -> None:
        """Print the conflicts table.

        Args:
            result: The analysis result with conflicts.
        """
        used_by = "Used by" if result.mode == "solution" else "Pulled in by"
        table = Table(title="Package Version Conflicts", show_lines=True)
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Version", style="magenta")
        table.add_column(used_by, style="white")

        for conflict in result.conflicts:
            for index, entry in enumerate(conflict.versions):
                name = conflict.package_name if index == 0 else ""
                table.add_row(name, entry.version, "\n".join(entry.sources))

        self._console.print(table)

    def _print_warnings(self, result: AnalysisResult) -> None:
        """Print the warnings recorded during analysis.

        Args:
            result: The analysis result with warnings.
        """
        self._console.print("")
        self._console.print(f"[bold yellow]Warnings ({len(result.warnings)})[/bold yellow]")
        for warning in result.warnings:
            self._console.print(f"  [yellow]![/yellow] {warning.message}")
