"""Markdown output formatter for conflict analysis results."""

from datetime import datetime, timezone

from conflict_analyzer.models.analysis import AnalysisResult


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|")


class ConflictMarkdownFormatter:
    """Format conflict analysis results as Markdown output."""

    def format_result(self, result: AnalysisResult) -> str:
        """Format analysis result as Markdown string.

        Args:
            result: The analysis result to format.

        Returns:
            Markdown string representation of the result.
        """
        lines: list[str] = []

        lines.append("# Package Version Conflict Report")
        lines.append("")

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        lines.append(f"*Generated: {timestamp}*")
        lines.append("")
        lines.append(f"Solution: `{result.solution_path}`")
        lines.append("")

        if result.total_projects == 0:
            lines.append("*No projects found.*")
            return "\n".join(lines)

        lines.extend(self._format_summary(result))
        lines.append("")

        if result.has_conflicts:
            lines.extend(self._format_conflicts(result))
        else:
            lines.append("✅ No package version conflicts found.")
        lines.append("")

        if result.warnings:
            lines.extend(self._format_warnings(result))
            lines.append("")

        return "\n".join(lines)

    def _format_summary(self, result: AnalysisResult) -> list[str]:
        """Format summary section.

        Args:
            result: The analysis result.

        Returns:
            List of Markdown lines for the summary.
        """
        status = "⚠️ CONFLICTS FOUND" if result.has_conflicts else "✅ PASS"
        lines = [
            "## Summary",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Projects | {result.total_projects} |",
            f"| Packages | {result.total_packages} |",
            f"| Conflicts | {len(result.conflicts)} |",
        ]
        if result.ignored_count > 0:
            lines.append(f"| Conflicts Ignored | {result.ignored_count} |")
        if result.warnings:
            lines.append(f"| Warnings | {len(result.warnings)} |")
        lines.append(f"| Status | {status} |")
        return lines

    def _format_conflicts(self, result: AnalysisResult) -> list[str]:
        """Format the conflicts section.

        Args:
            result: The analysis result with conflicts.

        Returns:
            List of Markdown lines, one subsection per package.
        """
        lines = [f"## Conflicts ({len(result.conflicts)})", ""]
        for conflict in result.conflicts:
            lines.append(f"### {conflict.package_name}")
            lines.append("")
            lines.append("| Version | Used by |")
            lines.append("|---------|---------|")
            for entry in conflict.versions:
                sources = "<br>".join(_escape_cell(source) for source in entry.sources)
                lines.append(f"| {_escape_cell(entry.version)} | {sources} |")
            lines.append("")
        return lines

    def _format_warnings(self, result: AnalysisResult) -> list[str]:
        """Format the warnings section.

        Args:
            result: The analysis result with warnings.

        Returns:
            List of Markdown lines.
        """
        lines = [f"## Warnings ({len(result.warnings)})", ""]
        lines.extend(f"- {warning.message}" for warning in result.warnings)
        return lines
