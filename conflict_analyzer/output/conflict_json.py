"""JSON output formatter for conflict analysis results."""
import json
from datetime import datetime, timezone
from typing import Any

from conflict_analyzer import __version__
from conflict_analyzer.models.analysis import AnalysisResult


class ConflictJsonFormatter:
    """Format conflict analysis results as JSON output.

    Provides structured JSON for programmatic processing and CI/CD
    integration.
    """

    def format_result(self, result: AnalysisResult) -> str:
        """Format analysis result as JSON string.

        Args:
            result: The analysis result to format.

        Returns:
            JSON string representation of the result.
        """
        output = self._build_output(result)
        return json.dumps(output, indent=2)

    def _build_output(self, result: AnalysisResult) -> dict[str, Any]:
        """Build the output dictionary structure.

        Args:
            result: The analysis result to convert.

        Returns:
            Dictionary ready for JSON serialization.
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return {
            "analysis_metadata": {
                "generated_at": timestamp,
                "tool_version": __version__,
                "solution": result.solution_path,
                "mode": result.mode,
            },
            "summary": {
                "total_projects": result.total_projects,
                "total_packages": result.total_packages,
                "conflicts": len(result.conflicts),
                "ignored_conflicts": result.ignored_count,
                "warnings": len(result.warnings),
                "status": "conflicts_found" if result.has_conflicts else "pass",
            },
            "conflicts": [
                {
                    "package": conflict.package_name,
                    "versions": [
                        {"version": entry.version, "sources": entry.sources}
                        for entry in conflict.versions
                    ],
                }
                for conflict in result.conflicts
            ],
            "warnings": [
                {
                    "kind": warning.kind.value,
                    "message": warning.message,
                    "package": warning.package_name,
                    "version": warning.package_version,
                    "project": warning.project_path,
                }
                for warning in result.warnings
            ],
        }
