"""Output formatters for conflict-analyzer."""

from conflict_analyzer.output.conflict_json import ConflictJsonFormatter
from conflict_analyzer.output.conflict_markdown import ConflictMarkdownFormatter
from conflict_analyzer.output.csv_export import (
    default_report_path,
    export_usage_csv,
    format_usage_csv,
)
from conflict_analyzer.output.table import Column, format_table, format_usage_table
from conflict_analyzer.output.terminal import TerminalFormatter
from conflict_analyzer.output.text_report import generate_conflict_report

__all__ = [
    "Column",
    "ConflictJsonFormatter",
    "ConflictMarkdownFormatter",
    "TerminalFormatter",
    "default_report_path",
    "export_usage_csv",
    "format_table",
    "format_usage_csv",
    "format_usage_table",
    "generate_conflict_report",
]
