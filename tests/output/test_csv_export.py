"""Tests for CSV export of package usage."""
import csv
import io
from datetime import datetime
from pathlib import Path

import pytest

from conflict_analyzer.exceptions import ReportError
from conflict_analyzer.models.conflict import PackageUsageRow
from conflict_analyzer.output.csv_export import (
    CSV_HEADERS,
    default_report_path,
    export_usage_csv,
    format_usage_csv,
    format_version_cell,
)

ROWS = [
    PackageUsageRow(name="Beta", version="2.0", paths=["Z", "X -> Alpha 1.0 -> Beta 2.0"]),
    PackageUsageRow(name="Polly", version="8.2.0", paths=["Api"]),
]


def read_rows(text: str, separator: str = ";") -> list[list[str]]:
    """Parse CSV text back into rows."""
    return list(csv.reader(io.StringIO(text), delimiter=separator))


class TestFormatVersionCell:
    """Tests for format_version_cell."""

    def test_wraps_as_text_formula(self) -> None:
        """Test that versions are kept as text by spreadsheets."""
        assert format_version_cell("1.10") == '="1.10"'


class TestFormatUsageCsv:
    """Tests for format_usage_csv."""

    def test_header_and_rows(self) -> None:
        """Test the column layout and cell contents."""
        rows = read_rows(format_usage_csv(ROWS))

        assert rows[0] == CSV_HEADERS
        assert rows[1] == ["Beta", '="2.0"', "Z\nX -> Alpha 1.0 -> Beta 2.0"]
        assert rows[2] == ["Polly", '="8.2.0"', "Api"]
        assert len(rows) == 3

    def test_default_separator_is_semicolon(self) -> None:
        """Test that fields are separated by semicolons."""
        first_line = format_usage_csv([]).splitlines()[0]

        assert first_line == "Package;Version;Dependency paths"

    def test_custom_separator(self) -> None:
        """Test that another separator can be chosen."""
        rows = read_rows(format_usage_csv(ROWS, ","), ",")

        assert rows[2] == ["Polly", '="8.2.0"', "Api"]

    def test_separator_inside_values_is_quoted(self) -> None:
        """Test that a range leftover containing the separator survives."""
        row = PackageUsageRow(name="Beta", version="2.0.0,3.0.0", paths=["X"])

        rows = read_rows(format_usage_csv([row], ","), ",")

        assert rows[1] == ["Beta", '="2.0.0,3.0.0"', "X"]


class TestDefaultReportPath:
    """Tests for default_report_path."""

    def test_timestamped_name_next_to_solution(self, tmp_path: Path) -> None:
        """Test the report file name format."""
        path = default_report_path(tmp_path / "App.sln", datetime(2024, 1, 31, 15, 45, 0))

        assert path == tmp_path / "packages_report_20240131_154500.csv"

    def test_defaults_to_now(self, tmp_path: Path) -> None:
        """Test that the current time is used by default."""
        path = default_report_path(tmp_path / "App.sln")

        assert path.parent == tmp_path
        assert path.name.startswith("packages_report_")
        assert path.suffix == ".csv"


class TestExportUsageCsv:
    """Tests for export_usage_csv."""

    def test_writes_utf8_with_bom(self, tmp_path: Path) -> None:
        """Test that the file starts with a byte order mark."""
        target = tmp_path / "report.csv"

        written = export_usage_csv(target, ROWS)

        assert written == target
        raw = target.read_bytes()
        assert raw.startswith(b"\xef\xbb\xbf")
        assert read_rows(raw.decode("utf-8-sig"))[2] == ["Polly", '="8.2.0"', "Api"]

    def test_unwritable_path_raises(self, tmp_path: Path) -> None:
        """Test that write failures raise ReportError."""
        with pytest.raises(ReportError, match="Cannot write CSV report"):
            export_usage_csv(tmp_path / "missing-dir" / "report.csv", ROWS)
