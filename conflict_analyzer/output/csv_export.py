"""CSV export of package usage rows."""
from __future__ import annotations

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import Optional

from conflict_analyzer.constants import CSV_REPORT_PREFIX, CSV_SEPARATOR
from conflict_analyzer.exceptions import ReportError
from conflict_analyzer.models.conflict import PackageUsageRow

CSV_HEADERS = ["Package", "Version", "Dependency paths"]


def format_version_cell(version: str) -> str:
    """Wrap a version so spreadsheets keep it as text.

    Excel turns "1.10" into the number 1.1; the formula ``="1.10"`` is
    displayed verbatim instead.

    Args:
        version: Version label.

    Returns:
        The version as a text formula.
    """
    return f'="{version}"'


def format_usage_csv(rows: list[PackageUsageRow], separator: str = CSV_SEPARATOR) -> str:
    """Render usage rows as CSV text.

    Paths of one package version share a cell, one per line.

    Args:
        rows: Usage rows to render.
        separator: Field separator.

    Returns:
        CSV text including the header line.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=separator, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in rows:
        writer.writerow([row.name, format_version_cell(row.version), "\n".join(row.paths)])
    return buffer.getvalue()


def default_report_path(solution_path: Path | str, now: Optional[datetime] = None) -> Path:
    """Build the timestamped report path next to a solution file.

    Args:
        solution_path: The analyzed solution.
        now: Timestamp to use. Defaults to the current local time.

    Returns:
        Path like ``<solution dir>/packages_report_20240131_154500.csv``.
    """
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return Path(solution_path).parent / f"{CSV_REPORT_PREFIX}{stamp}.csv"


def export_usage_csv(
    path: Path | str,
    rows: list[PackageUsageRow],
    separator: str = CSV_SEPARATOR,
) -> Path:
    """Write usage rows to a CSV file.

    The file is UTF-8 with a byte order mark so spreadsheet applications
    detect the encoding.

    Args:
        path: Destination file.
        rows: Usage rows to write.
        separator: Field separator.

    Returns:
        The written path.

    Raises:
        ReportError: If the file cannot be written.
    """
    file_path = Path(path)
    try:
        file_path.write_text(format_usage_csv(rows, separator), encoding="utf-8-sig")
    except OSError as e:
        raise ReportError(f"Cannot write CSV report '{file_path}': {e}") from e
    return file_path
