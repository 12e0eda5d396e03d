"""Fixed-width text table rendering."""
from typing import NamedTuple

from conflict_analyzer.models.conflict import PackageUsageRow


class Column(NamedTuple):
    """A table column: its header and its width in characters."""

    header: str
    width: int


ELLIPSIS = "..."


def _fit(value: str, width: int) -> str:
    if len(value) > width:
        value = value[: max(width - len(ELLIPSIS), 0)] + ELLIPSIS
    return value.ljust(width)


def format_table(columns: list[Column], rows: list[list[str]]) -> str:
    """Render rows as a fixed-width table.

    Cells longer than their column are truncated and end in "...". Rows with
    fewer cells than columns are padded with blanks.

    Args:
        columns: Column definitions.
        rows: Cell values per row.

    Returns:
        The table, framed by dashed separator lines.
    """
    separator = "-" * (sum(col.width + 2 for col in columns) + 1)
    lines = [separator]
    lines.append("".join(f"| {_fit(col.header, col.width)}" for col in columns) + "|")
    lines.append(separator)
    for row in rows:
        cells = [
            _fit(row[i] if i < len(row) else "", col.width)
            for i, col in enumerate(columns)
        ]
        lines.append("".join(f"| {cell}" for cell in cells) + "|")
    lines.append(separator)
    return "\n".join(lines) + "\n"


USAGE_COLUMNS = [
    Column("Package", 40),
    Column("Version", 15),
    Column("Dependency path", 80),
]


def format_usage_table(rows: list[PackageUsageRow]) -> str:
    """Render package usage rows as a fixed-width table.

    Each dependency path gets its own line; package and version are shown
    on the first line of their group only.

    Args:
        rows: Usage rows to render.

    Returns:
        The rendered table.
    """
    table_rows: list[list[str]] = []
    for row in rows:
        for index, path in enumerate(row.paths or [""]):
            if index == 0:
                table_rows.append([row.name, row.version, path])
            else:
                table_rows.append(["", "", path])
    return format_table(USAGE_COLUMNS, table_rows)
