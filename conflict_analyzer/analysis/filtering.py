"""Suppression of conflicts the user has chosen to accept."""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import NamedTuple

from conflict_analyzer.models.config import AnalyzerConfig
from conflict_analyzer.models.conflict import ConflictRecord


class FilterResult(NamedTuple):
    """Conflicts split by the ignore list.

    Attributes:
        conflicts: Conflicts still reported.
        ignored_count: How many conflicts were suppressed.
        ignored_names: Package names of the suppressed conflicts.
    """

    conflicts: list[ConflictRecord]
    ignored_count: int
    ignored_names: list[str]


def is_ignored(package_name: str, patterns: list[str]) -> bool:
    """Check a package id against ignore patterns.

    Patterns are exact ids or shell-style wildcards such as
    ``Microsoft.Extensions.*``. NuGet ids are case-insensitive and so is
    the match.
    """
    name = package_name.lower()
    return any(fnmatchcase(name, pattern.lower()) for pattern in patterns)


def filter_ignored_conflicts(
    conflicts: list[ConflictRecord],
    config: AnalyzerConfig,
) -> FilterResult:
    """Remove conflicts whose package matches ``ignored_packages``.

    Args:
        conflicts: Conflicts in report order.
        config: Configuration holding the ignore patterns.

    Returns:
        FilterResult; order of the kept conflicts is unchanged.
    """
    patterns = config.ignored_packages or []
    kept: list[ConflictRecord] = []
    suppressed: list[str] = []
    for conflict in conflicts:
        if is_ignored(conflict.package_name, patterns):
            suppressed.append(conflict.package_name)
        else:
            kept.append(conflict)
    return FilterResult(kept, len(suppressed), suppressed)
