"""Conflict analysis logic for conflict-analyzer."""
from conflict_analyzer.analysis.conflicts import (
    aggregate_conflicts,
    aggregate_transitive_conflicts,
    build_conflicts,
)
from conflict_analyzer.analysis.filtering import (
    FilterResult,
    filter_ignored_conflicts,
    is_ignored,
)
from conflict_analyzer.analysis.usage import build_usage_rows
from conflict_analyzer.analysis.versions import normalize_version, version_sort_key

__all__ = [
    "FilterResult",
    "aggregate_conflicts",
    "aggregate_transitive_conflicts",
    "build_conflicts",
    "build_usage_rows",
    "filter_ignored_conflicts",
    "is_ignored",
    "normalize_version",
    "version_sort_key",
]
