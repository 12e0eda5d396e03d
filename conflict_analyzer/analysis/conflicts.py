"""Package version conflict detection.

Groups package usage by name and version across a solution and reports
every package observed at more than one version.
"""
from collections.abc import Iterable

from conflict_analyzer.analysis.versions import version_sort_key
from conflict_analyzer.models.conflict import ConflictRecord, ConflictVersion
from conflict_analyzer.models.package import (
    ProjectInfo,
    ProjectTransitiveInfo,
    package_token,
)

# package name -> version -> labels of whoever uses that version
UsageMap = dict[str, dict[str, set[str]]]


def _add_usage(usage: UsageMap, name: str, version: str, label: str) -> None:
    usage.setdefault(name, {}).setdefault(version, set()).add(label)


def build_conflicts(usage: UsageMap) -> list[ConflictRecord]:
    """Turn grouped usage into conflict records.

    Only packages with two or more distinct versions produce a record.
    Records are sorted by package name, versions by version order and
    labels alphabetically, so output is stable for a given input.

    Args:
        usage: Mapping of package name to version to labels.

    Returns:
        List of ConflictRecord.
    """
    conflicts: list[ConflictRecord] = []
    for name in sorted(usage, key=str.lower):
        versions = usage[name]
        if len(versions) < 2:
            continue
        conflicts.append(
            ConflictRecord(
                package_name=name,
                versions=[
                    ConflictVersion(version=version, sources=sorted(versions[version]))
                    for version in sorted(versions, key=version_sort_key)
                ],
            )
        )
    return conflicts


def aggregate_conflicts(projects: Iterable[ProjectInfo]) -> list[ConflictRecord]:
    """Find packages used at different versions across projects.

    Each usage is labelled with the project name for direct references, or
    ``"Project (via A 1.0 -> B 2.0)"`` for transitive ones.

    Args:
        projects: Project package sets, typically after enrichment.

    Returns:
        One ConflictRecord per package observed at several versions.
    """
    usage: UsageMap = {}
    for project in projects:
        project_name = project.name
        for ref in project.get_unique_references():
            if ref.is_transitive:
                label = f"{project_name} (via {ref.origin_path})"
            else:
                label = project_name
            _add_usage(usage, ref.name, ref.version, label)
    return build_conflicts(usage)


def aggregate_transitive_conflicts(
    projects: Iterable[ProjectTransitiveInfo],
) -> list[ConflictRecord]:
    """Find transitive packages pulled in at different versions.

    Only transitive packages are considered. Each usage is labelled with
    the "name version" of the direct package that pulled it in.

    Args:
        projects: Per-direct-package transitive analysis of each project.

    Returns:
        One ConflictRecord per transitive package observed at several versions.
    """
    usage: UsageMap = {}
    for project in projects:
        for direct in project.direct_packages:
            label = package_token(direct.name, direct.version)
            for transitive in direct.transitive_packages:
                _add_usage(usage, transitive.name, transitive.version, label)
    return build_conflicts(usage)
