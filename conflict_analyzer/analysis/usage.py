"""Package usage report rows.

Builds one row per package version with every way the solution uses it,
for the CSV and table reports.
"""
from collections.abc import Iterable

from conflict_analyzer.constants import PATH_SEPARATOR
from conflict_analyzer.models.conflict import PackageUsageRow
from conflict_analyzer.models.package import PackageReference, ProjectInfo


def _usage_paths(project: ProjectInfo, ref: PackageReference) -> list[str]:
    """Describe how a project uses one package version.

    Args:
        project: The owning project.
        ref: One of the project's references.

    Returns:
        The project name for direct use, "Project -> A 1.0 -> B 2.0" for each
        transitive path.
    """
    labels = project.package_paths.get(ref.token)
    if not labels:
        if ref.is_transitive and ref.origin_path:
            return [f"{project.name}{PATH_SEPARATOR}{ref.origin_path}"]
        return [project.name]

    paths: list[str] = []
    for label in labels:
        if label == ref.token:
            paths.append(project.name)
        else:
            paths.append(f"{project.name}{PATH_SEPARATOR}{label}")
    return paths


def build_usage_rows(projects: Iterable[ProjectInfo]) -> list[PackageUsageRow]:
    """Collect every package version used in the solution.

    Rows are ordered by "name:version"; within a row direct users come
    first, then transitive paths, each group sorted.

    Args:
        projects: Project package sets, typically after enrichment.

    Returns:
        List of PackageUsageRow.
    """
    usage: dict[tuple[str, str], set[str]] = {}
    for project in projects:
        for ref in project.get_unique_references():
            usage.setdefault(ref.key, set()).update(_usage_paths(project, ref))

    rows: list[PackageUsageRow] = []
    for name, version in sorted(usage, key=lambda key: f"{key[0]}:{key[1]}"):
        paths = sorted(
            usage[(name, version)],
            key=lambda path: (PATH_SEPARATOR in path, path),
        )
        rows.append(PackageUsageRow(name=name, version=version, paths=paths))
    return rows
