"""Plain text conflict report."""

from conflict_analyzer.models.conflict import ConflictRecord


def generate_conflict_report(conflicts: list[ConflictRecord]) -> str:
    """Render conflicts as plain text.

    Args:
        conflicts: Conflicts to report.

    Returns:
        Multi-line report listing each package, its versions and their users.
    """
    if not conflicts:
        return "No package version conflicts found."

    lines = ["Package version conflicts found:", ""]
    for conflict in conflicts:
        lines.append(f"Package: {conflict.package_name}")
        for entry in conflict.versions:
            lines.append(f"  Version {entry.version} is used by:")
            lines.extend(f"    - {source}" for source in entry.sources)
        lines.append("")
    return "\n".join(lines)
