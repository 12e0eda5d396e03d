"""Project (.csproj) file parsing.

Reads the package and project references a project declares, following
project-to-project references so that projects outside the solution are
analyzed too.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from conflict_analyzer.models.package import (
    AnalysisWarning,
    PackageReference,
    ProjectInfo,
    WarningKind,
)
from conflict_analyzer.parsers.solution import to_local_path

logger = logging.getLogger(__name__)


def _strip_namespaces(root: ET.Element) -> None:
    for elem in root.iter():
        if isinstance(elem.tag, str) and "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]


def read_project(project_path: Path) -> ProjectInfo:
    """Read the direct references of a single project file.

    ``PackageReference`` versions may be given as a ``Version`` attribute or
    a ``<Version>`` child element. Items without ``Include`` (such as
    ``Update`` items) are skipped.

    Args:
        project_path: Path to the project file.

    Returns:
        ProjectInfo with direct package references and raw project references.

    Raises:
        ET.ParseError: If the project file is not valid XML.
        OSError: If the project file cannot be read.
    """
    root = ET.parse(project_path).getroot()
    _strip_namespaces(root)

    packages: list[PackageReference] = []
    for item in root.iter("PackageReference"):
        name = item.get("Include")
        if not name:
            continue
        version = item.get("Version")
        if version is None:
            version = item.findtext("Version") or ""
        packages.append(PackageReference(name=name.strip(), version=version.strip()))

    project_refs = [
        item.get("Include", "")
        for item in root.iter("ProjectReference")
        if item.get("Include")
    ]

    return ProjectInfo(
        project_path=str(project_path),
        package_references=packages,
        project_references=project_refs,
    )


def parse_project_references(
    project_path: Path | str,
    warnings: Optional[list[AnalysisWarning]] = None,
) -> list[ProjectInfo]:
    """Read a project and every project it references, recursively.

    Each project is read once even if referenced several times. Missing or
    unreadable projects are skipped and reported through ``warnings``.

    Args:
        project_path: Path to the starting project file.
        warnings: Optional list collecting skipped projects.

    Returns:
        ProjectInfo for the starting project followed by the projects it
        references, depth-first.
    """
    results: list[ProjectInfo] = []
    _parse_project(Path(project_path), results, set(), warnings)
    return results


def _parse_project(
    project_path: Path,
    results: list[ProjectInfo],
    processed: set[Path],
    warnings: Optional[list[AnalysisWarning]],
) -> None:
    if project_path in processed:
        return
    processed.add(project_path)

    if not project_path.is_file():
        _warn(
            warnings,
            WarningKind.PROJECT_NOT_FOUND,
            f"Referenced project not found: {project_path}",
            project_path,
        )
        return

    try:
        project = read_project(project_path)
    except (ET.ParseError, OSError) as e:
        _warn(
            warnings,
            WarningKind.MALFORMED_PROJECT,
            f"Cannot parse project file {project_path}: {e}",
            project_path,
        )
        return

    results.append(project)
    for reference in project.project_references:
        _parse_project(
            to_local_path(project_path.parent, reference),
            results,
            processed,
            warnings,
        )


def _warn(
    warnings: Optional[list[AnalysisWarning]],
    kind: WarningKind,
    message: str,
    project_path: Path,
) -> None:
    logger.warning("%s", message)
    if warnings is not None:
        warnings.append(
            AnalysisWarning(kind=kind, message=message, project_path=str(project_path))
        )


def parse_projects(
    project_paths: Iterable[Path | str],
    warnings: Optional[list[AnalysisWarning]] = None,
) -> list[ProjectInfo]:
    """Read several projects and their references, without duplicates.

    Args:
        project_paths: Starting project files, e.g. from a solution.
        warnings: Optional list collecting skipped projects.

    Returns:
        One ProjectInfo per distinct project path, first occurrence order.
    """
    seen: set[str] = set()
    projects: list[ProjectInfo] = []
    for path in project_paths:
        for project in parse_project_references(path, warnings):
            if project.project_path in seen:
                continue
            seen.add(project.project_path)
            projects.append(project)
    return projects
