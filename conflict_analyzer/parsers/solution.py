"""Solution (.sln) file parsing."""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from conflict_analyzer.exceptions import SolutionError

logger = logging.getLogger(__name__)

# Project("{type-guid}") = "Name", "relative\path.csproj", "{project-guid}"
PROJECT_LINE = re.compile(
    r'Project\("\{[\w-]*\}"\)\s*=\s*"[^"]*",\s*"([^"]*)",\s*"\{[\w-]*\}"'
)

PROJECT_EXTENSION = ".csproj"


def to_local_path(base_dir: Path, relative_path: str) -> Path:
    """Resolve a Windows-style relative path against a directory.

    Args:
        base_dir: Directory the path is relative to.
        relative_path: Path as written in a solution or project file.

    Returns:
        Absolute, normalized path using the local separator.
    """
    local = relative_path.replace("\\", os.sep).replace("/", os.sep)
    return Path(os.path.normpath(os.path.abspath(base_dir / local)))


def get_project_paths(solution_path: Path | str) -> list[Path]:
    """List the C# projects declared in a solution file.

    Solution folders and non-C# projects are skipped, as are entries whose
    project file does not exist.

    Args:
        solution_path: Path to the .sln file.

    Returns:
        Absolute project file paths in declaration order.

    Raises:
        SolutionError: If the solution file cannot be read.
    """
    solution = Path(solution_path)
    try:
        content = solution.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise SolutionError(f"Cannot read solution file '{solution}': {e}") from e

    solution_dir = solution.parent
    project_paths: list[Path] = []
    for match in PROJECT_LINE.finditer(content):
        full_path = to_local_path(solution_dir, match.group(1))
        if full_path.suffix.lower() != PROJECT_EXTENSION:
            continue
        if not full_path.is_file():
            logger.warning("Project listed in solution not found: %s", full_path)
            continue
        project_paths.append(full_path)

    logger.info("Found %d project(s) in %s", len(project_paths), solution)
    return project_paths
