"""Solution and project file parsers."""

from conflict_analyzer.parsers.project import (
    parse_project_references,
    parse_projects,
    read_project,
)
from conflict_analyzer.parsers.solution import get_project_paths, to_local_path

__all__ = [
    "get_project_paths",
    "parse_project_references",
    "parse_projects",
    "read_project",
    "to_local_path",
]
