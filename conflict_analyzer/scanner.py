"""Scanner module tying project discovery, transitive expansion and conflict analysis."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple, Optional, TypeVar

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from conflict_analyzer.analysis.conflicts import (
    aggregate_conflicts,
    aggregate_transitive_conflicts,
)
from conflict_analyzer.analysis.filtering import filter_ignored_conflicts
from conflict_analyzer.constants import DEFAULT_MAX_WORKERS
from conflict_analyzer.models.analysis import AnalysisResult
from conflict_analyzer.models.config import AnalyzerConfig
from conflict_analyzer.models.package import (
    AnalysisWarning,
    ProjectInfo,
    ProjectTransitiveInfo,
    WarningKind,
)
from conflict_analyzer.parsers.project import parse_projects
from conflict_analyzer.parsers.solution import get_project_paths
from conflict_analyzer.resolvers.base import BaseMetadataSource
from conflict_analyzer.resolvers.nuget_cache import NuGetCacheSource
from conflict_analyzer.resolvers.transitive import TransitiveResolver, unique_warnings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SolutionAnalysis(NamedTuple):
    """Whole-solution analysis output.

    Attributes:
        result: Conflict findings and summary counts.
        projects: Enriched project package sets (for usage reports).
    """

    result: AnalysisResult
    projects: list[ProjectInfo]


def discover_projects(
    solution_path: Path | str,
    warnings: Optional[list[AnalysisWarning]] = None,
) -> list[ProjectInfo]:
    """Discover the projects of a solution and the projects they reference.

    Args:
        solution_path: Path to the .sln file.
        warnings: Optional list collecting skipped projects.

    Returns:
        One ProjectInfo per distinct project, with direct references only.

    Raises:
        SolutionError: If the solution file cannot be read.
    """
    return parse_projects(get_project_paths(solution_path), warnings)


def create_metadata_source(
    config: AnalyzerConfig,
    cache_path: Optional[str] = None,
) -> NuGetCacheSource:
    """Create the metadata source for a run.

    Args:
        config: Loaded configuration.
        cache_path: Cache location from the command line; takes precedence
            over the configuration file.

    Returns:
        NuGetCacheSource reading the selected packages folder.
    """
    return NuGetCacheSource(cache_path or config.cache_path)


async def process_projects(
    projects: list[ProjectInfo],
    worker: Callable[[ProjectInfo], T],
    fallback: Callable[[ProjectInfo, AnalysisWarning], T],
    max_workers: int = DEFAULT_MAX_WORKERS,
    console: Optional[Console] = None,
    show_progress: bool = True,
) -> list[T]:
    """Run a per-project worker concurrently, one worker thread per project.

    Projects do not share state, so their expansions run in parallel up to
    ``max_workers`` at a time. A project whose worker fails is replaced by
    ``fallback`` so that one project never aborts the run.

    Args:
        projects: Projects to process.
        worker: Function processing one project.
        fallback: Builds the result for a project whose worker raised.
        max_workers: Maximum concurrent workers.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show progress indicator (default: True).

    Returns:
        Worker results in the same order as ``projects``.
    """
    semaphore = asyncio.Semaphore(max(1, max_workers))

    async def process_one(idx: int, project: ProjectInfo) -> tuple[int, T]:
        async with semaphore:
            try:
                return (idx, await asyncio.to_thread(worker, project))
            except Exception as e:  # noqa: BLE001
                message = f"Error analyzing project {project.project_path}: {e}"
                logger.warning("%s", message)
                warning = AnalysisWarning(
                    kind=WarningKind.EXPANSION_FAILED,
                    message=message,
                    project_path=project.project_path,
                )
                return (idx, fallback(project, warning))

    tasks = [process_one(i, project) for i, project in enumerate(projects)]
    results: list[Optional[T]] = [None] * len(projects)

    if console is not None and show_progress and len(projects) > 0:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task_id = progress.add_task(
                f"Resolving transitive packages for {len(projects)} projects...",
                total=len(projects),
            )
            for coro in asyncio.as_completed(tasks):
                idx, result = await coro
                results[idx] = result
                progress.advance(task_id)
    else:
        for idx, result in await asyncio.gather(*tasks):
            results[idx] = result

    return [result for result in results if result is not None]


def _enrich_fallback(project: ProjectInfo, warning: AnalysisWarning) -> ProjectInfo:
    return project.model_copy(update={"warnings": [*project.warnings, warning]})


def _transitive_fallback(
    project: ProjectInfo, warning: AnalysisWarning
) -> ProjectTransitiveInfo:
    return ProjectTransitiveInfo(project_path=project.project_path, warnings=[warning])


async def enrich_projects(
    projects: list[ProjectInfo],
    source: BaseMetadataSource,
    max_workers: int = DEFAULT_MAX_WORKERS,
    console: Optional[Console] = None,
    show_progress: bool = True,
) -> list[ProjectInfo]:
    """Add transitive references to every project.

    Args:
        projects: Projects with direct references.
        source: Metadata source shared by all workers.
        max_workers: Maximum projects expanded concurrently.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show progress indicator (default: True).

    Returns:
        Enriched projects in input order.
    """
    resolver = TransitiveResolver(source)
    return await process_projects(
        projects,
        resolver.enrich_project,
        _enrich_fallback,
        max_workers=max_workers,
        console=console,
        show_progress=show_progress,
    )


def _count_packages(projects: list[ProjectInfo]) -> int:
    return len({ref.key for project in projects for ref in project.package_references})


async def analyze_solution(
    solution_path: Path | str,
    config: AnalyzerConfig,
    source: BaseMetadataSource,
    max_workers: Optional[int] = None,
    console: Optional[Console] = None,
    show_progress: bool = True,
) -> SolutionAnalysis:
    """Find package version conflicts across a whole solution.

    Args:
        solution_path: Path to the .sln file.
        config: Configuration (ignored packages, worker count).
        source: Metadata source for transitive expansion.
        max_workers: Concurrent project expansions; overrides the config.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show progress indicator (default: True).

    Returns:
        SolutionAnalysis with the result and the enriched projects.

    Raises:
        SolutionError: If the solution file cannot be read.
    """
    warnings: list[AnalysisWarning] = []
    projects = discover_projects(solution_path, warnings)
    if not projects:
        logger.info("No projects to analyze in %s", solution_path)

    enriched = await enrich_projects(
        projects,
        source,
        max_workers=max_workers or config.max_workers or DEFAULT_MAX_WORKERS,
        console=console,
        show_progress=show_progress,
    )
    for project in enriched:
        warnings.extend(project.warnings)

    filter_result = filter_ignored_conflicts(aggregate_conflicts(enriched), config)
    result = AnalysisResult(
        solution_path=str(solution_path),
        mode="solution",
        total_projects=len(enriched),
        total_packages=_count_packages(enriched),
        conflicts=filter_result.conflicts,
        warnings=unique_warnings(warnings),
        ignored_count=filter_result.ignored_count,
    )
    return SolutionAnalysis(result=result, projects=enriched)


async def analyze_solution_transitive(
    solution_path: Path | str,
    config: AnalyzerConfig,
    source: BaseMetadataSource,
    max_workers: Optional[int] = None,
    console: Optional[Console] = None,
    show_progress: bool = True,
) -> AnalysisResult:
    """Find transitive packages pulled in at different versions.

    Unlike analyze_solution, only transitive packages are compared, and each
    version is attributed to the direct package that pulled it in.

    Args:
        solution_path: Path to the .sln file.
        config: Configuration (ignored packages, worker count).
        source: Metadata source for transitive expansion.
        max_workers: Concurrent project expansions; overrides the config.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show progress indicator (default: True).

    Returns:
        AnalysisResult in "transitive" mode.

    Raises:
        SolutionError: If the solution file cannot be read.
    """
    warnings: list[AnalysisWarning] = []
    projects = discover_projects(solution_path, warnings)

    resolver = TransitiveResolver(source)
    infos = await process_projects(
        projects,
        resolver.analyze_project,
        _transitive_fallback,
        max_workers=max_workers or config.max_workers or DEFAULT_MAX_WORKERS,
        console=console,
        show_progress=show_progress,
    )
    for info in infos:
        warnings.extend(info.warnings)

    total_packages = len({
        transitive.key
        for info in infos
        for direct in info.direct_packages
        for transitive in direct.transitive_packages
    })
    filter_result = filter_ignored_conflicts(aggregate_transitive_conflicts(infos), config)
    return AnalysisResult(
        solution_path=str(solution_path),
        mode="transitive",
        total_projects=len(infos),
        total_packages=total_packages,
        conflicts=filter_result.conflicts,
        warnings=unique_warnings(warnings),
        ignored_count=filter_result.ignored_count,
    )
