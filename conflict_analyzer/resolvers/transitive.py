"""Transitive package resolution.

Provides TransitiveResolver, which walks package metadata depth-first to
discover every package a direct reference pulls in, recording the path
through which each one was reached. Cycles are broken by never revisiting a
package that is already on the current path.
"""
import logging
from typing import Optional

from conflict_analyzer.analysis.versions import normalize_version
from conflict_analyzer.constants import PATH_SEPARATOR
from conflict_analyzer.models.package import (
    AnalysisWarning,
    DirectPackageInfo,
    PackageMetadata,
    PackageReference,
    ProjectInfo,
    ProjectTransitiveInfo,
    TransitivePackageInfo,
    WarningKind,
    package_token,
)
from conflict_analyzer.resolvers.base import BaseMetadataSource

logger = logging.getLogger(__name__)


class TransitiveResolver:
    """Expands direct package references into their transitive closure.

    The resolver holds no per-run state: every call works on its own path
    copies and warning list, so one resolver can serve several projects
    concurrently as long as the metadata source supports concurrent reads.
    """

    def __init__(self, source: BaseMetadataSource) -> None:
        """Initialize resolver with a metadata source.

        Args:
            source: Where package dependency declarations are looked up.
        """
        self._source = source

    def expand(
        self,
        package_name: str,
        package_version: str,
        ancestor_path: Optional[list[str]] = None,
        warnings: Optional[list[AnalysisWarning]] = None,
    ) -> list[TransitivePackageInfo]:
        """Discover all packages reachable from one package version.

        A package's own dependencies are listed together, followed by the
        expansion of each of them in turn. Expansion is unbounded in depth;
        it terminates because a package already on the current path is
        never visited again.

        Args:
            package_name: Package to expand.
            package_version: Exact version of the package.
            ancestor_path: "name version" tokens from the seed package down
                to this package. The package's own token is expected last and
                is appended when missing. Defaults to just this package.
            warnings: Optional list collecting packages whose metadata was
                not found.

        Returns:
            TransitivePackageInfo for every reachable package, each carrying
            the path that produced it. Empty when the package is on its own
            ancestor path or has no metadata.
        """
        token = package_token(package_name, package_version)
        path = list(ancestor_path) if ancestor_path else []
        if not path or path[-1] != token:
            path.append(token)

        if token in path[:-1]:
            logger.debug("Skipping cycle at %s", PATH_SEPARATOR.join(path))
            return []

        metadata = self._source.lookup(package_name, package_version)
        if metadata is None:
            self._record_missing(package_name, package_version, warnings)
            return []

        children = self._collect_children(metadata, path)
        result = list(children)
        for child in children:
            result.extend(
                self.expand(child.name, child.version, child.dependency_path, warnings)
            )
        return result

    def _collect_children(
        self,
        metadata: PackageMetadata,
        path: list[str],
    ) -> list[TransitivePackageInfo]:
        """Build the immediate dependencies of a package.

        Args:
            metadata: Metadata of the package being expanded.
            path: Path from the seed package to the package being expanded.

        Returns:
            One TransitivePackageInfo per distinct dependency that is not
            already on the path.
        """
        children: list[TransitivePackageInfo] = []
        seen: set[str] = set()
        for dependency in metadata.dependencies:
            clean_version = normalize_version(dependency.version_range)
            child_token = package_token(dependency.id, clean_version)

            if child_token in path:
                logger.debug(
                    "Pruning circular dependency %s -> %s",
                    PATH_SEPARATOR.join(path),
                    child_token,
                )
                continue
            # The same dependency declared for several target frameworks
            if child_token in seen:
                continue
            seen.add(child_token)

            children.append(
                TransitivePackageInfo(
                    name=dependency.id,
                    version=clean_version,
                    dependency_path=path + [child_token],
                )
            )
        return children

    @staticmethod
    def _record_missing(
        package_name: str,
        package_version: str,
        warnings: Optional[list[AnalysisWarning]],
    ) -> None:
        message = (
            f"No package metadata found for {package_name} {package_version}; "
            "its dependencies were not analyzed"
        )
        logger.warning("%s", message)
        if warnings is not None:
            warnings.append(
                AnalysisWarning(
                    kind=WarningKind.MISSING_METADATA,
                    message=message,
                    package_name=package_name,
                    package_version=package_version,
                )
            )

    def enrich_project(self, project: ProjectInfo) -> ProjectInfo:
        """Add transitive references to a project's package set.

        Every package reached more than once (or both directly and
        transitively) is listed once; the extra paths are kept in
        ``package_paths``.

        Args:
            project: Project whose direct references are expanded.

        Returns:
            New ProjectInfo whose references are the direct ones followed
            by the newly discovered transitive ones.
        """
        direct = project.direct_references
        warnings: list[AnalysisWarning] = list(project.warnings)
        existing: dict[tuple[str, str], set[str]] = {}
        for ref in direct:
            existing.setdefault(ref.key, set()).add(ref.token)

        transitive: list[PackageReference] = []
        for ref in direct:
            found = self._expand_safely(ref, project.project_path, warnings)
            for dependency in found:
                path_display = dependency.get_path_display()
                if dependency.key in existing:
                    existing[dependency.key].add(path_display)
                    continue

                transitive.append(
                    PackageReference(
                        name=dependency.name,
                        version=dependency.version,
                        is_transitive=True,
                        origin_path=path_display,
                    )
                )
                existing[dependency.key] = {path_display}

        return ProjectInfo(
            project_path=project.project_path,
            package_references=direct + transitive,
            project_references=list(project.project_references),
            package_paths={
                package_token(name, version): sorted(labels)
                for (name, version), labels in existing.items()
            },
            warnings=unique_warnings(warnings),
        )

    def analyze_project(self, project: ProjectInfo) -> ProjectTransitiveInfo:
        """Expand each direct reference of a project separately.

        Args:
            project: Project to analyze.

        Returns:
            ProjectTransitiveInfo with one DirectPackageInfo per direct
            reference.
        """
        warnings: list[AnalysisWarning] = []
        direct_packages: list[DirectPackageInfo] = []
        for ref in project.direct_references:
            direct_packages.append(
                DirectPackageInfo(
                    name=ref.name,
                    version=ref.version,
                    transitive_packages=self._expand_safely(
                        ref, project.project_path, warnings
                    ),
                )
            )

        return ProjectTransitiveInfo(
            project_path=project.project_path,
            direct_packages=direct_packages,
            warnings=unique_warnings(warnings),
        )

    def _expand_safely(
        self,
        ref: PackageReference,
        project_path: str,
        warnings: list[AnalysisWarning],
    ) -> list[TransitivePackageInfo]:
        """Expand a direct reference, containing any failure to that reference.

        Args:
            ref: Direct package reference.
            project_path: Project the reference belongs to.
            warnings: List collecting problems.

        Returns:
            Expansion result, or an empty list if expansion failed.
        """
        try:
            return self.expand(ref.name, ref.version, [ref.token], warnings)
        except Exception as e:  # noqa: BLE001
            message = (
                f"Error resolving transitive dependencies for "
                f"{ref.name} {ref.version}: {e}"
            )
            logger.warning("%s", message)
            warnings.append(
                AnalysisWarning(
                    kind=WarningKind.EXPANSION_FAILED,
                    message=message,
                    package_name=ref.name,
                    package_version=ref.version,
                    project_path=project_path,
                )
            )
            return []


def unique_warnings(warnings: list[AnalysisWarning]) -> list[AnalysisWarning]:
    """Drop repeated warnings, keeping first occurrences in order.

    Args:
        warnings: Warnings possibly reported several times.

    Returns:
        Warnings with duplicates removed.
    """
    seen: set[tuple[object, ...]] = set()
    result: list[AnalysisWarning] = []
    for warning in warnings:
        key = (
            warning.kind,
            warning.package_name,
            warning.package_version,
            warning.project_path,
        )
        if key in seen:
            continue
        seen.add(key)
        result.append(warning)
    return result
