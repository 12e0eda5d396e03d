"""Package and project models for conflict-analyzer.

Provides data structures for direct and transitive package references,
the per-project package sets consumed by conflict aggregation, and the
package metadata returned by metadata sources.
"""

from enum import Enum
from pathlib import PureWindowsPath
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from conflict_analyzer.constants import PATH_SEPARATOR


def package_token(name: str, version: str) -> str:
    """Build the "name version" token used in dependency paths and labels.

    Args:
        name: Package name.
        version: Package version.

    Returns:
        Token string like "Newtonsoft.Json 13.0.1".
    """
    return f"{name} {version}"


class WarningKind(Enum):
    """Kinds of non-fatal problems recorded during analysis."""

    MISSING_METADATA = "missing_metadata"
    EXPANSION_FAILED = "expansion_failed"
    PROJECT_NOT_FOUND = "project_not_found"
    MALFORMED_PROJECT = "malformed_project"


class AnalysisWarning(BaseModel):
    """A non-fatal problem that left part of the analysis incomplete."""

    kind: WarningKind = Field(description="Category of the problem")
    message: str = Field(description="Human-readable description")
    package_name: Optional[str] = Field(
        default=None,
        description="Package affected, when the problem concerns a package",
    )
    package_version: Optional[str] = Field(
        default=None,
        description="Version of the affected package",
    )
    project_path: Optional[str] = Field(
        default=None,
        description="Project affected, when the problem concerns a project",
    )

    model_config = {"extra": "forbid"}


class PackageReference(BaseModel):
    """A package used by a project, either declared directly or pulled in."""

    name: str = Field(description="Package identifier")
    version: str = Field(description="Package version as declared or normalized")
    is_transitive: bool = Field(
        default=False,
        description="True if the package was reached through another package",
    )
    origin_path: Optional[str] = Field(
        default=None,
        description="Dependency chain like 'A 1.0 -> B 2.0' (transitive only)",
    )

    model_config = {"extra": "forbid"}

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the reference: (name, version)."""
        return (self.name, self.version)

    @property
    def token(self) -> str:
        """The "name version" token for this reference."""
        return package_token(self.name, self.version)


class TransitivePackageInfo(BaseModel):
    """A transitive package discovered during expansion, with its path."""

    name: str = Field(description="Package identifier")
    version: str = Field(description="Normalized package version")
    dependency_path: list[str] = Field(
        default_factory=list,
        description="'name version' tokens from the seed package to this one",
    )

    model_config = {"extra": "forbid"}

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the package: (name, version)."""
        return (self.name, self.version)

    def get_path_display(self) -> str:
        """Get the dependency path joined for display.

        Returns:
            String like "Alpha 1.0 -> Beta 2.0".
        """
        return PATH_SEPARATOR.join(self.dependency_path)


class ProjectInfo(BaseModel):
    """A project and the packages it uses (its package set).

    Before enrichment ``package_references`` holds only direct references;
    after enrichment direct references are followed by transitive ones.
    """

    project_path: str = Field(description="Path of the project file")
    package_references: list[PackageReference] = Field(
        default_factory=list,
        description="Direct references followed by discovered transitive ones",
    )
    project_references: list[str] = Field(
        default_factory=list,
        description="Raw project-to-project reference paths",
    )
    package_paths: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Map of 'name version' token to every path reaching it",
    )
    warnings: list[AnalysisWarning] = Field(
        default_factory=list,
        description="Non-fatal problems found while analyzing this project",
    )

    model_config = {"extra": "forbid"}

    @property
    def name(self) -> str:
        """Project name (the project file name without extension)."""
        return PureWindowsPath(self.project_path).stem

    @property
    def direct_references(self) -> list[PackageReference]:
        """References declared directly by the project."""
        return [ref for ref in self.package_references if not ref.is_transitive]

    @property
    def transitive_references(self) -> list[PackageReference]:
        """References discovered through other packages."""
        return [ref for ref in self.package_references if ref.is_transitive]

    def get_unique_references(self) -> list[PackageReference]:
        """Get references de-duplicated by (name, version).

        The first occurrence wins, so a package that is both direct and
        transitive is reported as direct.

        Returns:
            List of references in original order without duplicates.
        """
        seen: set[tuple[str, str]] = set()
        result: list[PackageReference] = []
        for ref in self.package_references:
            if ref.key in seen:
                continue
            seen.add(ref.key)
            result.append(ref)
        return result


class DirectPackageInfo(BaseModel):
    """A direct package together with everything it pulls in."""

    name: str = Field(description="Package identifier")
    version: str = Field(description="Declared package version")
    transitive_packages: list[TransitivePackageInfo] = Field(
        default_factory=list,
        description="Transitive closure of this package",
    )

    model_config = {"extra": "forbid"}


class ProjectTransitiveInfo(BaseModel):
    """Per-direct-package transitive analysis of one project."""

    project_path: str = Field(description="Path of the project file")
    direct_packages: list[DirectPackageInfo] = Field(
        default_factory=list,
        description="Direct packages with their transitive closures",
    )
    warnings: list[AnalysisWarning] = Field(
        default_factory=list,
        description="Non-fatal problems found while expanding this project",
    )

    model_config = {"extra": "forbid"}

    @property
    def name(self) -> str:
        """Project name (the project file name without extension)."""
        return PureWindowsPath(self.project_path).stem


class PackageDependency(BaseModel):
    """One dependency declared in a package manifest."""

    id: str = Field(description="Dependency package identifier")
    version_range: str = Field(description="Raw version or version range")

    model_config = {"extra": "forbid"}


class PackageMetadata(BaseModel):
    """Declared dependencies of one package version.

    Dependencies from all framework groups and ungrouped declarations are
    flattened in document order; duplicates across groups are kept.
    """

    id: str = Field(description="Package identifier")
    version: str = Field(description="Package version")
    dependencies: list[PackageDependency] = Field(
        default_factory=list,
        description="Flattened dependency declarations",
    )

    model_config = {"extra": "forbid"}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_dependencies(self) -> bool:
        """True if the package declares any dependency."""
        return len(self.dependencies) > 0
