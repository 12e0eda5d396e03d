"""In-memory metadata source."""
from typing import Optional

from conflict_analyzer.models.package import PackageDependency, PackageMetadata
from conflict_analyzer.resolvers.base import BaseMetadataSource


class InMemoryMetadataSource(BaseMetadataSource):
    """Metadata source backed by a dictionary.

    Useful when dependency declarations come from somewhere other than the
    NuGet cache (a lock file, a registry export) and in tests.
    """

    def __init__(
        self,
        packages: Optional[dict[tuple[str, str], list[tuple[str, str]]]] = None,
    ) -> None:
        """Initialize the source.

        Args:
            packages: Map of (name, version) to a list of
                (dependency name, dependency version range) pairs.
        """
        self._packages: dict[tuple[str, str], PackageMetadata] = {}
        for (name, version), dependencies in (packages or {}).items():
            self.add(name, version, dependencies)

    def add(self, name: str, version: str, dependencies: list[tuple[str, str]]) -> None:
        """Register a package version and its dependencies.

        Args:
            name: Package identifier.
            version: Package version.
            dependencies: (dependency name, version range) pairs.
        """
        self._packages[(name.lower(), version.lower())] = PackageMetadata(
            id=name,
            version=version,
            dependencies=[
                PackageDependency(id=dep_name, version_range=dep_range)
                for dep_name, dep_range in dependencies
            ],
        )

    def lookup(self, package_name: str, version: str) -> Optional[PackageMetadata]:
        """Look up a registered package version (case-insensitive)."""
        return self._packages.get((package_name.lower(), version.lower()))
