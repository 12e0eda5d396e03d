"""Base metadata source interface."""

from abc import ABC, abstractmethod
from typing import Optional

from conflict_analyzer.models.package import PackageMetadata


class BaseMetadataSource(ABC):
    """Abstract base class for package metadata sources.

    A metadata source answers "which packages does this exact package version
    depend on?". Sources are read-only during an analysis run and may be
    queried from several worker threads at once.
    """

    @abstractmethod
    def lookup(self, package_name: str, version: str) -> Optional[PackageMetadata]:
        """Look up the declared dependencies of a package version.

        Args:
            package_name: The package identifier.
            version: The exact package version.

        Returns:
            PackageMetadata for the package, or None if the source has no
            usable entry for it. Implementations never raise for a missing
            or unreadable entry.
        """
