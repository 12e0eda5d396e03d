"""Package metadata from the local NuGet global packages folder.

Restored packages live under ``<root>/<id lowercase>/<version lowercase>/``
together with their ``.nuspec`` manifest, which lists the package's own
dependencies.
"""
from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from conflict_analyzer.constants import NUGET_PACKAGES_ENV
from conflict_analyzer.exceptions import MalformedMetadataError
from conflict_analyzer.models.package import PackageDependency, PackageMetadata
from conflict_analyzer.resolvers.base import BaseMetadataSource

logger = logging.getLogger(__name__)


def default_cache_path() -> Path:
    """Locate the NuGet global packages folder.

    Honors the NUGET_PACKAGES environment variable, otherwise falls back to
    ``~/.nuget/packages``.

    Returns:
        Path of the packages folder (which may not exist).
    """
    override = os.environ.get(NUGET_PACKAGES_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".nuget" / "packages"


def _local_name(tag: str) -> str:
    """Strip an XML namespace from a tag name."""
    return tag.split("}", 1)[1] if "}" in tag else tag


def parse_nuspec(nuspec_path: Path, package_name: str, version: str) -> PackageMetadata:
    """Parse the dependency declarations of a .nuspec manifest.

    Dependencies inside ``<group>`` elements (one per target framework) and
    ungrouped ``<dependency>`` elements are flattened in document order.
    Declarations missing an id or version are skipped.

    Args:
        nuspec_path: Path to the manifest.
        package_name: Package id the manifest was looked up for.
        version: Package version the manifest was looked up for.

    Returns:
        PackageMetadata with the flattened dependency list.

    Raises:
        MalformedMetadataError: If the manifest cannot be read or parsed.
    """
    try:
        root = ET.parse(nuspec_path).getroot()
    except (ET.ParseError, OSError) as e:
        raise MalformedMetadataError(
            f"Cannot parse manifest '{nuspec_path}' for {package_name} {version}: {e}"
        ) from e

    for elem in root.iter():
        if isinstance(elem.tag, str):
            elem.tag = _local_name(elem.tag)

    dependencies: list[PackageDependency] = []
    for deps_elem in root.iter("dependencies"):
        for child in deps_elem:
            if child.tag == "group":
                for dep_elem in child.findall("dependency"):
                    _append_dependency(dep_elem, dependencies)
            elif child.tag == "dependency":
                _append_dependency(child, dependencies)

    manifest_id = root.findtext("metadata/id") or package_name
    manifest_version = root.findtext("metadata/version") or version
    return PackageMetadata(
        id=manifest_id.strip(),
        version=manifest_version.strip(),
        dependencies=dependencies,
    )


def _append_dependency(elem: ET.Element, dependencies: list[PackageDependency]) -> None:
    dep_id = elem.get("id")
    dep_version = elem.get("version")
    if dep_id and dep_version:
        dependencies.append(PackageDependency(id=dep_id, version_range=dep_version))


class NuGetCacheSource(BaseMetadataSource):
    """Metadata source backed by the NuGet global packages folder."""

    def __init__(self, cache_path: Optional[Path | str] = None) -> None:
        """Initialize the source.

        Args:
            cache_path: Packages folder. Defaults to default_cache_path().
        """
        self._root = Path(cache_path).expanduser() if cache_path else default_cache_path()
        if not self._root.is_dir():
            logger.warning(
                "NuGet package cache not found at %s; "
                "transitive dependency analysis may be incomplete.",
                self._root,
            )

    @property
    def root(self) -> Path:
        """The packages folder this source reads from."""
        return self._root

    def lookup(self, package_name: str, version: str) -> Optional[PackageMetadata]:
        """Look up a package's dependencies in the cache.

        Args:
            package_name: The package identifier.
            version: The exact package version.

        Returns:
            PackageMetadata, or None if the package is not cached or its
            manifest is malformed.
        """
        nuspec_path = self._find_nuspec(package_name, version)
        if nuspec_path is None:
            return None

        try:
            return parse_nuspec(nuspec_path, package_name, version)
        except MalformedMetadataError as e:
            logger.warning("%s", e)
            return None

    def _find_nuspec(self, package_name: str, version: str) -> Optional[Path]:
        """Find the manifest file for a package version.

        Args:
            package_name: The package identifier.
            version: The exact package version.

        Returns:
            Path to the .nuspec file, or None if it does not exist.
        """
        package_dir = self._root / package_name.lower() / version.lower()
        try:
            if not package_dir.is_dir():
                return None

            candidates = sorted(package_dir.glob("*.nuspec"))
            if candidates:
                return candidates[0]
        except OSError as e:
            logger.warning(
                "Error searching the package cache for %s %s: %s",
                package_name,
                version,
                e,
            )
        return None
