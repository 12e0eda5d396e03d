"""Conflict and usage report models for conflict-analyzer."""

from pydantic import BaseModel, Field, computed_field


class ConflictVersion(BaseModel):
    """One observed version of a conflicting package and who uses it."""

    version: str = Field(description="Observed package version")
    sources: list[str] = Field(
        default_factory=list,
        description="Sorted unique labels of the projects or paths using it",
    )

    model_config = {"extra": "forbid", "frozen": True}


class ConflictRecord(BaseModel):
    """A package observed at two or more distinct versions."""

    package_name: str = Field(description="Package identifier")
    versions: list[ConflictVersion] = Field(
        default_factory=list,
        description="Observed versions in display order",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def version_count(self) -> int:
        """Number of distinct versions observed."""
        return len(self.versions)

    def get_version_strings(self) -> list[str]:
        """Get the observed versions in display order.

        Returns:
            List of version strings.
        """
        return [entry.version for entry in self.versions]


class PackageUsageRow(BaseModel):
    """One package version and every path through which it is used."""

    name: str = Field(description="Package identifier")
    version: str = Field(description="Package version")
    paths: list[str] = Field(
        default_factory=list,
        description="Direct users first, then transitive paths, each sorted",
    )

    model_config = {"extra": "forbid"}
