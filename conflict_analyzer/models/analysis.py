"""Analysis run models."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, computed_field

from conflict_analyzer.models.conflict import ConflictRecord
from conflict_analyzer.models.package import AnalysisWarning


class Verbosity(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class AnalysisOptions(BaseModel):
    """Options for a conflict analysis run."""

    model_config = {"extra": "forbid"}

    format: Literal["terminal", "text", "markdown", "json"] = Field(
        default="terminal",
        description="Output format for the conflict report",
    )
    verbosity: Verbosity = Field(
        default=Verbosity.NORMAL,
        description="Output verbosity level (quiet, normal, verbose)",
    )


class AnalysisResult(BaseModel):
    """Outcome of analyzing one solution."""

    model_config = {"extra": "forbid"}

    solution_path: str = Field(description="Analyzed solution file")
    mode: Literal["solution", "transitive"] = Field(
        default="solution",
        description="'solution' for whole-solution conflicts, "
        "'transitive' for conflicts between direct packages' closures",
    )
    total_projects: int = Field(default=0, ge=0, description="Projects analyzed")
    total_packages: int = Field(
        default=0,
        ge=0,
        description="Distinct (name, version) pairs across all projects",
    )
    conflicts: list[ConflictRecord] = Field(
        default_factory=list,
        description="Packages observed at more than one version",
    )
    warnings: list[AnalysisWarning] = Field(
        default_factory=list,
        description="Non-fatal problems that left the analysis incomplete",
    )
    ignored_count: int = Field(
        default=0,
        ge=0,
        description="Conflicts suppressed by the ignored_packages setting",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_conflicts(self) -> bool:
        """True if any version conflict was found."""
        return len(self.conflicts) > 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_complete(self) -> bool:
        """True if no warnings were recorded during analysis."""
        return len(self.warnings) == 0
