"""Pydantic data models for conflict-analyzer."""

from conflict_analyzer.models.analysis import (
    AnalysisOptions,
    AnalysisResult,
    Verbosity,
)
from conflict_analyzer.models.config import AnalyzerConfig
from conflict_analyzer.models.conflict import (
    ConflictRecord,
    ConflictVersion,
    PackageUsageRow,
)
from conflict_analyzer.models.package import (
    AnalysisWarning,
    DirectPackageInfo,
    PackageDependency,
    PackageMetadata,
    PackageReference,
    ProjectInfo,
    ProjectTransitiveInfo,
    TransitivePackageInfo,
    WarningKind,
    package_token,
)

__all__ = [
    "AnalysisOptions",
    "AnalysisResult",
    "AnalysisWarning",
    "AnalyzerConfig",
    "ConflictRecord",
    "ConflictVersion",
    "DirectPackageInfo",
    "PackageDependency",
    "PackageMetadata",
    "PackageReference",
    "PackageUsageRow",
    "ProjectInfo",
    "ProjectTransitiveInfo",
    "TransitivePackageInfo",
    "Verbosity",
    "WarningKind",
    "package_token",
]
