"""Configuration Pydantic models for conflict-analyzer."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class AnalyzerConfig(BaseModel):
    """Configuration for conflict-analyzer.

    All fields are optional with None defaults to allow partial configuration.
    Command line options take precedence over values from the file.
    """

    model_config = {"extra": "forbid"}

    cache_path: Optional[str] = Field(
        default=None,
        description="Location of the NuGet global packages folder. "
        "Defaults to $NUGET_PACKAGES or ~/.nuget/packages.",
    )
    ignored_packages: Optional[List[str]] = Field(
        default=None,
        description="Package ids or wildcard patterns whose conflicts are not reported.",
    )
    max_workers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Number of projects expanded concurrently.",
    )
    csv_separator: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=1,
        description="Field separator for CSV reports.",
    )
