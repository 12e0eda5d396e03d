"""Package metadata sources and transitive resolution."""

from conflict_analyzer.resolvers.base import BaseMetadataSource
from conflict_analyzer.resolvers.memory import InMemoryMetadataSource
from conflict_analyzer.resolvers.nuget_cache import (
    NuGetCacheSource,
    default_cache_path,
    parse_nuspec,
)
from conflict_analyzer.resolvers.transitive import TransitiveResolver, unique_warnings

__all__ = [
    "BaseMetadataSource",
    "InMemoryMetadataSource",
    "NuGetCacheSource",
    "TransitiveResolver",
    "default_cache_path",
    "parse_nuspec",
    "unique_warnings",
]
