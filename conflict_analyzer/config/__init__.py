"""Configuration handling for conflict-analyzer."""
from __future__ import annotations

from conflict_analyzer.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from conflict_analyzer.config.loader import (
    find_config_file,
    load_config,
    load_config_file,
)
from conflict_analyzer.models.config import AnalyzerConfig

__all__ = [
    "AnalyzerConfig",
    "DEFAULT_CONFIG_NAMES",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
]
