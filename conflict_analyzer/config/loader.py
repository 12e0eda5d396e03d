"""Configuration file discovery and loading for conflict-analyzer.

A configuration file is looked up next to the analyzed solution first, so
that a repository can carry its own settings, then in the working directory.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from conflict_analyzer.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from conflict_analyzer.exceptions import ConfigurationError
from conflict_analyzer.models.config import AnalyzerConfig

logger = logging.getLogger(__name__)


def find_config_file(search_dirs: Iterable[Path] | None = None) -> Path | None:
    """Find the first configuration file in a list of directories.

    In each directory `.conflict-analyzer.yaml` wins over `.conflict-analyzer.yml`.

    Args:
        search_dirs: Directories in priority order. Defaults to the current
            working directory only.

    Returns:
        Path of the first file found, or None.
    """
    for directory in search_dirs or [Path.cwd()]:
        for name in DEFAULT_CONFIG_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def _read_mapping(path: Path) -> dict[str, Any] | None:
    """Read a YAML file expected to hold a mapping.

    Returns:
        The mapping, or None for an empty or comment-only file.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    if data is None:
        return None
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )
    return data


def _describe_errors(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'root'}: {err['msg']}"
        for err in error.errors()
    )


def load_config_file(path: Path) -> AnalyzerConfig:
    """Load and validate a configuration file.

    A relative ``cache_path`` is taken relative to the file's own directory
    and ``~`` is expanded, so the setting means the same thing wherever the
    tool is started from.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated AnalyzerConfig.

    Raises:
        ConfigurationError: If the file cannot be read, is not a YAML
            mapping, or holds invalid settings.
    """
    data = _read_mapping(path)
    if data is None:
        return get_default_config()

    try:
        config = AnalyzerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {_describe_errors(e)}"
        ) from e

    if config.cache_path:
        cache_path = Path(config.cache_path).expanduser()
        if not cache_path.is_absolute():
            cache_path = path.parent / cache_path
        config = config.model_copy(update={"cache_path": str(cache_path)})

    logger.info("Loaded configuration from %s", path)
    return config


def load_config(
    config_path: str | None = None,
    solution_path: Path | str | None = None,
) -> AnalyzerConfig:
    """Load the configuration for a run.

    An explicit path is used as given. Otherwise the solution's directory and
    then the working directory are searched. Without any file the defaults
    apply.

    Args:
        config_path: Optional path given on the command line.
        solution_path: Solution being analyzed, if any.

    Returns:
        AnalyzerConfig with loaded or default values.

    Raises:
        ConfigurationError: If the selected file is invalid.
    """
    if config_path is not None:
        return load_config_file(Path(config_path))

    search_dirs = [Path.cwd()]
    if solution_path is not None:
        search_dirs.insert(0, Path(solution_path).parent)

    discovered = find_config_file(search_dirs)
    if discovered is None:
        return get_default_config()
    return load_config_file(discovered)
