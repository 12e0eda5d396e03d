"""Custom exceptions for conflict-analyzer."""


class ConflictAnalyzerError(Exception):
    """Base exception for all conflict-analyzer errors."""

    pass


class ConfigurationError(ConflictAnalyzerError):
    """Exception raised when configuration is invalid."""

    pass


class SolutionError(ConflictAnalyzerError):
    """Exception raised when a solution file cannot be read."""

    pass


class MetadataError(ConflictAnalyzerError):
    """Exception raised when package metadata cannot be obtained."""

    pass


class MalformedMetadataError(MetadataError):
    """Exception raised when a cached package manifest cannot be parsed."""

    pass


class ReportError(ConflictAnalyzerError):
    """Exception raised when a report cannot be written."""

    pass
