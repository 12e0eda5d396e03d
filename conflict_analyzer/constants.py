"""Constants for conflict-analyzer."""

# Exit codes
EXIT_SUCCESS = 0  # No conflicts found
EXIT_CONFLICTS = 1  # Version conflicts found
EXIT_ERROR = 2  # Analysis failed due to error

# Separator used when joining dependency path tokens for display
PATH_SEPARATOR = " -> "

# Environment variable that relocates the NuGet global packages folder
NUGET_PACKAGES_ENV = "NUGET_PACKAGES"

# Default concurrent project expansions
DEFAULT_MAX_WORKERS = 4

# CSV export defaults
CSV_SEPARATOR = ";"
CSV_REPORT_PREFIX = "packages_report_"
