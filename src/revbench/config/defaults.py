"""Default configuration values for revbench.

This module centralizes all hard-coded default values used throughout
the application, making them easy to discover and modify.
"""

# External tools
DEFAULT_TIMING_TOOL = "hyperfine"
DEFAULT_PACKAGE_MANAGER = "npm"
DEFAULT_INSTALL_ARGS = ("ci",)

# Raw result files written by the timing tool
RESULT_FILE_PREFIX = "benchmark-raw"
PROJECT_DIGEST_LENGTH = 8

# Report files written per project directory
SUMMARY_REPORT_PREFIX = "benchmark-summary"
JSON_REPORT_PREFIX = "benchmark-results"

# Plan summary
SHORT_HASH_LENGTH = 8

# Validation ranges
WARMUP_MIN = 0
RUNS_MIN = 1

# Hint shown when the timing tool cannot be spawned
TIMING_TOOL_INSTALL_HINT = (
    "hyperfine is required but not installed. "
    "Please install it (e.g., 'brew install hyperfine' on macOS, "
    "'cargo install hyperfine' elsewhere)."
)
