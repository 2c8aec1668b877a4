"""Constants for license-compliance."""

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 2

# Configuration file names, in order of preference
DEFAULT_CONFIG_NAMES = [".licensed.yml", ".licensed.yaml", ".licensed.json"]

# Directory (relative to the workspace root) holding cached dependency records
DEFAULT_CACHE_PATH = ".licenses"
