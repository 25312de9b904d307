# src/codesum/config.py

VERSION = "0.1.0"

LOGGER_NAME = "codesum"

# Environment overrides read by the CLI
LOG_LEVEL_ENV = "CODESUM_LOG"
MAX_WORKERS_ENV = "CODESUM_MAX_WORKERS"

DEFAULT_LOG_LEVEL = "WARNING"

# Upper bound on concurrent file reads; None means one task per file
DEFAULT_MAX_WORKERS = 32

# Per-directory ignore files, applied in this order (later files win)
DEFAULT_IGNORE_FILENAMES = (
    ".gitignore",
    ".ignore",
)

GIT_DIR_NAME = ".git"
GIT_EXCLUDE_FILE = ("info", "exclude")
