"""
Logging Configuration

Module-specific settings for logging.
"""
import os

# =========================
# Log Directory
# =========================

# File logging is off unless a directory is given
LOG_OUTPUT_DIR = os.getenv("LOG_OUTPUT_DIR", "")

# =========================
# File Handler Settings
# =========================

# Maximum log file size in bytes (default: 10MB)
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))

# Number of backup files to keep
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "5"))

# =========================
# Log Content Settings
# =========================

# Preview length for prompts/responses in logs
LOG_PREVIEW_LENGTH = int(os.getenv("LOG_PREVIEW_LENGTH", "200"))

# =========================
# Log Formats
# =========================

LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(request_id)-12s | "
    "%(name)-35s | %(funcName)-20s | %(message)s"
)

LOG_CONSOLE_FORMAT = "%(levelname)-4.4s %(message)s"

# =========================
# Log File Names
# =========================

LOG_FILE_MAIN = os.getenv("LOG_FILE_MAIN", "chief_summarizer.log")
LOG_FILE_ERRORS = os.getenv("LOG_FILE_ERRORS", "chief_summarizer_errors.log")
