"""
Constants and exit codes for Archive Guard.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional


class ExitCodes:
    """Exit codes for different error conditions."""
    OK = 0
    DESTINATION_MISSING = 1
    SOURCE_MISSING = 2
    PATH_TRAVERSAL = 3
    SYMLINK_ESCAPE = 4
    TOOL_MISSING = 5
    EXTRACTION_ERROR = 6
    CREATION_ERROR = 7
    MALFORMED_LISTING = 8
    TIMED_OUT = 9
    ARCHIVE_TOO_LARGE = 10
    INVALID_ARGUMENT = 64
    UNEXPECTED_ERROR = 70


# Environment variable names
INSTALL_ROOT_ENV = "ARCHIVE_GUARD_INSTALL_ROOT"
EXTRACTOR_ENV = "ARCHIVE_GUARD_EXTRACTOR"
LIST_COMMAND_ENV = "ARCHIVE_GUARD_LIST_COMMAND"
ZIP_COMMAND_ENV = "ARCHIVE_GUARD_ZIP_COMMAND"
PROCESS_TIMEOUT_ENV = "ARCHIVE_GUARD_PROCESS_TIMEOUT"
MAX_TOTAL_SIZE_ENV = "ARCHIVE_GUARD_MAX_TOTAL_SIZE"
MAX_ENTRIES_ENV = "ARCHIVE_GUARD_MAX_ENTRIES"
CLEANUP_ON_FAILURE_ENV = "ARCHIVE_GUARD_CLEANUP_ON_FAILURE"
LOG_LEVEL_ENV = "ARCHIVE_GUARD_LOG_LEVEL"

# Tool defaults (Info-ZIP)
DEFAULT_EXTRACTOR_NAME = "safe_unzipper"
DEFAULT_LIST_COMMAND = "unzip"
DEFAULT_ZIP_COMMAND = "zip"
DEFAULT_PROCESS_TIMEOUT = 300

# Extractor lives at <install_root>/bin/<extractor>
EXTRACTOR_BIN_DIR = "bin"


def env_bool(key: str, default: bool = False, environ: Optional[Mapping[str, str]] = None) -> bool:
    value = (environ if environ is not None else os.environ).get(key)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_int(key: str, default: int, environ: Optional[Mapping[str, str]] = None) -> int:
    value = (environ if environ is not None else os.environ).get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default
