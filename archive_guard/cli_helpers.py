"""Shared CLI helpers for archive-guard commands."""

import sys

from archive_guard.constants import ExitCodes
from archive_guard.errors import ArchiveGuardError, FailureKind

_EXIT_CODES = {
    FailureKind.DESTINATION_MISSING: ExitCodes.DESTINATION_MISSING,
    FailureKind.SOURCE_MISSING: ExitCodes.SOURCE_MISSING,
    FailureKind.PATH_TRAVERSAL: ExitCodes.PATH_TRAVERSAL,
    FailureKind.SYMLINK_ESCAPE: ExitCodes.SYMLINK_ESCAPE,
    FailureKind.TOOL_MISSING: ExitCodes.TOOL_MISSING,
    FailureKind.EXTRACTION_ERROR: ExitCodes.EXTRACTION_ERROR,
    FailureKind.CREATION_ERROR: ExitCodes.CREATION_ERROR,
    FailureKind.MALFORMED_LISTING: ExitCodes.MALFORMED_LISTING,
    FailureKind.TIMED_OUT: ExitCodes.TIMED_OUT,
    FailureKind.ARCHIVE_TOO_LARGE: ExitCodes.ARCHIVE_TOO_LARGE,
}


def exit_with_error(message: str, exit_code: int) -> None:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def map_exception_to_exit_code(exc: Exception) -> int:
    """Translate guard exceptions to archive-guard exit codes."""
    if isinstance(exc, ArchiveGuardError):
        return _EXIT_CODES[exc.kind]
    if isinstance(exc, ValueError):
        return ExitCodes.INVALID_ARGUMENT
    return ExitCodes.UNEXPECTED_ERROR
