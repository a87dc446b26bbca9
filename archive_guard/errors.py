"""
Custom exception classes for Archive Guard.

Every failure of the extraction and creation pipelines is raised as one of the
classes below. Each carries a :class:`FailureKind`, a short message and, for
failures caused by an external tool, the captured process output.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class FailureKind(enum.Enum):
    """Taxonomy of guard failures."""

    DESTINATION_MISSING = "DestinationMissing"
    SOURCE_MISSING = "SourceMissing"
    PATH_TRAVERSAL = "PathTraversal"
    SYMLINK_ESCAPE = "SymlinkEscape"
    TOOL_MISSING = "ToolMissing"
    EXTRACTION_ERROR = "ExtractionError"
    CREATION_ERROR = "CreationError"
    MALFORMED_LISTING = "MalformedListing"
    TIMED_OUT = "TimedOut"
    ARCHIVE_TOO_LARGE = "ArchiveTooLarge"


@dataclass(frozen=True)
class ProcessDiagnostic:
    """Output captured from an external tool.

    May echo attacker-controlled path strings; meant for operators, not end users.
    """

    stdout: str
    stderr: str
    exit_code: Optional[int]

    def format(self) -> str:
        return (
            f"STDOUT: {self.stdout!r}\n"
            f"STDERR: {self.stderr!r}\n"
            f"EXIT CODE: {self.exit_code}"
        )


class ArchiveGuardError(Exception):
    """Base exception class for Archive Guard errors."""

    kind: FailureKind

    def __init__(self, message: str, diagnostic: Optional[ProcessDiagnostic] = None) -> None:
        super().__init__(message)
        self.message = message
        self.diagnostic = diagnostic

    def describe(self) -> str:
        """Message plus captured tool output, for operator logs."""
        if self.diagnostic is None:
            return self.message
        return f"{self.message}\n{self.diagnostic.format()}"


class DestinationMissingError(ArchiveGuardError):
    """Raised when the extraction destination or archive parent directory is missing."""
    kind = FailureKind.DESTINATION_MISSING


class SourceMissingError(ArchiveGuardError):
    """Raised when the directory to archive does not exist."""
    kind = FailureKind.SOURCE_MISSING


class PathTraversalError(ArchiveGuardError):
    """Raised when an archive entry path resolves outside the destination."""
    kind = FailureKind.PATH_TRAVERSAL


class SymlinkEscapeError(ArchiveGuardError):
    """Raised when an extracted symlink points outside the destination."""
    kind = FailureKind.SYMLINK_ESCAPE


class ToolMissingError(ArchiveGuardError):
    """Raised when the installation root or an archival tool is not available."""
    kind = FailureKind.TOOL_MISSING


class ExtractionError(ArchiveGuardError):
    """Raised when listing or extracting an archive exits with an error."""
    kind = FailureKind.EXTRACTION_ERROR


class CreationError(ArchiveGuardError):
    """Raised when the zip tool fails to build an archive."""
    kind = FailureKind.CREATION_ERROR


class MalformedListingError(ArchiveGuardError):
    """Raised when the archive listing output cannot be parsed."""
    kind = FailureKind.MALFORMED_LISTING


class ArchiveTimeoutError(ArchiveGuardError):
    """Raised when an external tool does not finish within the configured timeout."""
    kind = FailureKind.TIMED_OUT


class ArchiveTooLargeError(ArchiveGuardError):
    """Raised when an archive declares more bytes or entries than allowed."""
    kind = FailureKind.ARCHIVE_TOO_LARGE
