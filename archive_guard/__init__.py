"""Archive Guard - validated zip extraction and creation for untrusted bundles.

Wraps external archival tools with the checks that keep their output inside a
caller-chosen directory:
* entry paths are verified before anything is extracted (zip slip)
* extracted symlinks are audited for targets outside the destination
* declared uncompressed size is reported from the archive listing

``extract`` and ``create`` are the public operations; the CLI (`archive-guard`)
is a thin wrapper around them.
"""

from .config import GuardSettings  # noqa: F401
from .errors import (  # noqa: F401
    ArchiveGuardError,
    ArchiveTimeoutError,
    ArchiveTooLargeError,
    CreationError,
    DestinationMissingError,
    ExtractionError,
    FailureKind,
    MalformedListingError,
    PathTraversalError,
    ProcessDiagnostic,
    SourceMissingError,
    SymlinkEscapeError,
    ToolMissingError,
)
from .guard import ArchiveGuard, create, extract  # noqa: F401
from .logging_config import configure_logging  # noqa: F401
from .paths import ArchiveLocation, check_containment, is_contained  # noqa: F401
from .process import ProcessResult, SubprocessInvoker  # noqa: F401

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ArchiveGuard",
    "ArchiveGuardError",
    "ArchiveLocation",
    "ArchiveTimeoutError",
    "ArchiveTooLargeError",
    "CreationError",
    "DestinationMissingError",
    "ExtractionError",
    "FailureKind",
    "GuardSettings",
    "MalformedListingError",
    "PathTraversalError",
    "ProcessDiagnostic",
    "ProcessResult",
    "SourceMissingError",
    "SubprocessInvoker",
    "SymlinkEscapeError",
    "ToolMissingError",
    "check_containment",
    "configure_logging",
    "create",
    "extract",
    "is_contained",
]
