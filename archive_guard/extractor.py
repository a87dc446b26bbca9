"""Extraction pipeline: validate, inspect, extract, audit, report size."""

from __future__ import annotations

import os
import shutil
from typing import FrozenSet

from .auditor import PostExtractionAuditor
from .config import GuardSettings
from .errors import (
    ArchiveTimeoutError,
    ArchiveTooLargeError,
    DestinationMissingError,
    ExtractionError,
    SymlinkEscapeError,
    ToolMissingError,
)
from .listing import ArchiveInspector, ArchiveListing, declared_total_size
from .logging_config import get_logger
from .paths import ArchiveLocation
from .process import ProcessInvoker

logger = get_logger(__name__)


def _snapshot(directory: str) -> FrozenSet[str]:
    return frozenset(os.listdir(directory))


def remove_new_entries(directory: str, before: FrozenSet[str]) -> None:
    """Remove top-level entries of `directory` that are not in `before`.

    Symlinks are unlinked, never followed.
    """
    for name in os.listdir(directory):
        if name in before:
            continue
        path = os.path.join(directory, name)
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.unlink(path)


class ArchiveExtractionRunner:
    """Runs one extraction end to end.

    Failures short-circuit in this order: destination missing, extractor
    missing, malformed listing or path traversal, size limits, extractor
    errors or timeout, symlink escape. Entry paths are checked before the
    extractor runs, so a rejected archive leaves the destination untouched.
    """

    def __init__(
        self,
        settings: GuardSettings,
        invoker: ProcessInvoker,
        inspector: ArchiveInspector | None = None,
        auditor: PostExtractionAuditor | None = None,
    ) -> None:
        self.settings = settings
        self.invoker = invoker
        self.inspector = inspector or ArchiveInspector(invoker, settings.list_command)
        self.auditor = auditor or PostExtractionAuditor()

    def resolve_extractor(self) -> str:
        """Path of the extractor binary under the installation root."""
        if not self.settings.install_root:
            raise ToolMissingError("No installation root configured for the extractor")
        extractor = self.settings.extractor_path()
        if extractor is None or not os.path.isfile(extractor):
            raise ToolMissingError("Safe unzipper does not exist")
        return extractor

    def check_limits(self, listing: ArchiveListing) -> None:
        max_entries = self.settings.max_entries
        if max_entries > 0 and len(listing.files) > max_entries:
            raise ArchiveTooLargeError(
                f"Archive lists {len(listing.files)} entries (limit {max_entries})"
            )
        max_total = self.settings.max_total_size
        if max_total > 0 and declared_total_size(listing) > max_total:
            raise ArchiveTooLargeError(
                f"Archive declares {declared_total_size(listing)} bytes (limit {max_total})"
            )

    def extract(self, archive: ArchiveLocation, destination: ArchiveLocation) -> int:
        if not os.path.isdir(destination.path):
            raise DestinationMissingError("Destination does not exist")

        extractor = self.resolve_extractor()
        listing = self.inspector.inspect(archive, destination)
        self.check_limits(listing)

        before = _snapshot(destination.path)
        try:
            self._run_extractor(extractor, archive, destination)
            self.auditor.audit(destination)
        except (ExtractionError, ArchiveTimeoutError, SymlinkEscapeError):
            if self.settings.cleanup_on_failure:
                self._roll_back(destination, before)
            raise

        size = declared_total_size(listing)
        logger.info("Extracted %s into %s (%d bytes declared)", archive, destination, size)
        return size

    def _roll_back(self, destination: ArchiveLocation, before: FrozenSet[str]) -> None:
        logger.info("Removing partially extracted files from %s", destination)
        try:
            remove_new_entries(destination.path, before)
        except OSError as exc:
            logger.error("Could not remove partially extracted files from %s: %s", destination, exc)

    def _run_extractor(self, extractor: str, archive: ArchiveLocation, destination: ArchiveLocation) -> None:
        result = self.invoker.run(extractor, ["-d", destination.path, "-f", archive.path])
        if not result.ok:
            error = ExtractionError("Unzipping had errors", result.diagnostic())
            logger.warning("Extraction of %s failed with exit code %s", archive, result.exit_code)
            logger.debug("%s", error.describe())
            raise error
