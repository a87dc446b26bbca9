"""Public entry points: ``extract`` and ``create``."""

from __future__ import annotations

import os
from typing import Optional, Union

from .builder import ArchiveBuilder
from .config import GuardSettings
from .extractor import ArchiveExtractionRunner
from .paths import ArchiveLocation
from .process import ProcessInvoker, SubprocessInvoker

PathInput = Union[str, "os.PathLike[str]", ArchiveLocation]


class ArchiveGuard:
    """Validates zip extraction and creation around external archival tools.

    The guard keeps no state between calls; one instance may serve concurrent
    callers as long as they work on disjoint directory trees.
    """

    def __init__(
        self,
        settings: Optional[GuardSettings] = None,
        invoker: Optional[ProcessInvoker] = None,
    ) -> None:
        self.settings = settings or GuardSettings.from_env()
        self.invoker = invoker or SubprocessInvoker(timeout=self.settings.timeout_seconds)

    def extract(self, archive_path: PathInput, destination_dir: PathInput) -> int:
        """Extract `archive_path` into `destination_dir`; return declared size in bytes.

        On failure after extraction started (extractor error, timeout, symlink
        escape) the destination may hold partial output. It is only removed
        when ``settings.cleanup_on_failure`` is enabled.
        """
        runner = ArchiveExtractionRunner(self.settings, self.invoker)
        return runner.extract(
            ArchiveLocation.from_input(archive_path),
            ArchiveLocation.from_input(destination_dir),
        )

    def create(self, source_dir: PathInput, destination_archive_path: PathInput) -> str:
        """Zip `source_dir` into `destination_archive_path`; return the tool's output."""
        builder = ArchiveBuilder(self.invoker, self.settings.zip_command)
        return builder.create(
            ArchiveLocation.from_input(source_dir),
            ArchiveLocation.from_input(destination_archive_path),
        )


def extract(
    archive_path: PathInput,
    destination_dir: PathInput,
    *,
    settings: Optional[GuardSettings] = None,
    invoker: Optional[ProcessInvoker] = None,
) -> int:
    return ArchiveGuard(settings, invoker).extract(archive_path, destination_dir)


def create(
    source_dir: PathInput,
    destination_archive_path: PathInput,
    *,
    settings: Optional[GuardSettings] = None,
    invoker: Optional[ProcessInvoker] = None,
) -> str:
    return ArchiveGuard(settings, invoker).create(source_dir, destination_archive_path)
