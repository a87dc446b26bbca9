"""Zip creation from a source directory."""

from __future__ import annotations

import os

from .errors import CreationError, DestinationMissingError, SourceMissingError
from .logging_config import get_logger
from .paths import ArchiveLocation
from .process import ProcessInvoker

logger = get_logger(__name__)

# quiet, recurse, no directory entries, store symlinks as links
ZIP_FLAGS = ("-q", "-r", "-D", "--symlinks")


class ArchiveBuilder:
    """Packs a directory into a zip with paths stored relative to that directory."""

    def __init__(self, invoker: ProcessInvoker, zip_command: str = "zip") -> None:
        self.invoker = invoker
        self.zip_command = zip_command

    def create(self, source: ArchiveLocation, destination: ArchiveLocation) -> str:
        if not os.path.isdir(source.path):
            raise SourceMissingError("Path does not exist")
        if not os.path.isdir(destination.parent):
            raise DestinationMissingError("Path does not exist")

        result = self.invoker.run(
            self.zip_command,
            [*ZIP_FLAGS, destination.path, "."],
            working_directory=source.path,
        )
        if not result.ok:
            error = CreationError("Could not zip the package", result.diagnostic())
            logger.warning("Zipping %s failed with exit code %s", source, result.exit_code)
            logger.debug("%s", error.describe())
            raise error

        logger.info("Created %s from %s", destination, source)
        return result.stdout
