"""Archive listing, entry containment and declared size accounting.

The listing comes from Info-ZIP ``unzip -l``, whose output looks like::

    Archive:  bundle.zip
      Length      Date    Time    Name
    ---------  ---------- -----   ----
           12  2024-01-01 10:00   app.rb
            9  2024-01-01 10:00   Procfile
    ---------                     -------
           21                     2 files

Three header lines, one line per entry, then a separator and a totals line.
An archive comment, when present, is printed between the ``Archive:`` line
and the column titles; everything up to the dashed rule is skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple

from .errors import ExtractionError, MalformedListingError, PathTraversalError
from .logging_config import get_logger
from .paths import ArchiveLocation, is_contained
from .process import ProcessInvoker

logger = get_logger(__name__)

HEADER_LINES = 3
TRAILER_LINES = 2
COLUMN_RULE = "---------"

_ENTRY_PATTERN = re.compile(r"^\s*(\d+)\s+[\d-]+\s+[\d:]+\s+(.*)$")
_SUMMARY_PATTERN = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True)
class ArchiveEntry:
    """One line of the listing. The summary line has `is_summary` set and no path."""

    relative_path: str
    declared_size: int
    is_summary: bool = False


@dataclass(frozen=True)
class ArchiveListing:
    """Parsed listing of a single archive, computed once per call."""

    entries: Tuple[ArchiveEntry, ...]
    raw_output: str = ""

    @property
    def files(self) -> Tuple[ArchiveEntry, ...]:
        return tuple(entry for entry in self.entries if not entry.is_summary)

    @property
    def summary(self) -> ArchiveEntry:
        if not self.entries or not self.entries[-1].is_summary:
            raise MalformedListingError("Archive listing has no summary line")
        return self.entries[-1]


def _first_entry_index(lines: List[str]) -> int:
    """Index just past the dashed column rule; zip comments may precede it."""
    for index in range(HEADER_LINES - 1, len(lines) - TRAILER_LINES):
        if lines[index].startswith(COLUMN_RULE):
            return index + 1
    raise MalformedListingError("Archive listing has no column header")


def parse_listing(output: str) -> ArchiveListing:
    """Parse raw ``unzip -l`` output into an :class:`ArchiveListing`."""
    lines = output.splitlines()
    if len(lines) < HEADER_LINES + TRAILER_LINES:
        raise MalformedListingError(
            f"Archive listing too short ({len(lines)} lines)"
        )

    entries = []
    for line in lines[_first_entry_index(lines):-TRAILER_LINES]:
        match = _ENTRY_PATTERN.match(line)
        if match is None:
            raise MalformedListingError(f"Unparseable archive listing line: {line!r}")
        entries.append(ArchiveEntry(relative_path=match.group(2), declared_size=int(match.group(1))))

    summary = _SUMMARY_PATTERN.match(lines[-1])
    if summary is None:
        raise MalformedListingError(f"Unparseable archive listing summary: {lines[-1]!r}")
    entries.append(ArchiveEntry(relative_path="", declared_size=int(summary.group(1)), is_summary=True))

    return ArchiveListing(entries=tuple(entries), raw_output=output)


def declared_total_size(listing: ArchiveListing) -> int:
    """Total uncompressed size the archive declares in its summary line."""
    return listing.summary.declared_size


class ArchiveInspector:
    """Lists an archive and rejects entries that would land outside the destination."""

    def __init__(self, invoker: ProcessInvoker, list_command: str = "unzip") -> None:
        self.invoker = invoker
        self.list_command = list_command

    def list(self, archive: ArchiveLocation) -> ArchiveListing:
        result = self.invoker.run(self.list_command, ["-l", archive.path])
        if not result.ok:
            raise ExtractionError(
                f"Listing {archive} had errors", result.diagnostic()
            )
        return parse_listing(result.stdout)

    def verify_contained(self, listing: ArchiveListing, destination: ArchiveLocation) -> None:
        for entry in listing.files:
            if not is_contained(entry.relative_path, destination.path):
                logger.warning("Rejecting archive entry outside destination: %r", entry.relative_path)
                raise PathTraversalError("Relative path(s) outside of root folder")

    def inspect(self, archive: ArchiveLocation, destination: ArchiveLocation) -> ArchiveListing:
        """List `archive` and verify every entry stays inside `destination`."""
        listing = self.list(archive)
        self.verify_contained(listing, destination)
        logger.debug("Archive %s lists %d entries", archive, len(listing.files))
        return listing
