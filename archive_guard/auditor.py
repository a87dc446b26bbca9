"""Post-extraction symlink audit."""

from __future__ import annotations

import os
from typing import Iterator, Optional, Tuple

from .errors import SymlinkEscapeError
from .logging_config import get_logger
from .paths import ArchiveLocation, is_contained

logger = get_logger(__name__)


def _raise_walk_error(error: OSError) -> None:
    raise error


def iter_symlinks(root: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(link_path, raw_target)`` for every symlink under `root`.

    Directory symlinks are reported but never descended into. A directory
    that cannot be listed raises the underlying :class:`OSError` instead of
    being skipped.
    """
    for current, dirnames, filenames in os.walk(root, onerror=_raise_walk_error, followlinks=False):
        for name in dirnames + filenames:
            item = os.path.join(current, name)
            if os.path.islink(item):
                yield item, os.readlink(item)


def resolve_link_target(link_path: str, raw_target: str) -> str:
    """Absolute path a symlink points at, before following further links."""
    return os.path.join(os.path.dirname(link_path), raw_target)


class PostExtractionAuditor:
    """Rejects extracted trees containing symlinks that point outside the tree.

    A zip entry's stored path can be harmless while the link it materializes
    points anywhere, so this runs after the extractor has written the files.
    """

    def find_escape(self, destination: ArchiveLocation) -> Optional[Tuple[str, str]]:
        for link_path, raw_target in iter_symlinks(destination.path):
            target = resolve_link_target(link_path, raw_target)
            if not is_contained(target, destination.path, canonical=True):
                return link_path, raw_target
        return None

    def audit(self, destination: ArchiveLocation) -> None:
        try:
            escape = self.find_escape(destination)
        except OSError as exc:
            logger.warning("Could not audit %s for symlinks: %s", destination, exc)
            raise SymlinkEscapeError(
                f"Could not inspect extracted files for symlinks: {exc.strerror or exc}"
            ) from exc
        if escape is None:
            return
        link_path, raw_target = escape
        logger.warning(
            "Symlink %s -> %r points outside %s",
            os.path.relpath(link_path, destination.path),
            raw_target,
            destination,
        )
        raise SymlinkEscapeError("Symlink(s) point outside of root folder")
