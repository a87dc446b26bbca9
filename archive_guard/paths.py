"""Path containment checks and normalized archive locations."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ArchiveLocation:
    """An absolute, normalized filesystem path taken from caller input."""

    path: str

    @classmethod
    def from_input(cls, raw: "str | os.PathLike[str] | ArchiveLocation") -> "ArchiveLocation":
        if isinstance(raw, ArchiveLocation):
            return raw
        text = os.fspath(raw)
        if not text:
            raise ValueError("Archive location must not be empty.")
        return cls(os.path.abspath(text))

    @property
    def parent(self) -> str:
        return os.path.dirname(self.path)

    def __fspath__(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class ContainmentVerdict:
    """Outcome of checking one candidate path against a root."""

    candidate: str
    root: str
    contained: bool


def check_containment(candidate: str, root: str, *, canonical: bool = False) -> ContainmentVerdict:
    """Decide whether `candidate`, resolved against `root`, stays within `root`.

    Relative candidates are joined onto `root`; absolute ones are taken as is.
    Lexical mode (the default) only normalizes `.` and `..` and never touches
    the filesystem, so it works for paths that do not exist yet. Canonical
    mode resolves existing symlinks on both sides before comparing. Symlink
    loops are left unresolved rather than raising.
    """
    if not candidate:
        return ContainmentVerdict(candidate=candidate, root=root, contained=False)

    root_path = Path(os.path.abspath(root))
    joined = os.path.join(root_path, candidate)
    if canonical:
        root_path = Path(os.path.realpath(root_path))
        target = Path(os.path.realpath(joined))
    else:
        target = Path(os.path.normpath(joined))

    contained = target == root_path or root_path in target.parents
    return ContainmentVerdict(candidate=candidate, root=str(root_path), contained=contained)


def is_contained(candidate: str, root: str, *, canonical: bool = False) -> bool:
    return check_containment(candidate, root, canonical=canonical).contained
