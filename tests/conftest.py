"""Shared fixtures: a scripted process invoker and listing builders."""

from __future__ import annotations

import os
import stat
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import pytest

from archive_guard.config import GuardSettings
from archive_guard.process import ProcessResult

Handler = Union[ProcessResult, Callable[[List[str], Optional[str]], ProcessResult]]


class Symlink:
    """Marker for a symlink entry in `materialize` trees."""

    def __init__(self, target: str) -> None:
        self.target = target


class FakeInvoker:
    """ProcessInvoker stand-in that records calls and returns scripted results."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, List[str], Optional[str]]] = []
        self._handlers: Dict[str, Handler] = {}

    def on(self, command: str, handler: Handler) -> "FakeInvoker":
        self._handlers[command] = handler
        return self

    def run(self, command: str, args: Sequence[str], working_directory: Optional[str] = None) -> ProcessResult:
        self.calls.append((command, list(args), working_directory))
        handler = self._handlers.get(command, self._handlers.get(os.path.basename(command)))
        if handler is None:
            raise AssertionError(f"Unexpected command: {command} {list(args)}")
        if callable(handler):
            return handler(list(args), working_directory)
        return handler

    def commands(self) -> List[str]:
        return [os.path.basename(command) for command, _, _ in self.calls]


def unzip_listing(entries: Sequence[Tuple[str, int]], archive: str = "bundle.zip") -> str:
    """Render `unzip -l` style output for (path, size) pairs."""
    lines = [
        f"Archive:  {archive}",
        "  Length      Date    Time    Name",
        "---------  ---------- -----   ----",
    ]
    for path, size in entries:
        lines.append(f"{size:>9}  2024-01-01 10:00   {path}")
    total = sum(size for _, size in entries)
    lines.append("---------                     -------")
    lines.append(f"{total:>9}                     {len(entries)} files")
    return "\n".join(lines) + "\n"


def materialize(root: str, tree: Dict[str, Union[str, Symlink]]) -> None:
    """Write files and symlinks under `root` the way an extractor would."""
    for rel_path, content in tree.items():
        path = os.path.join(root, rel_path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        if isinstance(content, Symlink):
            os.symlink(content.target, path)
        else:
            with open(path, "w", encoding="utf-8") as handle:
                handle.write(content)


def extractor_writing(tree: Dict[str, Union[str, Symlink]], exit_code: int = 0) -> Handler:
    """Extractor handler that writes `tree` into the `-d` destination."""

    def handler(args: List[str], _cwd: Optional[str]) -> ProcessResult:
        destination = args[args.index("-d") + 1]
        materialize(destination, tree)
        return ProcessResult(stdout="", stderr="", exit_code=exit_code)

    return handler


def ok(stdout: str = "") -> ProcessResult:
    return ProcessResult(stdout=stdout, stderr="", exit_code=0)


@pytest.fixture
def fake_invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture
def install_root(tmp_path) -> str:
    """Installation root containing an executable bin/safe_unzipper."""
    root = tmp_path / "install"
    bin_dir = root / "bin"
    bin_dir.mkdir(parents=True)
    extractor = bin_dir / "safe_unzipper"
    extractor.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    extractor.chmod(extractor.stat().st_mode | stat.S_IXUSR)
    return str(root)


@pytest.fixture
def settings(install_root) -> GuardSettings:
    return GuardSettings(install_root=install_root)


@pytest.fixture
def destination(tmp_path) -> str:
    path = tmp_path / "dest"
    path.mkdir()
    return str(path)
