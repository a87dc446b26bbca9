"""External process invocation for archival tools."""

from __future__ import annotations

import os
import signal
import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from .errors import ArchiveTimeoutError, ProcessDiagnostic, ToolMissingError
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Captured output and exit status of one external command."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def diagnostic(self) -> ProcessDiagnostic:
        return ProcessDiagnostic(stdout=self.stdout, stderr=self.stderr, exit_code=self.exit_code)


class ProcessInvoker(Protocol):
    """Runs one external command and reports its output without judging it."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        working_directory: Optional[str] = None,
    ) -> ProcessResult:
        ...


def _as_text(value: "str | bytes | None") -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


class SubprocessInvoker:
    """ProcessInvoker backed by :class:`subprocess.Popen`.

    Commands are passed as an argument vector, never through a shell, so
    archive and directory names are not reinterpreted. Each command starts in
    its own session. When `timeout` is set and expires, the whole process
    group is killed (wrapper scripts included, together with the tools they
    started) and :class:`ArchiveTimeoutError` is raised with whatever output
    was captured so far.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def run(
        self,
        command: str,
        args: Sequence[str],
        working_directory: Optional[str] = None,
    ) -> ProcessResult:
        argv = [command, *args]
        logger.debug("Running %s (cwd=%s)", argv, working_directory)
        try:
            process = subprocess.Popen(
                argv,
                cwd=working_directory,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                start_new_session=True,
            )
        except (FileNotFoundError, PermissionError) as exc:
            if working_directory is not None and exc.filename == working_directory:
                raise
            raise ToolMissingError(f"Could not execute {command}: {exc.strerror}") from exc

        try:
            stdout, stderr = process.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired as exc:
            kill_process_group(process)
            stdout, stderr = _drain(process, exc)
            logger.warning("%s did not finish within %ss; killed.", command, self.timeout)
            raise ArchiveTimeoutError(
                f"{command} timed out after {self.timeout}s",
                ProcessDiagnostic(
                    stdout=_as_text(stdout),
                    stderr=_as_text(stderr),
                    exit_code=None,
                ),
            ) from exc
        except BaseException:
            kill_process_group(process)
            process.wait()
            raise

        return ProcessResult(
            stdout=stdout or "",
            stderr=stderr or "",
            exit_code=process.returncode,
        )


def kill_process_group(process: subprocess.Popen) -> None:
    """SIGKILL every process in the session `process` leads."""
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


def _drain(process: subprocess.Popen, expired: subprocess.TimeoutExpired):
    """Collect remaining output of a killed process, bounded in time."""
    try:
        return process.communicate(timeout=5)
    except subprocess.TimeoutExpired:
        # Something outside the group still holds the pipes.
        process.kill()
        process.wait()
        return expired.stdout, expired.stderr
