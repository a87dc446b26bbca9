"""Settings for the archive guard.

The guard needs a single piece of platform configuration, the installation
root that holds ``bin/<extractor>``. Everything else has a sensible default
and can be overridden from the environment:

* ``ARCHIVE_GUARD_INSTALL_ROOT`` - installation root (no default)
* ``ARCHIVE_GUARD_EXTRACTOR`` - extractor binary name under ``<root>/bin``
* ``ARCHIVE_GUARD_LIST_COMMAND`` / ``ARCHIVE_GUARD_ZIP_COMMAND`` - listing and zip tools
* ``ARCHIVE_GUARD_PROCESS_TIMEOUT`` - seconds per external process, ``0`` disables
* ``ARCHIVE_GUARD_MAX_TOTAL_SIZE`` / ``ARCHIVE_GUARD_MAX_ENTRIES`` - ``0`` disables
* ``ARCHIVE_GUARD_CLEANUP_ON_FAILURE`` - remove extracted files when extraction fails
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import (
    CLEANUP_ON_FAILURE_ENV,
    DEFAULT_EXTRACTOR_NAME,
    DEFAULT_LIST_COMMAND,
    DEFAULT_PROCESS_TIMEOUT,
    DEFAULT_ZIP_COMMAND,
    EXTRACTOR_BIN_DIR,
    EXTRACTOR_ENV,
    INSTALL_ROOT_ENV,
    LIST_COMMAND_ENV,
    MAX_ENTRIES_ENV,
    MAX_TOTAL_SIZE_ENV,
    PROCESS_TIMEOUT_ENV,
    ZIP_COMMAND_ENV,
    env_bool,
    env_int,
)


@dataclass(frozen=True)
class GuardSettings:
    """Typed guard settings, usually sourced from the environment."""

    install_root: Optional[str] = None
    extractor_name: str = DEFAULT_EXTRACTOR_NAME
    list_command: str = DEFAULT_LIST_COMMAND
    zip_command: str = DEFAULT_ZIP_COMMAND
    process_timeout: int = DEFAULT_PROCESS_TIMEOUT
    max_total_size: int = 0
    max_entries: int = 0
    cleanup_on_failure: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GuardSettings":
        env = environ if environ is not None else os.environ
        return cls(
            install_root=(env.get(INSTALL_ROOT_ENV) or "").strip() or None,
            extractor_name=env.get(EXTRACTOR_ENV) or DEFAULT_EXTRACTOR_NAME,
            list_command=env.get(LIST_COMMAND_ENV) or DEFAULT_LIST_COMMAND,
            zip_command=env.get(ZIP_COMMAND_ENV) or DEFAULT_ZIP_COMMAND,
            process_timeout=env_int(PROCESS_TIMEOUT_ENV, DEFAULT_PROCESS_TIMEOUT, env),
            max_total_size=env_int(MAX_TOTAL_SIZE_ENV, 0, env),
            max_entries=env_int(MAX_ENTRIES_ENV, 0, env),
            cleanup_on_failure=env_bool(CLEANUP_ON_FAILURE_ENV, False, env),
        )

    @property
    def timeout_seconds(self) -> Optional[float]:
        """Timeout passed to the process invoker; ``None`` means wait forever."""
        if self.process_timeout <= 0:
            return None
        return float(self.process_timeout)

    def extractor_path(self) -> Optional[str]:
        """Return ``<install_root>/bin/<extractor>`` or ``None`` without a root."""
        if not self.install_root:
            return None
        return os.path.join(self.install_root, EXTRACTOR_BIN_DIR, self.extractor_name)
