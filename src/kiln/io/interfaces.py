"""Abstract interface for the filesystem the materializer writes to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path


class PathState(str, Enum):
    """Observed state of a path before an entry is materialised."""

    ABSENT = "absent"
    FILE = "file"
    READ_ONLY_FILE = "read-only-file"
    DIRECTORY = "directory"
    OTHER = "other"


class FilesystemProvider(ABC):
    """Capabilities the materializer needs from a filesystem.

    Every method may raise :class:`OSError`; the materializer maps those to
    per-entry ``io-error`` failures.
    """

    @abstractmethod
    def state(self, path: Path) -> PathState:
        """Classify ``path`` without modifying anything."""

    @abstractmethod
    def write_file(self, path: Path, data: bytes) -> None:
        """Create or truncate ``path`` and write ``data`` to it."""

    @abstractmethod
    def make_dirs(self, path: Path) -> None:
        """Create ``path`` and any missing parents. Existing directories are fine."""

    def resolve(self, path: Path) -> Path:
        """Return where a write to ``path`` would land after following links.

        Providers without links return ``path`` unchanged.
        """

        return path


__all__ = ["FilesystemProvider", "PathState"]
