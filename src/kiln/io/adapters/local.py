"""Filesystem provider backed by the local disk."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from ..interfaces import FilesystemProvider, PathState


class LocalFilesystem(FilesystemProvider):
    """Read and write the real filesystem through :mod:`pathlib`."""

    def state(self, path: Path) -> PathState:
        try:
            mode = path.lstat().st_mode
        except FileNotFoundError:
            return PathState.ABSENT
        except NotADirectoryError:
            # A parent segment is a regular file.
            return PathState.ABSENT

        if stat.S_ISLNK(mode):
            try:
                mode = path.stat().st_mode
            except OSError:
                # Dangling link: writing through it would land somewhere unknown.
                return PathState.OTHER

        if stat.S_ISDIR(mode):
            return PathState.DIRECTORY
        if stat.S_ISREG(mode):
            if not os.access(path, os.W_OK):
                return PathState.READ_ONLY_FILE
            return PathState.FILE
        return PathState.OTHER

    def resolve(self, path: Path) -> Path:
        # Follows symlinks on the target and on every existing parent,
        # including dangling links.
        return path.resolve()

    def write_file(self, path: Path, data: bytes) -> None:
        path.write_bytes(data)

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)


__all__ = ["LocalFilesystem"]
