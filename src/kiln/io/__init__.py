"""Filesystem abstractions used by the materializer."""

from .interfaces import FilesystemProvider, PathState

__all__ = [
    "FilesystemProvider",
    "PathState",
]
