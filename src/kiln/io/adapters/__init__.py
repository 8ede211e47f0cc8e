"""Concrete filesystem provider implementations."""

from .local import LocalFilesystem

__all__ = ["LocalFilesystem"]
