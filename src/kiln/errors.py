"""Custom exception types raised by the scaffolding engine."""

from __future__ import annotations

from collections.abc import Sequence


class KilnError(RuntimeError):
    """Base class for every error raised by kiln."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class TemplateRenderingError(KilnError):
    """Raised when a placeholder expression cannot be evaluated."""


class UnboundPlaceholderError(TemplateRenderingError):
    """Raised when a template references names missing from the bindings."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = tuple(names)
        joined = ", ".join(self.names)
        super().__init__(f"unbound placeholder(s): {joined}")


class DuplicatePathError(KilnError):
    """Raised by a strict registry when two entries share a path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"duplicate template path '{path}'")


class InvalidRootError(KilnError):
    """Raised when the target root is not a directory and cannot be created."""

    def __init__(self, root: str, detail: str) -> None:
        self.root = root
        self.detail = detail
        super().__init__(f"invalid target root '{root}': {detail}")


class UnknownEditionError(KilnError, LookupError):
    """Raised when an edition name is not registered."""

    def __init__(self, name: str, available: Sequence[str]) -> None:
        self.name = name
        self.available = tuple(available)
        super().__init__(
            f"unknown edition '{name}'. Available editions: {', '.join(self.available)}"
        )


class ManifestError(KilnError):
    """Raised when an edition manifest cannot be loaded or validated."""


__all__ = [
    "DuplicatePathError",
    "InvalidRootError",
    "KilnError",
    "ManifestError",
    "TemplateRenderingError",
    "UnboundPlaceholderError",
    "UnknownEditionError",
]
