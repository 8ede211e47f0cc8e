"""Deterministic project scaffolding.

kiln materialises named template editions into project directories. A
:class:`TemplateRegistry` catalogues the entries, a :class:`TemplateRenderer`
resolves ``{{ NAME }}`` placeholders strictly, and a :class:`Materializer`
writes the result under per-entry conflict policies, returning a
:class:`MaterializationReport`.
"""

from __future__ import annotations

from .config import ScaffoldConfig, slugify
from .editions import available_editions, get_edition
from .errors import (
    DuplicatePathError,
    InvalidRootError,
    KilnError,
    ManifestError,
    TemplateRenderingError,
    UnboundPlaceholderError,
    UnknownEditionError,
)
from .materializer import Materializer, ResolvedEntry
from .registry import ConflictPolicy, EntryKind, TemplateEntry, TemplateRegistry
from .report import EntryResult, Failure, FailureKind, MaterializationReport, Outcome
from .scaffold import Scaffolder
from .template import TemplateRenderer, placeholders, resolve

__all__ = [
    "ConflictPolicy",
    "DuplicatePathError",
    "EntryKind",
    "EntryResult",
    "Failure",
    "FailureKind",
    "InvalidRootError",
    "KilnError",
    "ManifestError",
    "MaterializationReport",
    "Materializer",
    "Outcome",
    "ResolvedEntry",
    "ScaffoldConfig",
    "Scaffolder",
    "TemplateEntry",
    "TemplateRegistry",
    "TemplateRenderer",
    "TemplateRenderingError",
    "UnboundPlaceholderError",
    "UnknownEditionError",
    "available_editions",
    "get_edition",
    "placeholders",
    "resolve",
    "slugify",
]

__version__ = "0.1.0"
