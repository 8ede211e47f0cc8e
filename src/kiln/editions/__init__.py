"""Bundled template editions.

Each edition is a plain function returning a fresh
:class:`~kiln.registry.TemplateRegistry`, so callers may extend the
registry they receive without affecting later lookups. Adding an edition
means adding a builder to :data:`EDITIONS`.
"""

from __future__ import annotations

from typing import Callable

from ..errors import UnknownEditionError
from ..registry import TemplateRegistry
from .core import build_core
from .extended import build_extended
from .standard import build_standard

__all__ = [
    "EDITIONS",
    "available_editions",
    "get_edition",
]


EDITIONS: dict[str, Callable[[], TemplateRegistry]] = {
    "core": build_core,
    "standard": build_standard,
    "extended": build_extended,
}


def available_editions() -> list[str]:
    """Return edition names in declaration order."""

    return list(EDITIONS)


def get_edition(name: str) -> TemplateRegistry:
    """Build the registry for the edition called ``name``."""

    try:
        builder = EDITIONS[name]
    except KeyError:
        raise UnknownEditionError(name, available_editions()) from None
    return builder()
