"""In-memory catalogue of the files and directories an edition produces."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, Sequence

from .errors import DuplicatePathError

__all__ = [
    "ConflictPolicy",
    "EntryKind",
    "TemplateEntry",
    "TemplateRegistry",
]


LOGGER = logging.getLogger(__name__)


class ConflictPolicy(str, Enum):
    """What to do when an entry's target path already exists."""

    OVERWRITE_ALWAYS = "overwrite-always"
    CREATE_IF_ABSENT = "create-if-absent"
    SKIP_IF_PRESENT = "skip-if-present"


class EntryKind(str, Enum):
    """Kind of filesystem object an entry materialises."""

    FILE = "file"
    DIRECTORY = "directory"


def _split_path(path: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(path, str):
        return PurePosixPath(path).parts
    parts: list[str] = []
    for segment in path:
        parts.extend(PurePosixPath(segment).parts)
    return tuple(parts)


@dataclass(frozen=True, slots=True)
class TemplateEntry:
    """One file or directory to produce under the target root.

    ``path`` is stored as a tuple of segments. It is validated against the
    root only when the entry is materialised, so an entry whose path escapes
    the root can still be registered and is reported as a failure later.
    """

    path: tuple[str, ...]
    body: str = ""
    policy: ConflictPolicy = ConflictPolicy.CREATE_IF_ABSENT
    kind: EntryKind = EntryKind.FILE

    @classmethod
    def file(
        cls,
        path: str | Sequence[str],
        body: str,
        policy: ConflictPolicy | str = ConflictPolicy.CREATE_IF_ABSENT,
    ) -> "TemplateEntry":
        return cls(_split_path(path), body, ConflictPolicy(policy), EntryKind.FILE)

    @classmethod
    def directory(cls, path: str | Sequence[str]) -> "TemplateEntry":
        return cls(_split_path(path), "", ConflictPolicy.CREATE_IF_ABSENT, EntryKind.DIRECTORY)

    @property
    def display_path(self) -> str:
        """Return the entry path joined with forward slashes."""

        if not self.path:
            return "."
        return PurePosixPath(*self.path).as_posix()


class TemplateRegistry:
    """Ordered catalogue of :class:`TemplateEntry` values keyed by path.

    Registering a path twice replaces the earlier entry but keeps its
    position, so report ordering stays stable. Duplicates are logged and
    collected in :attr:`duplicates`; a ``strict`` registry raises
    :class:`~kiln.errors.DuplicatePathError` instead.
    """

    def __init__(
        self,
        name: str = "custom",
        entries: Iterable[TemplateEntry] = (),
        *,
        description: str = "",
        strict: bool = False,
    ) -> None:
        self.name = name
        self.description = description
        self.strict = strict
        self._entries: dict[tuple[str, ...], TemplateEntry] = {}
        self._duplicates: list[str] = []
        for entry in entries:
            self.register(entry)

    def register(self, entry: TemplateEntry) -> TemplateEntry:
        """Add ``entry``, replacing any entry already registered for its path."""

        if entry.path in self._entries:
            if self.strict:
                raise DuplicatePathError(entry.display_path)
            LOGGER.warning(
                "edition %s registers %s more than once; the last definition wins",
                self.name,
                entry.display_path,
            )
            self._duplicates.append(entry.display_path)
        self._entries[entry.path] = entry
        return entry

    def add_file(
        self,
        path: str | Sequence[str],
        body: str,
        policy: ConflictPolicy | str = ConflictPolicy.CREATE_IF_ABSENT,
    ) -> TemplateEntry:
        return self.register(TemplateEntry.file(path, body, policy))

    def add_directory(self, path: str | Sequence[str]) -> TemplateEntry:
        return self.register(TemplateEntry.directory(path))

    def all(self) -> Iterator[TemplateEntry]:
        """Iterate over the entries in registration order."""

        return iter(tuple(self._entries.values()))

    def paths(self) -> list[str]:
        return [entry.display_path for entry in self._entries.values()]

    @property
    def duplicates(self) -> tuple[str, ...]:
        """Paths that were registered more than once."""

        return tuple(self._duplicates)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        if isinstance(path, TemplateEntry):
            return path.path in self._entries
        if isinstance(path, (str, tuple, list)):
            return _split_path(path) in self._entries
        return False

    def __iter__(self) -> Iterator[TemplateEntry]:
        return self.all()

    def __repr__(self) -> str:
        return f"TemplateRegistry(name={self.name!r}, entries={len(self)})"

    @classmethod
    def from_directory(
        cls,
        template_dir: str | Path,
        *,
        name: str | None = None,
        policy: ConflictPolicy | str = ConflictPolicy.CREATE_IF_ABSENT,
        ignore: Iterable[str] | None = None,
        encoding: str = "utf-8",
    ) -> "TemplateRegistry":
        """Build a registry from every file inside ``template_dir``.

        Files become file entries with ``policy``; empty directories become
        directory entries. Paths matching any glob in ``ignore`` are skipped.
        """

        template_dir = Path(template_dir)
        if not template_dir.is_dir():
            raise FileNotFoundError(template_dir)

        registry = cls(name or template_dir.name)
        ignore_patterns = set(ignore or [])
        for source in sorted(template_dir.rglob("*")):
            relative = source.relative_to(template_dir)
            if any(relative.match(pattern) for pattern in ignore_patterns):
                continue

            if source.is_dir():
                if not any(source.iterdir()):
                    registry.add_directory(relative.parts)
                continue

            registry.add_file(relative.parts, source.read_text(encoding=encoding), policy)

        return registry
