"""Write resolved entries to a target root under their conflict policy."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, Protocol, Sequence

from .errors import InvalidRootError
from .io.adapters.local import LocalFilesystem
from .io.interfaces import FilesystemProvider, PathState
from .registry import ConflictPolicy, EntryKind, TemplateEntry
from .report import EntryResult, FailureKind, MaterializationReport, Outcome

__all__ = [
    "CancelToken",
    "Materializer",
    "ResolvedEntry",
]


LOGGER = logging.getLogger(__name__)


class CancelToken(Protocol):
    """Anything with an ``is_set`` method, e.g. :class:`threading.Event`."""

    def is_set(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class ResolvedEntry:
    """A registry entry whose body has been fully resolved."""

    path: tuple[str, ...]
    content: str
    policy: ConflictPolicy = ConflictPolicy.CREATE_IF_ABSENT
    kind: EntryKind = EntryKind.FILE

    @classmethod
    def from_entry(cls, entry: TemplateEntry, content: str) -> "ResolvedEntry":
        return cls(entry.path, content, entry.policy, entry.kind)

    @property
    def display_path(self) -> str:
        if not self.path:
            return "."
        return PurePosixPath(*self.path).as_posix()


def _contained_parts(segments: Sequence[str]) -> tuple[str, ...] | None:
    """Return normalised segments, or ``None`` when they leave the root."""

    if not segments:
        return None
    candidate = PurePosixPath(*segments)
    if candidate.is_absolute():
        return None
    normalized = posixpath.normpath(candidate.as_posix())
    if normalized in {".", ".."} or normalized.startswith("../"):
        return None
    return PurePosixPath(normalized).parts


class Materializer:
    """Apply :class:`ResolvedEntry` values to a filesystem, one at a time.

    Failures are scoped to the entry that caused them: the materializer
    records them in the report and carries on with the next entry. Nothing is
    ever deleted or renamed, and there is no rollback. An interrupted run
    leaves the entries written so far in place and is recovered by running
    again.
    """

    def __init__(self, filesystem: FilesystemProvider | None = None, *, encoding: str = "utf-8") -> None:
        self.filesystem = filesystem or LocalFilesystem()
        self.encoding = encoding

    def prepare_root(self, root: str | Path) -> Path:
        """Return the absolute root, creating it when missing.

        Raises
        ------
        InvalidRootError
            If ``root`` exists but is not a directory, or cannot be created.
        """

        root_path = Path(root).expanduser().resolve()
        try:
            state = self.filesystem.state(root_path)
            if state is PathState.ABSENT:
                self.filesystem.make_dirs(root_path)
            elif state is not PathState.DIRECTORY:
                raise InvalidRootError(str(root_path), "not a directory")
        except OSError as exc:
            raise InvalidRootError(str(root_path), exc.strerror or str(exc)) from exc
        return root_path

    def materialize(
        self,
        root: str | Path,
        entries: Iterable[ResolvedEntry | EntryResult],
        *,
        edition: str | None = None,
        warnings: Iterable[str] = (),
        cancel: CancelToken | None = None,
    ) -> MaterializationReport:
        """Materialise ``entries`` under ``root`` and return the run report.

        ``entries`` may contain :class:`EntryResult` values for entries that
        already failed upstream; they are recorded verbatim without touching
        the filesystem. ``cancel`` is checked before each entry.
        """

        root_path = self.prepare_root(root)
        results: list[EntryResult] = []
        interrupted = False

        for item in entries:
            if cancel is not None and cancel.is_set():
                LOGGER.info("materialisation of %s interrupted after %d entries", root_path, len(results))
                interrupted = True
                break

            if isinstance(item, EntryResult):
                result = item
            else:
                result = self.apply(root_path, item)

            if result.outcome is Outcome.FAILED:
                LOGGER.warning("%s failed: %s", result.path, result.failure)
            else:
                LOGGER.debug("%s %s", result.path, result.outcome.value)
            results.append(result)

        return MaterializationReport(
            root=str(root_path),
            edition=edition,
            results=tuple(results),
            warnings=tuple(warnings),
            interrupted=interrupted,
        )

    def apply(self, root: Path, entry: ResolvedEntry) -> EntryResult:
        """Materialise one entry below an already prepared ``root``.

        ``root`` must already be resolved (see :meth:`prepare_root`) so the
        link-following containment check compares like with like.
        """

        display = entry.display_path
        parts = _contained_parts(entry.path)
        if parts is None:
            return EntryResult.failed(display, FailureKind.PATH_ESCAPE, f"'{display}' resolves outside the target root")

        target = root.joinpath(*parts)
        try:
            landing = self.filesystem.resolve(target)
            if landing == root or not landing.is_relative_to(root):
                return EntryResult.failed(
                    display,
                    FailureKind.PATH_ESCAPE,
                    f"'{display}' follows a link to {landing}, outside the target root",
                )
            state = self.filesystem.state(target)
            if entry.kind is EntryKind.DIRECTORY:
                return self._apply_directory(display, target, state)
            return self._apply_file(display, target, state, entry)
        except UnicodeError as exc:
            return EntryResult.failed(display, FailureKind.ENCODING_ERROR, str(exc))
        except OSError as exc:
            return EntryResult.failed(display, FailureKind.IO_ERROR, _describe(exc))
        except RuntimeError as exc:
            # Path.resolve reports symlink loops as RuntimeError before 3.13.
            return EntryResult.failed(display, FailureKind.IO_ERROR, str(exc))

    def _apply_directory(self, display: str, target: Path, state: PathState) -> EntryResult:
        if state is PathState.DIRECTORY:
            return EntryResult(path=display, outcome=Outcome.SKIPPED)
        if state is not PathState.ABSENT:
            return EntryResult.failed(display, FailureKind.TYPE_MISMATCH, f"expected a directory, found {state.value}")
        self.filesystem.make_dirs(target)
        return EntryResult(path=display, outcome=Outcome.CREATED)

    def _apply_file(self, display: str, target: Path, state: PathState, entry: ResolvedEntry) -> EntryResult:
        if state in {PathState.DIRECTORY, PathState.OTHER}:
            return EntryResult.failed(display, FailureKind.TYPE_MISMATCH, f"expected a file, found {state.value}")

        if state is PathState.ABSENT:
            self._write(target, entry.content)
            return EntryResult(path=display, outcome=Outcome.CREATED)

        if entry.policy is not ConflictPolicy.OVERWRITE_ALWAYS:
            return EntryResult(path=display, outcome=Outcome.SKIPPED)

        if state is PathState.READ_ONLY_FILE:
            return EntryResult.failed(display, FailureKind.IO_ERROR, "existing file is not writable")

        self._write(target, entry.content)
        return EntryResult(path=display, outcome=Outcome.OVERWRITTEN)

    def _write(self, target: Path, content: str) -> None:
        data = content.encode(self.encoding)
        self.filesystem.make_dirs(target.parent)
        self.filesystem.write_file(target, data)


def _describe(exc: OSError) -> str:
    if exc.strerror and exc.filename:
        return f"{exc.strerror}: {exc.filename}"
    return exc.strerror or str(exc)
