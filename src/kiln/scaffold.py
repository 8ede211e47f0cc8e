"""Scaffolding pipeline: registry -> resolver -> materializer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Mapping

from .config import ScaffoldConfig
from .editions import get_edition
from .errors import TemplateRenderingError, UnboundPlaceholderError
from .io.interfaces import FilesystemProvider
from .materializer import CancelToken, Materializer, ResolvedEntry
from .registry import EntryKind, TemplateRegistry
from .report import EntryResult, FailureKind, MaterializationReport
from .template import TemplateRenderer

__all__ = ["Scaffolder"]


LOGGER = logging.getLogger(__name__)


class Scaffolder:
    """Materialise template editions into project directories.

    The scaffolder holds no per-run state, so one instance can be reused for
    any number of runs. Re-running over an existing tree is safe: entries
    with ``create-if-absent`` or ``skip-if-present`` are left alone and
    ``overwrite-always`` entries are rewritten with identical content.
    """

    def __init__(
        self,
        filesystem: FilesystemProvider | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.materializer = Materializer(filesystem)

    def resolve_entries(
        self, registry: TemplateRegistry, bindings: Mapping[str, str]
    ) -> Iterator[ResolvedEntry | EntryResult]:
        """Yield resolved entries, or failed results for entries that cannot resolve."""

        for entry in registry.all():
            if entry.kind is EntryKind.DIRECTORY:
                yield ResolvedEntry.from_entry(entry, "")
                continue
            try:
                content = self.renderer.resolve(entry.body, bindings)
            except UnboundPlaceholderError as exc:
                yield EntryResult.failed(
                    entry.display_path,
                    FailureKind.UNBOUND_PLACEHOLDER,
                    ", ".join(exc.names),
                )
            except TemplateRenderingError as exc:
                yield EntryResult.failed(entry.display_path, FailureKind.TEMPLATE_ERROR, str(exc))
            else:
                yield ResolvedEntry.from_entry(entry, content)

    def materialize(
        self,
        root: str | Path,
        bindings: Mapping[str, str],
        registry: TemplateRegistry,
        *,
        cancel: CancelToken | None = None,
    ) -> MaterializationReport:
        """Resolve every entry of ``registry`` and write it below ``root``."""

        LOGGER.info("materialising edition %s (%d entries) into %s", registry.name, len(registry), root)
        report = self.materializer.materialize(
            root,
            self.resolve_entries(registry, bindings),
            edition=registry.name,
            warnings=[f"duplicate path '{path}'" for path in registry.duplicates],
            cancel=cancel,
        )
        counts = report.counts()
        LOGGER.info(
            "edition %s: %s",
            registry.name,
            ", ".join(f"{count} {outcome.value}" for outcome, count in counts.items() if count),
        )
        return report

    def create(
        self,
        config: ScaffoldConfig,
        target_dir: str | Path,
        *,
        edition: str | TemplateRegistry = "standard",
        extra_bindings: Mapping[str, str] | None = None,
        cancel: CancelToken | None = None,
    ) -> MaterializationReport:
        """Materialise ``edition`` for the project described by ``config``."""

        registry = get_edition(edition) if isinstance(edition, str) else edition
        bindings = dict(config.bindings())
        if extra_bindings:
            bindings.update(extra_bindings)
        return self.materialize(target_dir, bindings, registry, cancel=cancel)
