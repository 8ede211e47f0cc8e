"""JSON edition manifests, so new editions can ship as data."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ManifestError
from .registry import ConflictPolicy, EntryKind, TemplateEntry, TemplateRegistry

__all__ = [
    "EditionManifest",
    "ManifestEntry",
    "load_manifest",
]


class ManifestEntry(BaseModel):
    """One entry of an :class:`EditionManifest`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = Field(..., min_length=1, description="Target path relative to the project root.")
    kind: EntryKind = Field(EntryKind.FILE, description="Whether the entry is a file or a directory.")
    policy: ConflictPolicy = Field(ConflictPolicy.CREATE_IF_ABSENT, description="Conflict policy.")
    body: Optional[str] = Field(None, description="Inline template body.")
    source: Optional[str] = Field(None, description="Template file relative to the manifest.")

    @model_validator(mode="after")
    def _check_body_source(self) -> "ManifestEntry":
        if self.kind is EntryKind.DIRECTORY:
            if self.body is not None or self.source is not None:
                raise ValueError(f"directory entry '{self.path}' must not define body or source")
            return self
        if (self.body is None) == (self.source is None):
            raise ValueError(f"file entry '{self.path}' needs exactly one of body or source")
        return self


class EditionManifest(BaseModel):
    """A named edition described entirely in JSON."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1, description="Edition identifier.")
    description: str = Field("", description="Short summary shown by `kiln editions`.")
    strict: bool = Field(False, description="Treat duplicate paths as fatal.")
    entries: List[ManifestEntry] = Field(default_factory=list)

    def to_registry(self, base_dir: str | Path = ".", *, encoding: str = "utf-8") -> TemplateRegistry:
        """Build a :class:`TemplateRegistry`, reading ``source`` files below ``base_dir``."""

        base = Path(base_dir)
        registry = TemplateRegistry(self.name, description=self.description, strict=self.strict)
        for item in self.entries:
            if item.kind is EntryKind.DIRECTORY:
                registry.register(TemplateEntry.directory(item.path))
                continue
            body = item.body
            if body is None:
                source = base / str(item.source)
                try:
                    body = source.read_text(encoding=encoding)
                except OSError as exc:
                    raise ManifestError(f"cannot read template source '{source}': {exc}") from exc
            registry.register(TemplateEntry.file(item.path, body, item.policy))
        return registry


def load_manifest(path: str | Path) -> tuple[EditionManifest, TemplateRegistry]:
    """Load the manifest at ``path`` and the registry it describes."""

    manifest_path = Path(path)
    try:
        payload = manifest_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"cannot read manifest '{manifest_path}': {exc}") from exc

    try:
        manifest = EditionManifest.model_validate_json(payload)
    except ValidationError as exc:
        raise ManifestError(f"invalid manifest '{manifest_path}': {exc}") from exc

    return manifest, manifest.to_registry(manifest_path.parent)
