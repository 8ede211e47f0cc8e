from __future__ import annotations

import json
from pathlib import Path

import pytest

from kiln.errors import DuplicatePathError, ManifestError
from kiln.manifest import EditionManifest, load_manifest
from kiln.registry import ConflictPolicy, EntryKind


def _write_manifest(directory: Path, payload: dict) -> Path:
    path = directory / "edition.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_manifest_builds_registry(tmp_path: Path):
    (tmp_path / "templates").mkdir()
    (tmp_path / "templates" / "readme.md").write_text("# {{ PROJECT_NAME }}", encoding="utf-8")
    path = _write_manifest(
        tmp_path,
        {
            "name": "team",
            "description": "Team conventions",
            "entries": [
                {"path": "README.md", "source": "templates/readme.md", "policy": "overwrite-always"},
                {"path": "NOTES.md", "body": "notes for {{ PROJECT_NAME }}"},
                {"path": "docs", "kind": "directory"},
            ],
        },
    )

    manifest, registry = load_manifest(path)

    assert manifest.name == "team"
    assert registry.name == "team"
    assert registry.description == "Team conventions"
    entries = list(registry.all())
    assert [entry.display_path for entry in entries] == ["README.md", "NOTES.md", "docs"]
    assert entries[0].body == "# {{ PROJECT_NAME }}"
    assert entries[0].policy is ConflictPolicy.OVERWRITE_ALWAYS
    assert entries[1].policy is ConflictPolicy.CREATE_IF_ABSENT
    assert entries[2].kind is EntryKind.DIRECTORY


@pytest.mark.parametrize(
    "entry",
    [
        {"path": "a.md"},
        {"path": "a.md", "body": "x", "source": "y"},
        {"path": "docs", "kind": "directory", "body": "x"},
        {"path": "a.md", "body": "x", "policy": "sometimes"},
        {"path": "", "body": "x"},
        {"path": "a.md", "body": "x", "mode": "0644"},
    ],
)
def test_invalid_entries_raise_manifest_error(tmp_path: Path, entry: dict):
    path = _write_manifest(tmp_path, {"name": "bad", "entries": [entry]})

    with pytest.raises(ManifestError):
        load_manifest(path)


def test_missing_source_raises_manifest_error(tmp_path: Path):
    path = _write_manifest(tmp_path, {"name": "bad", "entries": [{"path": "a.md", "source": "nope.md"}]})

    with pytest.raises(ManifestError):
        load_manifest(path)


def test_missing_manifest_raises_manifest_error(tmp_path: Path):
    with pytest.raises(ManifestError):
        load_manifest(tmp_path / "missing.json")


def test_strict_manifest_rejects_duplicates():
    manifest = EditionManifest.model_validate(
        {
            "name": "strict",
            "strict": True,
            "entries": [{"path": "a.md", "body": "1"}, {"path": "a.md", "body": "2"}],
        }
    )

    with pytest.raises(DuplicatePathError):
        manifest.to_registry()
