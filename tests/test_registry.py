from __future__ import annotations

import logging
from pathlib import Path

import pytest

from kiln.errors import DuplicatePathError
from kiln.registry import ConflictPolicy, EntryKind, TemplateEntry, TemplateRegistry


def test_entries_keep_registration_order():
    registry = TemplateRegistry("demo")
    registry.add_file("b.md", "b")
    registry.add_file("a.md", "a")
    registry.add_directory("docs")

    assert registry.paths() == ["b.md", "a.md", "docs"]
    assert len(registry) == 3


def test_all_is_restartable():
    registry = TemplateRegistry("demo", [TemplateEntry.file("x.md", "x"), TemplateEntry.file("y.md", "y")])
    assert list(registry.all()) == list(registry.all())


def test_duplicate_replaces_in_place_and_warns(caplog: pytest.LogCaptureFixture):
    registry = TemplateRegistry("demo")
    registry.add_file("a.md", "first")
    registry.add_file("b.md", "b")
    with caplog.at_level(logging.WARNING, logger="kiln.registry"):
        registry.add_file("a.md", "second", ConflictPolicy.OVERWRITE_ALWAYS)

    entries = list(registry.all())
    assert [entry.display_path for entry in entries] == ["a.md", "b.md"]
    assert entries[0].body == "second"
    assert entries[0].policy is ConflictPolicy.OVERWRITE_ALWAYS
    assert registry.duplicates == ("a.md",)
    assert "a.md" in caplog.text


def test_strict_registry_rejects_duplicates():
    registry = TemplateRegistry("demo", strict=True)
    registry.add_file("a.md", "first")
    with pytest.raises(DuplicatePathError):
        registry.add_file(["a.md"], "second")


def test_paths_given_as_segments_or_strings_are_equivalent():
    registry = TemplateRegistry("demo")
    registry.add_file(("B", "state.md"), "v0")
    assert "B/state.md" in registry
    assert ["B", "state.md"] in registry
    assert TemplateEntry.file("B/state.md", "") in registry
    assert "missing.md" not in registry


def test_entry_factories():
    entry = TemplateEntry.file("a/b.md", "body", "skip-if-present")
    assert entry.path == ("a", "b.md")
    assert entry.policy is ConflictPolicy.SKIP_IF_PRESENT
    assert entry.kind is EntryKind.FILE

    directory = TemplateEntry.directory("src")
    assert directory.kind is EntryKind.DIRECTORY
    assert directory.body == ""


def test_escaping_paths_can_be_registered():
    entry = TemplateEntry.file("../outside.md", "x")
    assert entry.path == ("..", "outside.md")
    assert entry.display_path == "../outside.md"


def test_from_directory(tmp_path: Path):
    template_dir = tmp_path / "templates"
    (template_dir / "docs").mkdir(parents=True)
    (template_dir / "empty").mkdir()
    (template_dir / "README.md").write_text("# {{ PROJECT_NAME }}", encoding="utf-8")
    (template_dir / "docs" / "index.md").write_text("index", encoding="utf-8")
    (template_dir / "notes.tmp").write_text("ignored", encoding="utf-8")

    registry = TemplateRegistry.from_directory(
        template_dir,
        policy=ConflictPolicy.SKIP_IF_PRESENT,
        ignore=["*.tmp"],
    )

    assert registry.name == "templates"
    assert registry.paths() == ["README.md", "docs/index.md", "empty"]
    entries = {entry.display_path: entry for entry in registry.all()}
    assert entries["README.md"].body == "# {{ PROJECT_NAME }}"
    assert entries["README.md"].policy is ConflictPolicy.SKIP_IF_PRESENT
    assert entries["empty"].kind is EntryKind.DIRECTORY


def test_from_directory_requires_directory(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        TemplateRegistry.from_directory(tmp_path / "missing")
