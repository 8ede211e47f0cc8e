from __future__ import annotations

import argparse
import json
from pathlib import Path

import pytest

from kiln import cli
from kiln.cli import _parse_key_value_pairs, main
from kiln.vcs import VcsResult


def test_parse_key_value_pairs():
    context = _parse_key_value_pairs(["NAME=demo", "VERSION=1.0=final"])
    assert context == {"NAME": "demo", "VERSION": "1.0=final"}

    with pytest.raises(argparse.ArgumentTypeError):
        _parse_key_value_pairs(["invalid"])
    with pytest.raises(argparse.ArgumentTypeError):
        _parse_key_value_pairs([" =value"])


def test_init_creates_project(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    project_dir = tmp_path / "output"
    exit_code = main(["init", "My Project", "--directory", str(project_dir), "--date", "2026-10-17"])

    assert exit_code == 0
    assert (project_dir / "CLAUDE.md").read_text(encoding="utf-8").startswith("# My Project")
    assert (project_dir / ".github" / "workflows" / "ci.yml").exists()
    out = capsys.readouterr().out
    assert "+ created" in out
    assert "Done:" in out


def test_init_defaults_to_slug_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    assert main(["init", "Sample App", "--edition", "core"]) == 0
    assert (tmp_path / "sample-app" / "PROJECT_STATE.md").exists()


def test_init_rerun_reports_skips(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    args = ["init", "Demo", "-d", str(tmp_path), "-e", "core", "--json"]
    assert main(args) == 0
    capsys.readouterr()

    assert main(args) == 0
    report = json.loads(capsys.readouterr().out)
    outcomes = {result["path"]: result["outcome"] for result in report["results"]}
    assert outcomes == {
        "CLAUDE.md": "overwritten",
        "PROJECT_STATE.md": "skipped",
        "SESSION_LOG.md": "skipped",
        ".gitignore": "skipped",
    }


def test_init_partial_failure_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    (tmp_path / "SESSION_LOG.md").mkdir()
    exit_code = main(["init", "Demo", "-d", str(tmp_path), "-e", "core"])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert "! failed" in captured.out
    assert "type-mismatch" in captured.out
    assert "Partially complete" in captured.err
    assert (tmp_path / "CLAUDE.md").exists()


def test_init_with_manifest_and_context(tmp_path: Path):
    manifest = tmp_path / "edition.json"
    manifest.write_text(
        json.dumps({"name": "team", "entries": [{"path": "TEAM.md", "body": "{{ PROJECT_NAME }}: {{ TEAM }}"}]}),
        encoding="utf-8",
    )
    target = tmp_path / "out"

    exit_code = main(["init", "Demo", "-d", str(target), "-m", str(manifest), "-c", "TEAM=Platform"])

    assert exit_code == 0
    assert (target / "TEAM.md").read_text(encoding="utf-8") == "Demo: Platform"


def test_init_root_is_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    target = tmp_path / "file"
    target.write_text("", encoding="utf-8")

    assert main(["init", "Demo", "-d", str(target)]) == 2
    assert "invalid target root" in capsys.readouterr().err


def test_init_rejects_empty_name(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["init", "  ", "-d", str(tmp_path)]) == 2
    assert "project name must not be empty" in capsys.readouterr().err


def test_init_with_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    calls: list[tuple[str, str]] = []

    def fake_init_and_commit(self, root, message):
        calls.append((root, message))
        return VcsResult(ok=True, detail="initialised repository and created initial commit")

    monkeypatch.setattr(cli.GitInvoker, "init_and_commit", fake_init_and_commit)
    assert main(["init", "Demo", "-d", str(tmp_path), "-e", "core", "--git"]) == 0

    assert calls == [(str(tmp_path.resolve()), "chore: Initialize Demo with kiln edition core")]
    assert "git: initialised" in capsys.readouterr().out


def test_render_writes_to_output(tmp_path: Path):
    template_path = tmp_path / "template.txt"
    template_path.write_text("Hello {{ NAME }}", encoding="utf-8")
    output_path = tmp_path / "output.txt"

    exit_code = main(["render", str(template_path), "-c", "NAME=world", "-o", str(output_path)])

    assert exit_code == 0
    assert output_path.read_text(encoding="utf-8") == "Hello world"


def test_render_unbound_placeholder(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    template_path = tmp_path / "template.txt"
    template_path.write_text("Hello {{ NAME }}", encoding="utf-8")

    assert main(["render", str(template_path)]) == 2
    assert "unbound placeholder(s): NAME" in capsys.readouterr().err


def test_editions_lists_entries(capsys: pytest.CaptureFixture[str]):
    assert main(["editions"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("core:")
    assert "  .gitignore [file, skip-if-present]" in out
    assert "  src [directory, create-if-absent]" in out
