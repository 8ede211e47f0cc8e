"""Optional git post-step run after a successful materialisation."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

__all__ = ["GitInvoker", "VcsResult"]


LOGGER = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


@dataclass(frozen=True, slots=True)
class VcsResult:
    """Outcome of a version-control step. Never a materialisation failure."""

    ok: bool
    detail: str
    skipped: bool = False


class GitInvoker:
    """Initialise a repository in the project root and commit everything."""

    def __init__(self, executable: str = "git", *, runner: Runner = subprocess.run) -> None:
        self.executable = executable
        self._runner = runner

    def _run(self, args: Sequence[str], cwd: Path) -> subprocess.CompletedProcess:
        return self._runner(
            [self.executable, *args],
            cwd=cwd,
            capture_output=True,
            check=True,
            text=True,
        )

    def init_and_commit(self, root: str | Path, message: str) -> VcsResult:
        """Run ``git init``, ``git add .`` and ``git commit`` inside ``root``.

        Existing repositories are left untouched. Errors are returned, not
        raised, because the files on disk are already complete.
        """

        root_path = Path(root)
        if (root_path / ".git").exists():
            return VcsResult(ok=True, detail="git repository already exists", skipped=True)

        steps: list[Sequence[str]] = [["init"], ["add", "."], ["commit", "-m", message]]
        for step in steps:
            try:
                self._run(step, root_path)
            except FileNotFoundError:
                LOGGER.warning("git executable %r not found", self.executable)
                return VcsResult(ok=False, detail=f"{self.executable} executable not found")
            except subprocess.CalledProcessError as exc:
                output = (exc.stderr or exc.stdout or "").strip()
                LOGGER.warning("git %s failed: %s", step[0], output)
                return VcsResult(ok=False, detail=f"git {step[0]} failed: {output}")

        LOGGER.info("initialised git repository in %s", root_path)
        return VcsResult(ok=True, detail="initialised repository and created initial commit")
