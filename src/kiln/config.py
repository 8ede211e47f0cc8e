"""Configuration helpers shared by the scaffolder and CLI."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from datetime import date as _date
from typing import Mapping

__all__ = ["DEFAULT_DESCRIPTION", "ScaffoldConfig", "slugify"]


DEFAULT_DESCRIPTION = "A Claude Code managed project"

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_\-]+")


def slugify(value: str, *, separator: str = "-") -> str:
    """Create a filesystem friendly, ASCII only slug from ``value``."""

    text = unicodedata.normalize("NFKD", str(value))
    text = text.encode("ascii", "ignore").decode("ascii")
    text = _NON_WORD.sub("", text).strip().lower()
    return _SEPARATORS.sub(separator, text).strip(separator)


@dataclass(slots=True)
class ScaffoldConfig:
    """Values collected from the user before an edition is materialised.

    Attributes
    ----------
    name:
        The display name for the project, whitespace-normalised but otherwise
        preserved verbatim.
    description:
        A one line summary. Falls back to :data:`DEFAULT_DESCRIPTION`.
    date:
        ISO formatted date stamped into the generated documents.
    slug:
        Filesystem friendly version of :attr:`name`, used as the default
        target directory by the CLI.
    """

    name: str
    description: str
    date: str
    slug: str

    @classmethod
    def from_inputs(
        cls,
        name: str,
        description: str = "",
        *,
        date: str | _date | None = None,
    ) -> "ScaffoldConfig":
        """Build a :class:`ScaffoldConfig` from raw user input."""

        normalized_name = " ".join(name.split())
        if not normalized_name:
            raise ValueError("project name must not be empty")

        summary = " ".join(description.split()) or DEFAULT_DESCRIPTION

        if date is None:
            stamp = _date.today().isoformat()
        elif isinstance(date, _date):
            stamp = date.isoformat()
        else:
            stamp = _date.fromisoformat(date).isoformat()

        return cls(
            name=normalized_name,
            description=summary,
            date=stamp,
            slug=slugify(normalized_name) or "project",
        )

    def bindings(self) -> Mapping[str, str]:
        """Return the placeholder bindings understood by the bundled editions."""

        return {
            "PROJECT_NAME": self.name,
            "PROJECT_DESC": self.description,
            "CURRENT_DATE": self.date,
            "PROJECT_SLUG": self.slug,
        }
