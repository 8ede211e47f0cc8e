"""Strict placeholder substitution for template bodies.

Placeholders use the ``{{ NAME }}`` syntax where ``NAME`` is a
case-sensitive identifier. A placeholder may pipe its value through one or
more filters (``{{ NAME|upper }}``). A literal ``{{`` is written as ``\\{{``.

Resolution is all-or-nothing: when any placeholder in a body has no binding
the whole body is rejected with :class:`~kiln.errors.UnboundPlaceholderError`
and nothing is substituted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, MutableMapping

from .config import slugify
from .errors import TemplateRenderingError, UnboundPlaceholderError

__all__ = [
    "TemplateRenderer",
    "placeholders",
    "resolve",
]


_IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"
_TOKEN_PATTERN = re.compile(
    r"\\(?P<escaped>\{\{)"
    rf"|\{{\{{\s*(?P<name>{_IDENTIFIER})(?P<filters>(?:\s*\|\s*{_IDENTIFIER})*)\s*\}}\}}"
)


def _default_filters() -> dict[str, Callable[[str], str]]:
    return {
        "upper": lambda value: value.upper(),
        "lower": lambda value: value.lower(),
        "title": lambda value: value.title(),
        "slug": lambda value: slugify(value),
        "strip": lambda value: value.strip(),
    }


def placeholders(body: str) -> tuple[str, ...]:
    """Return the distinct placeholder names in ``body`` in order of appearance."""

    seen: dict[str, None] = {}
    for match in _TOKEN_PATTERN.finditer(body):
        name = match.group("name")
        if name is not None:
            seen.setdefault(name, None)
    return tuple(seen)


@dataclass(slots=True)
class TemplateRenderer:
    """Resolve ``{{ NAME|filters }}`` placeholders against a binding mapping."""

    filters: MutableMapping[str, Callable[[str], str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.filters:
            self.filters.update(_default_filters())

    def resolve(self, body: str, bindings: Mapping[str, str]) -> str:
        """Return ``body`` with every placeholder replaced by its binding.

        Raises
        ------
        UnboundPlaceholderError
            When one or more placeholder names have no binding. The error lists
            every missing name, not just the first.
        TemplateRenderingError
            When a placeholder references an unknown filter.
        """

        missing = [name for name in placeholders(body) if name not in bindings]
        if missing:
            raise UnboundPlaceholderError(missing)

        def substitute(match: re.Match[str]) -> str:
            if match.group("escaped") is not None:
                return "{{"

            value = str(bindings[match.group("name")])
            for filter_name in _split_filters(match.group("filters")):
                try:
                    filter_func = self.filters[filter_name]
                except KeyError as exc:
                    raise TemplateRenderingError(f"unknown filter '{filter_name}'") from exc
                value = str(filter_func(value))
            return value

        # re.sub never rescans replacement text, so bound values that look
        # like placeholders are emitted verbatim.
        return _TOKEN_PATTERN.sub(substitute, body)

    def render_file(
        self,
        template_path: str | Path,
        bindings: Mapping[str, str],
        *,
        target: str | Path | None = None,
        encoding: str = "utf-8",
    ) -> str:
        """Resolve the file at ``template_path`` and optionally write it to ``target``."""

        template_path = Path(template_path)
        if not template_path.is_file():
            raise FileNotFoundError(template_path)

        rendered = self.resolve(template_path.read_text(encoding=encoding), bindings)

        if target is not None:
            target_path = Path(target)
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(rendered, encoding=encoding)

        return rendered


def _split_filters(raw: str) -> list[str]:
    return [part.strip() for part in raw.split("|") if part.strip()]


_DEFAULT_RENDERER = TemplateRenderer()


def resolve(body: str, bindings: Mapping[str, str]) -> str:
    """Resolve ``body`` with the default filter set."""

    return _DEFAULT_RENDERER.resolve(body, bindings)
