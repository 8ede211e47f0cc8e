"""Standard edition plus path-scoped rules and a hooks configuration."""

from __future__ import annotations

from ..registry import ConflictPolicy, TemplateRegistry
from .standard import add_standard_entries

TESTING_RULE_TEMPLATE = """# Testing Rules

Applies to: `tests/**`

- Every bug fix starts with a failing test.
- Tests must not depend on network access or wall-clock time.
- Keep fixtures next to the tests that use them.
"""

CODE_STYLE_RULE_TEMPLATE = """# Code Style Rules

Applies to: `src/**`

- Prefer small, pure functions; keep I/O at the edges.
- No hardcoded local paths or credentials.
- Public functions carry a short docstring.
"""

DOCS_RULE_TEMPLATE = """# Documentation Rules for {{ PROJECT_NAME }}

Applies to: `*.md`

- PROJECT_STATE.md reflects the current state, not history.
- SESSION_LOG.md is append-only, newest entry first.
"""

HOOKS_TEMPLATE = """{
  "hooks": {
    "PreToolUse": [],
    "PostToolUse": [],
    "Stop": []
  }
}
"""


def build_extended() -> TemplateRegistry:
    registry = TemplateRegistry(
        "extended",
        description="Standard edition with path-scoped rules and hook configuration",
    )
    add_standard_entries(registry)
    registry.add_file(".claude/rules/testing.md", TESTING_RULE_TEMPLATE, ConflictPolicy.CREATE_IF_ABSENT)
    registry.add_file(".claude/rules/code-style.md", CODE_STYLE_RULE_TEMPLATE, ConflictPolicy.CREATE_IF_ABSENT)
    registry.add_file(".claude/rules/docs.md", DOCS_RULE_TEMPLATE, ConflictPolicy.CREATE_IF_ABSENT)
    registry.add_file(".claude/hooks.json", HOOKS_TEMPLATE, ConflictPolicy.SKIP_IF_PRESENT)
    return registry
