"""Smallest edition: assistant instructions, state tracking and ignore rules."""

from __future__ import annotations

from ..registry import ConflictPolicy, TemplateRegistry

INSTRUCTIONS_TEMPLATE = """# {{ PROJECT_NAME }} - Claude Code Reference

**Auto-loaded by Claude Code at session start**

---

## Project Overview

{{ PROJECT_DESC }}

---

## Three Pillars

Every change ships with:

1. **Tests**: run `pytest -v` and make sure the suite passes.
2. **Documentation**: update PROJECT_STATE.md and SESSION_LOG.md.
3. **Git commits**: small, descriptive, conventional commit messages.

---

## Cloud-First Development

- Never hardcode local paths; derive them from the project root or the environment.
- Load credentials from environment variables, never from committed files.

---

## Session Checklist

1. Read PROJECT_STATE.md for the current status.
2. Read the latest entry in SESSION_LOG.md.
3. Check for uncommitted changes with `git status`.

---

*Last updated: {{ CURRENT_DATE }}*
"""

STATE_TEMPLATE = """# {{ PROJECT_NAME }} - Project State

**Last Updated:** {{ CURRENT_DATE }}

---

## System Status

| Component | Status | Notes |
|-----------|--------|-------|
| Core functionality | Not Started | - |
| Tests | Not Started | - |
| Documentation | In Progress | CLAUDE.md created |

---

## Recent Changes

- {{ CURRENT_DATE }}: Project initialized

---

## Known Issues

None yet.

---

## Next Milestone

Define initial project scope and requirements.
"""

SESSION_LOG_TEMPLATE = """# {{ PROJECT_NAME }} - Session Log

Append-only log of work sessions. Most recent at top.

---

## Session: {{ CURRENT_DATE }}

### Summary
- Initialized project conventions

### Next Steps
- [ ] Define project requirements
- [ ] Set up development environment
- [ ] Create initial implementation plan

### Open Questions
- None yet

---
"""

GITIGNORE_TEMPLATE = """# Python
__pycache__/
*.py[cod]
*.so
venv/
.venv/
.env
.env.local

# IDE
.idea/
.vscode/
*.swp

# OS
.DS_Store
Thumbs.db

# Testing
.coverage
htmlcov/
.pytest_cache/

# Build
build/
dist/
*.egg-info/

# Logs
*.log
logs/

# Credentials (NEVER commit)
credentials/
*.pem
*.key
secrets.json

# Node
node_modules/
"""


def build_core() -> TemplateRegistry:
    registry = TemplateRegistry(
        "core",
        description="Assistant instructions, project state and session log",
    )
    add_core_entries(registry)
    return registry


def add_core_entries(registry: TemplateRegistry) -> None:
    """Register the files every edition starts from."""

    registry.add_file("CLAUDE.md", INSTRUCTIONS_TEMPLATE, ConflictPolicy.OVERWRITE_ALWAYS)
    registry.add_file("PROJECT_STATE.md", STATE_TEMPLATE, ConflictPolicy.CREATE_IF_ABSENT)
    registry.add_file("SESSION_LOG.md", SESSION_LOG_TEMPLATE, ConflictPolicy.CREATE_IF_ABSENT)
    registry.add_file(".gitignore", GITIGNORE_TEMPLATE, ConflictPolicy.SKIP_IF_PRESENT)
