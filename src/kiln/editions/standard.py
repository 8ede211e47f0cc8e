"""Default edition: core files plus guides, assistant settings and CI."""

from __future__ import annotations

from ..registry import ConflictPolicy, TemplateRegistry
from .core import add_core_entries

CONTINUATION_TEMPLATE = """# {{ PROJECT_NAME }} - Continuation Guide

Quick reference for resuming work on this project.

---

## Startup Commands

```bash
git status
pytest -v
gh run list --limit 3
```

---

## State Verification

1. Read PROJECT_STATE.md for current status
2. Read SESSION_LOG.md for recent work and next steps
3. Check git log for recent commits: `git log --oneline -5`

---

## Key Workflows

### Adding a New Feature
1. Update SESSION_LOG.md with what you're starting
2. Plan complex features before implementing them
3. Implement the feature and write tests
4. Run tests: `pytest -v`
5. Commit with a descriptive message
6. Update PROJECT_STATE.md if needed

### Fixing a Bug
1. Reproduce the bug
2. Write a failing test
3. Fix the bug and verify the test passes
4. Commit with `fix:` prefix

---

*Update this file when workflows change*
"""

AGENTS_TEMPLATE = """# {{ PROJECT_NAME }} - Agent Instructions

**Purpose:** Authoritative guide for AI agents working on this project.

---

## Project Overview

{{ PROJECT_DESC }}

---

## Subagents

| Type | Use For |
|------|---------|
| `Explore` | Finding files, understanding structure |
| `Plan` | Implementation strategies, architecture decisions |
| `Bash` | Git operations, command execution |
| `general-purpose` | Multi-step research |

---

## Rules

- NEVER commit secrets or credentials
- NEVER update git config
- ALWAYS run the test suite before committing
- ALWAYS record decisions in SESSION_LOG.md

---

*Last updated: {{ CURRENT_DATE }}*
"""

SETTINGS_TEMPLATE = """{
  "mcpServers": {},
  "permissions": {
    "allow": [],
    "deny": []
  },
  "hooks": {}
}
"""

COMMIT_SKILL_TEMPLATE = """# Commit Skill

**Purpose:** Create properly formatted git commits with consistent style.
**Invoke:** /commit or when the user asks to commit changes

---

## Blocking Gates

1. Must have changes to commit (staged or unstaged)
2. Must not have merge conflicts
3. Tests should pass (if a test suite exists)

## Steps

1. Run `git status` and `git diff` to review changes
2. Run `git log --oneline -5` and match the existing style
3. Stage relevant files with `git add`; never stage secrets
4. Write a conventional commit message: `type: subject`
5. Run `git log -1` to verify the commit

## Safety Rules

- NEVER use --force or --no-verify
- NEVER amend pushed commits without explicit permission
"""

SKILLS_TEMPLATE = """# {{ PROJECT_NAME }} - Skills & Commands Reference

**Purpose:** Document available skills, slash commands, and automation capabilities.

---

## What Are Skills?

Skills are pre-defined workflows the assistant can execute. They automate
multi-step tasks, enforce consistent quality gates, and are invoked with
`/skill-name`.

## Skill Location

```
.claude/
└── skills/
    └── my-skill/
        └── SKILL.md
```

## SKILL.md Structure

```markdown
# Skill Name

**Purpose:** What this skill does
**Invoke:** /skill-name

## Trigger
When to use this skill

## Steps
1. Step one
2. Step two

## Blocking Gates
Conditions that must pass before proceeding

## Rollback
What to do if the skill fails
```

## Built-in Commands

| Command | Description |
|---------|-------------|
| `/help` | Show available commands |
| `/clear` | Clear conversation |
| `/compact` | Reduce context size |
| `/config` | View/edit configuration |
| `/memory` | Manage memory |
| `/mcp` | MCP server management |
| `/review` | Code review |

## Project Skills

### /commit
**Purpose:** Create a properly formatted git commit
**Location:** `.claude/skills/commit/SKILL.md`

## Skill Best Practices

- Include a clear purpose statement and blocking gates
- Document inputs, outputs and rollback steps
- Never hardcode credentials
- Do not create skills for one-step tasks

---

*Update this file when adding new skills*

*Last updated: {{ CURRENT_DATE }}*
"""

STANDARDS_TEMPLATE = """# AI Agent Standards & Protocols Reference

**Purpose:** Reference guide for the agent protocols used by {{ PROJECT_NAME }}.

---

## Model Context Protocol (MCP)

MCP is an open standard for connecting AI assistants to external data
sources and tools through small server processes.

### Common MCP Servers

| Type | Package | Use |
|------|---------|-----|
| Filesystem | `@modelcontextprotocol/server-filesystem` | File access |
| PostgreSQL | `@modelcontextprotocol/server-postgres` | Database |
| Git | `@modelcontextprotocol/server-git` | Git operations |
| Memory | `@modelcontextprotocol/server-memory` | Persistent memory |

### Configuring MCP Servers

In `.claude/settings.json`:

```json
{
  "mcpServers": {
    "filesystem": {
      "command": "npx",
      "args": ["-y", "@modelcontextprotocol/server-filesystem", "/allowed/path"]
    }
  }
}
```

### MCP Commands

```
/mcp                    # List configured servers
/mcp add <server>       # Add a server
/mcp remove <server>    # Remove a server
```

### Resources

- **Specification:** https://spec.modelcontextprotocol.io/
- **Server Registry:** https://github.com/modelcontextprotocol/servers

---

## Security Best Practices

- Use environment variables for credentials
- Validate all inputs and never trust agent output without review
- Limit filesystem servers to specific directories
- Prefer read-only access when possible

---

*Last updated: {{ CURRENT_DATE }}*
"""

# GitHub expressions are escaped so they survive resolution verbatim.
CI_TEMPLATE = """name: CI

on:
  push:
    branches: [main]
  pull_request:
    branches: [main]

jobs:
  test:
    runs-on: ubuntu-latest
    strategy:
      matrix:
        python-version: ['3.11', '3.12']

    steps:
      - uses: actions/checkout@v4

      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: $\\{{ matrix.python-version }}

      - name: Install dependencies
        run: |
          python -m pip install --upgrade pip
          pip install pytest pytest-cov
          if [ -f requirements.txt ]; then pip install -r requirements.txt; fi

      - name: Run tests
        run: pytest -v --cov=src --cov-report=xml
"""

PROJECT_DIRECTORIES = ("src", "tests", "docs", "scripts", ".claude/skills")


def add_standard_entries(registry: TemplateRegistry) -> None:
    add_core_entries(registry)
    registry.add_file("CONTINUATION_GUIDE.md", CONTINUATION_TEMPLATE, ConflictPolicy.OVERWRITE_ALWAYS)
    registry.add_file("agents.md", AGENTS_TEMPLATE, ConflictPolicy.OVERWRITE_ALWAYS)
    registry.add_file("skills.md", SKILLS_TEMPLATE, ConflictPolicy.OVERWRITE_ALWAYS)
    registry.add_file("STANDARDS.md", STANDARDS_TEMPLATE, ConflictPolicy.OVERWRITE_ALWAYS)
    registry.add_file(".claude/settings.json", SETTINGS_TEMPLATE, ConflictPolicy.SKIP_IF_PRESENT)
    registry.add_file(".claude/skills/commit/SKILL.md", COMMIT_SKILL_TEMPLATE, ConflictPolicy.CREATE_IF_ABSENT)
    registry.add_file(".github/workflows/ci.yml", CI_TEMPLATE, ConflictPolicy.CREATE_IF_ABSENT)
    for directory in PROJECT_DIRECTORIES:
        registry.add_directory(directory)


def build_standard() -> TemplateRegistry:
    registry = TemplateRegistry(
        "standard",
        description="Core files, continuation guide, reference docs, agent settings and CI workflow",
    )
    add_standard_entries(registry)
    return registry
