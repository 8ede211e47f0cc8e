from __future__ import annotations

from datetime import date

import pytest

from kiln.config import DEFAULT_DESCRIPTION, ScaffoldConfig, slugify


def test_from_inputs_normalizes_values():
    config = ScaffoldConfig.from_inputs("  My   Cool App ", " Utilities  for demos ", date="2026-03-04")

    assert config.name == "My Cool App"
    assert config.description == "Utilities for demos"
    assert config.date == "2026-03-04"
    assert config.slug == "my-cool-app"


def test_from_inputs_rejects_empty_name():
    with pytest.raises(ValueError):
        ScaffoldConfig.from_inputs("   ")


def test_from_inputs_rejects_malformed_date():
    with pytest.raises(ValueError):
        ScaffoldConfig.from_inputs("Demo", date="03/04/2026")


def test_defaults():
    config = ScaffoldConfig.from_inputs("Demo")

    assert config.description == DEFAULT_DESCRIPTION
    assert config.date == date.today().isoformat()


def test_accepts_date_objects():
    assert ScaffoldConfig.from_inputs("Demo", date=date(2026, 1, 2)).date == "2026-01-02"


def test_bindings():
    bindings = ScaffoldConfig.from_inputs("Demo App", "desc", date="2026-01-02").bindings()

    assert bindings == {
        "PROJECT_NAME": "Demo App",
        "PROJECT_DESC": "desc",
        "CURRENT_DATE": "2026-01-02",
        "PROJECT_SLUG": "demo-app",
    }


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Hello World", "hello-world"),
        ("Crème brûlée", "creme-brulee"),
        ("snake_case  name", "snake-case-name"),
        ("!!!", ""),
    ],
)
def test_slugify(value: str, expected: str):
    assert slugify(value) == expected


def test_symbol_only_name_falls_back_to_project_slug():
    assert ScaffoldConfig.from_inputs("???").slug == "project"
