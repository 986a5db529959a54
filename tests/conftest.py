from __future__ import annotations

from pathlib import Path

import pytest
import structlog

from agentsync.models import FrameworkMapping
from agentsync.validator import AgentValidator

VALID_BODY = """
# Hooks Reviewer

## Your Role

You review React components for correct hook usage and dependency arrays.

## Review Checklist

- Hooks are only called at the top level of a component
- Effect dependency arrays list every value read inside the effect
"""


def make_agent(
    name: str = "hooks-reviewer",
    description: str = "Reviews React hooks usage",
    category: str = "review",
    frameworks: str = "[react]",
    body: str = VALID_BODY,
) -> str:
    return (
        "---\n"
        f"name: {name}\n"
        f"description: {description}\n"
        f"category: {category}\n"
        f"frameworks: {frameworks}\n"
        "---\n"
        f"{body}"
    )


@pytest.fixture
def project(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def validator(project: Path) -> AgentValidator:
    return AgentValidator(project)


@pytest.fixture
def vue_mapping() -> FrameworkMapping:
    return FrameworkMapping(name="vue", source="lib/vue", target="out/vue")


@pytest.fixture
def write_file(project: Path):
    def _write(relative: str, content: str) -> Path:
        path = project / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def agent_text():
    return make_agent


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
