"""Data models and vocabularies for agent definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class VocabularyPolicy(StrEnum):
    """How a value outside a vocabulary is reported.

    A CLOSED vocabulary rejects unknown values (error); an OPEN one is expected
    to grow and only flags them (warning).
    """

    CLOSED = "closed"
    OPEN = "open"


@dataclass(frozen=True)
class Vocabulary:
    values: frozenset[str]
    policy: VocabularyPolicy = VocabularyPolicy.CLOSED

    def __contains__(self, value: object) -> bool:
        return isinstance(value, str) and value in self.values

    @property
    def unknown_severity(self) -> Severity:
        return Severity.ERROR if self.policy == VocabularyPolicy.CLOSED else Severity.WARNING

    def with_additions(self, extra: list[str] | tuple[str, ...]) -> Vocabulary:
        return Vocabulary(self.values | frozenset(extra), self.policy)

    def sorted_values(self) -> list[str]:
        return sorted(self.values)


CATEGORY_VOCABULARY = Vocabulary(
    frozenset({"plan", "work", "review", "compound"}),
    VocabularyPolicy.CLOSED,
)

FRAMEWORK_VOCABULARY = Vocabulary(
    frozenset(
        {
            "react",
            "vue",
            "angular",
            "svelte",
            "next.js",
            "nuxt",
            "remix",
            "quasar",
            "javascript",
            "typescript",
        }
    ),
    VocabularyPolicy.OPEN,
)

REQUIRED_FIELDS: tuple[str, ...] = ("name", "description", "category", "frameworks")

REQUIRED_SECTIONS: tuple[str, ...] = ("## Your Role", "## Review Checklist")


@dataclass(frozen=True)
class FrameworkMapping:
    """One sync unit: documents in ``source`` are mirrored into ``target``."""

    name: str
    source: str
    target: str

    def source_dir(self, root: Path) -> Path:
        return root / self.source

    def target_dir(self, root: Path) -> Path:
        return root / self.target


@dataclass(frozen=True)
class Diagnostic:
    file: str
    message: str
    severity: Severity = Severity.ERROR

    def to_dict(self) -> dict:
        return {"file": self.file, "message": self.message, "severity": self.severity.value}


@dataclass
class AgentDocument:
    path: Path
    frontmatter: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @property
    def name(self) -> str:
        return str(self.frontmatter.get("name") or self.path.stem)

    @property
    def category(self) -> str | None:
        value = self.frontmatter.get("category")
        return str(value) if value else None

    @property
    def frameworks(self) -> list[str]:
        value = self.frontmatter.get("frameworks")
        if not isinstance(value, list):
            return []
        return [str(v) for v in value]
