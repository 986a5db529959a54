"""Agent definition validation: frontmatter schema and content heuristics."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog
import yaml

from agentsync.discovery import expand_all
from agentsync.frontmatter import parse_block, read_text, split_frontmatter
from agentsync.models import (
    CATEGORY_VOCABULARY,
    FRAMEWORK_VOCABULARY,
    REQUIRED_FIELDS,
    REQUIRED_SECTIONS,
    Diagnostic,
    Vocabulary,
)
from agentsync.report import ValidationReport

log = structlog.get_logger()

DEFAULT_MIN_BODY_CHARS = 100


class AgentValidator:
    """Validates agent documents and accumulates diagnostics in ``self.report``.

    One instance is one validation run. Documents never raise for schema
    problems; everything ends up in the report.
    """

    def __init__(
        self,
        root: Path,
        *,
        categories: Vocabulary = CATEGORY_VOCABULARY,
        frameworks: Vocabulary = FRAMEWORK_VOCABULARY,
        min_body_chars: int = DEFAULT_MIN_BODY_CHARS,
        required_sections: Iterable[str] = REQUIRED_SECTIONS,
    ) -> None:
        self.root = root
        self.categories = categories
        self.frameworks = frameworks
        self.min_body_chars = min_body_chars
        self.required_sections = tuple(required_sections)
        self.report = ValidationReport()

    def display_path(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return str(path)

    def validate_one(self, path: Path) -> bool:
        """Validate a single document. Returns True if it produced no errors."""
        file = self.display_path(path)
        errors_before = len(self.report.errors)
        self.report.files_checked.append(file)

        try:
            content = read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            self.report.error(file, f"Cannot read file: {exc}")
            return False

        parts = split_frontmatter(content)
        if parts is None:
            self.report.error(file, "Missing YAML frontmatter (must start with ---\\n...\\n---)")
            return False

        block, body = parts
        try:
            meta = parse_block(block)
        except yaml.YAMLError as exc:
            self.report.error(file, f"YAML parsing error: {exc}")
            return False

        if not isinstance(meta, dict):
            self.report.error(file, f"Frontmatter must be a mapping, got {type(meta).__name__}")
            return False

        self._check_required(file, meta)
        self._check_category(file, meta.get("category"))
        self._check_frameworks(file, meta.get("frameworks"))
        self._check_content(file, body)

        valid = len(self.report.errors) == errors_before
        log.debug("agent_validated", file=file, valid=valid)
        return valid

    def _check_required(self, file: str, meta: dict) -> None:
        for name in REQUIRED_FIELDS:
            if not meta.get(name):
                self.report.error(file, f"Missing required field: '{name}'")

    def _check_category(self, file: str, category: object) -> None:
        if not category or category in self.categories:
            return
        valid = ", ".join(self.categories.sorted_values())
        self.report.add(
            Diagnostic(
                file,
                f"Invalid category: '{category}'. Must be one of: {valid}",
                self.categories.unknown_severity,
            )
        )

    def _check_frameworks(self, file: str, frameworks: object) -> None:
        if not frameworks:
            return
        if not isinstance(frameworks, list):
            self.report.error(file, 'Field "frameworks" must be an array')
            return
        for framework in frameworks:
            if framework in self.frameworks:
                continue
            self.report.add(
                Diagnostic(
                    file,
                    f"Unknown framework: '{framework}'. "
                    "Consider adding to valid frameworks list",
                    self.frameworks.unknown_severity,
                )
            )

    def _check_content(self, file: str, body: str) -> None:
        body = body.strip()
        if len(body) < self.min_body_chars:
            self.report.warning(
                file,
                f"Agent content is very short (< {self.min_body_chars} chars). "
                "Add more details.",
            )
        for section in self.required_sections:
            if section not in body:
                self.report.warning(file, f"Missing recommended section: '{section}'")

    def validate_many(self, patterns: Iterable[str]) -> ValidationReport:
        """Validate every file matched by any pattern, each file once."""
        files, unmatched = expand_all(self.root, patterns)
        for pattern in unmatched:
            log.warning("validation_pattern_unmatched", pattern=pattern)
            self.report.unmatched_patterns.append(pattern)
        for path in files:
            self.validate_one(path)

        log.info(
            "validation_complete",
            files=len(self.report.files_checked),
            errors=len(self.report.errors),
            warnings=len(self.report.warnings),
        )
        return self.report
