"""Validation report: diagnostic accumulator and human-readable rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from agentsync.models import Diagnostic, Severity

_RULE = "=" * 60


@dataclass
class ValidationReport:
    """Diagnostics collected over one validation run.

    ``errors`` and ``warnings`` only grow; a fresh run needs a fresh report.
    """

    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)
    files_checked: list[str] = field(default_factory=list)
    unmatched_patterns: list[str] = field(default_factory=list)

    def add(self, diagnostic: Diagnostic) -> None:
        if diagnostic.severity == Severity.ERROR:
            self.errors.append(diagnostic)
        else:
            self.warnings.append(diagnostic)

    def error(self, file: str, message: str) -> None:
        self.add(Diagnostic(file, message, Severity.ERROR))

    def warning(self, file: str, message: str) -> None:
        self.add(Diagnostic(file, message, Severity.WARNING))

    @property
    def passed(self) -> bool:
        return not self.errors

    def errors_for(self, file: str) -> list[Diagnostic]:
        return [d for d in self.errors if d.file == file]

    def warnings_for(self, file: str) -> list[Diagnostic]:
        return [d for d in self.warnings if d.file == file]

    def to_dict(self) -> dict:
        return {
            "passed": self.passed,
            "files_checked": len(self.files_checked),
            "errors": [d.to_dict() for d in self.errors],
            "warnings": [d.to_dict() for d in self.warnings],
            "unmatched_patterns": list(self.unmatched_patterns),
        }


def _format_block(title: str, diagnostics: list[Diagnostic]) -> list[str]:
    lines = ["", f"{title} ({len(diagnostics)}):", ""]
    for diagnostic in diagnostics:
        lines.append(f"   {diagnostic.file}")
        lines.append(f"   → {diagnostic.message}")
        lines.append("")
    return lines


def format_report(report: ValidationReport) -> str:
    """Render every diagnostic followed by the pass/fail verdict."""
    lines = ["Validation Report", "", _RULE]

    if report.errors:
        lines.extend(_format_block("Errors", report.errors))
    if report.warnings:
        lines.extend(_format_block("Warnings", report.warnings))

    lines.append(_RULE)
    lines.append("")

    if not report.errors and not report.warnings:
        lines.append("All agent files are valid!")
    elif report.passed:
        lines.append(f"Validation passed with {len(report.warnings)} warning(s)")
    else:
        lines.append(f"Validation failed with {len(report.errors)} error(s)")
    return "\n".join(lines)
