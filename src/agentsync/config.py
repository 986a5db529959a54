"""Configuration via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from agentsync.models import REQUIRED_SECTIONS


class AgentSyncConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AGENTSYNC_", env_file=".env", extra="ignore")

    # Paths
    root_dir: Path = Path(".")
    mappings_file: Path | None = None

    # Documents
    document_extension: str = ".md"

    # Validation
    validate_patterns: list[str] = ["library/**/*.md", "packages/*/agents/**/*.md"]
    min_body_chars: int = 100
    required_sections: list[str] = list(REQUIRED_SECTIONS)
    extra_frameworks: list[str] = []

    def resolved_root(self) -> Path:
        return self.root_dir.expanduser().resolve()

    def resolved_mappings_file(self) -> Path | None:
        if self.mappings_file is None:
            return None
        path = self.mappings_file.expanduser()
        return path if path.is_absolute() else self.resolved_root() / path
