"""Exceptions for operational failures (sync, configuration, document loading)."""

from __future__ import annotations

from pathlib import Path


class AgentSyncError(Exception):
    """Base exception for all agentsync errors."""


class ConfigError(AgentSyncError):
    """Invalid or missing configuration, e.g. a broken mappings file."""


class FileOperationError(AgentSyncError):
    """A filesystem operation failed while syncing a target directory."""

    def __init__(self, path: Path | str, operation: str, reason: str) -> None:
        self.path = Path(path)
        self.operation = operation
        super().__init__(f"Cannot {operation} {self.path}: {reason}")


class FrontmatterError(AgentSyncError):
    """An agent document has a missing or malformed frontmatter header."""


class AgentNotFoundError(AgentSyncError):
    """No agent document with the requested name exists."""
