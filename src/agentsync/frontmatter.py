"""Frontmatter splitting and parsing for agent documents.

A document starts with a ``---`` line, a YAML block, and a closing ``---``
line; everything after the closing marker is the body.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from agentsync.errors import FrontmatterError
from agentsync.models import AgentDocument

MARKER = "---"

_FRONTMATTER_RE = re.compile(r"\A---\n(.+?)\n---[ \t]*(?=\n|\Z)", re.DOTALL)


def read_text(path: Path) -> str:
    """Read a document as UTF-8 with line endings normalized to ``\\n``."""
    return path.read_text(encoding="utf-8").replace("\r\n", "\n")


def split_frontmatter(content: str) -> tuple[str, str] | None:
    """Return ``(header_block, body)`` or None when no header is present."""
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return None
    return match.group(1), content[match.end() :]


def parse_block(block: str) -> Any:
    """Parse the header block. Raises ``yaml.YAMLError`` on malformed syntax."""
    return yaml.safe_load(block)


def load_document(path: Path) -> AgentDocument:
    """Parse an agent document into an AgentDocument.

    Raises:
        FrontmatterError: If the header is missing, malformed, or not a mapping.
    """
    content = read_text(path)
    parts = split_frontmatter(content)
    if parts is None:
        raise FrontmatterError(f"Missing YAML frontmatter: {path}")

    block, body = parts
    try:
        meta = parse_block(block)
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"Invalid YAML frontmatter in {path}: {exc}") from exc

    if not isinstance(meta, dict):
        raise FrontmatterError(
            f"Frontmatter must be a mapping, got {type(meta).__name__}: {path}"
        )

    return AgentDocument(path=path, frontmatter=meta, body=body)
