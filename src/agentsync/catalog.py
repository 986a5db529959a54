"""Read-only catalog of the agents available in the library and packages."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from agentsync.discovery import expand_all
from agentsync.errors import AgentNotFoundError, FrontmatterError
from agentsync.frontmatter import load_document
from agentsync.models import CATEGORY_VOCABULARY, AgentDocument

log = structlog.get_logger()

UNCATEGORIZED = "uncategorized"


@dataclass
class CatalogEntry:
    name: str
    category: str
    path: str
    description: str = ""
    frameworks: list[str] = field(default_factory=list)


def detect_category(doc: AgentDocument, root: Path | None = None) -> str:
    """Frontmatter category if valid, else the nearest category directory, else uncategorized.

    Only directories below ``root`` are considered when one is given.
    """
    if doc.category in CATEGORY_VOCABULARY:
        return doc.category
    path = doc.path
    if root is not None:
        try:
            path = path.relative_to(root)
        except ValueError:
            pass
    for parent in path.parents:
        if parent.name in CATEGORY_VOCABULARY:
            return parent.name
    return UNCATEGORIZED


def _display(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _iter_documents(root: Path, patterns: Iterable[str]):
    files, _ = expand_all(root, patterns)
    for path in files:
        try:
            yield load_document(path)
        except (FrontmatterError, OSError, UnicodeDecodeError) as exc:
            log.warning("catalog_skipped", path=str(path), error=str(exc))


def list_agents(
    root: Path, patterns: Iterable[str], category: str | None = None
) -> list[CatalogEntry]:
    """Collect every parseable agent document matching ``patterns``.

    Documents whose frontmatter cannot be parsed are skipped; ``agentsync
    validate`` is the place that reports them.
    """
    entries: list[CatalogEntry] = []
    for doc in _iter_documents(root, patterns):
        detected = detect_category(doc, root)
        if category and detected != category:
            continue
        entries.append(
            CatalogEntry(
                name=doc.name,
                category=detected,
                path=_display(doc.path, root),
                description=str(doc.frontmatter.get("description") or ""),
                frameworks=doc.frameworks,
            )
        )

    entries.sort(key=lambda e: (e.category, e.name))
    return entries


def list_agents_by_category(root: Path, patterns: Iterable[str]) -> dict[str, list[CatalogEntry]]:
    grouped: dict[str, list[CatalogEntry]] = {
        name: [] for name in CATEGORY_VOCABULARY.sorted_values()
    }
    grouped[UNCATEGORIZED] = []
    for entry in list_agents(root, patterns):
        grouped[entry.category].append(entry)
    return grouped


def load_agent(
    root: Path, patterns: Iterable[str], name: str, category: str | None = None
) -> AgentDocument:
    """Find an agent by frontmatter name or file stem.

    Raises:
        AgentNotFoundError: If no parseable document matches.
        FrontmatterError: If the only file named ``<name>.md`` cannot be parsed.
    """
    files, _ = expand_all(root, patterns)
    broken: FrontmatterError | None = None
    for path in files:
        try:
            doc = load_document(path)
        except FrontmatterError as exc:
            if path.stem == name:
                broken = exc
            continue
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("catalog_skipped", path=str(path), error=str(exc))
            continue
        if name not in (doc.name, path.stem):
            continue
        if category and detect_category(doc, root) != category:
            continue
        log.debug("agent_loaded", name=name, path=str(path))
        return doc

    if broken is not None:
        raise broken
    where = f" in category '{category}'" if category else ""
    raise AgentNotFoundError(f"Agent '{name}' not found{where}")


def has_agent(root: Path, patterns: Iterable[str], name: str) -> bool:
    try:
        load_agent(root, patterns, name)
    except (AgentNotFoundError, FrontmatterError):
        return False
    return True
