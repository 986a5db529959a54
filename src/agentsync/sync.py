"""Agent definition sync: library/<framework>/ -> packages/<pkg>/agents/.

Every run fully replaces each target directory, so files deleted or renamed
in the source never linger in the package.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from agentsync.errors import FileOperationError
from agentsync.mappings import check_disjoint
from agentsync.models import FrameworkMapping

log = structlog.get_logger()


@dataclass
class SyncEntryResult:
    mapping: FrameworkMapping
    files: list[str] = field(default_factory=list)
    skipped: bool = False

    @property
    def count(self) -> int:
        return len(self.files)


@dataclass
class SyncResult:
    entries: list[SyncEntryResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(entry.count for entry in self.entries)


@dataclass
class TargetStatus:
    mapping: FrameworkMapping
    exists: bool
    count: int = 0


def list_documents(directory: Path, extension: str = ".md") -> list[Path]:
    """Immediate regular files in ``directory`` with the document extension."""
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        raise FileOperationError(directory, "list", str(exc)) from exc
    return [p for p in entries if p.is_file() and p.name.endswith(extension)]


def empty_dir(directory: Path) -> None:
    """Remove everything inside ``directory``, keeping the directory itself."""
    try:
        for child in directory.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
    except OSError as exc:
        raise FileOperationError(directory, "empty", str(exc)) from exc


def sync_mapping(mapping: FrameworkMapping, root: Path, extension: str = ".md") -> SyncEntryResult:
    src = mapping.source_dir(root)
    dst = mapping.target_dir(root)

    if not src.is_dir():
        log.info("sync_source_missing", framework=mapping.name, source=mapping.source)
        return SyncEntryResult(mapping, skipped=True)

    try:
        dst.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileOperationError(dst, "create", str(exc)) from exc

    empty_dir(dst)

    documents = list_documents(src, extension)
    if not documents:
        log.warning("sync_source_empty", framework=mapping.name, source=mapping.source)
        return SyncEntryResult(mapping)

    synced: list[str] = []
    for src_file in documents:
        try:
            shutil.copy2(src_file, dst / src_file.name)
        except OSError as exc:
            raise FileOperationError(dst / src_file.name, "copy", str(exc)) from exc
        log.debug("agent_synced", framework=mapping.name, file=src_file.name)
        synced.append(src_file.name)

    log.info("framework_synced", framework=mapping.name, count=len(synced))
    return SyncEntryResult(mapping, files=synced)


def sync_all(
    mappings: Iterable[FrameworkMapping], root: Path, extension: str = ".md"
) -> SyncResult:
    """Mirror each mapping's source documents into its target, in table order.

    Missing or empty sources sync zero files. A table whose targets overlap a
    source raises ConfigError before anything is touched. A filesystem failure
    raises FileOperationError and stops the run; earlier entries stay synced.
    """
    mappings = tuple(mappings)
    check_disjoint(mappings, root)
    result = SyncResult()
    for mapping in mappings:
        result.entries.append(sync_mapping(mapping, root, extension))
    log.info("sync_complete", total=result.total)
    return result


def verify_targets(
    mappings: Iterable[FrameworkMapping], root: Path, extension: str = ".md"
) -> list[TargetStatus]:
    """Report each target's document count without touching the filesystem."""
    statuses: list[TargetStatus] = []
    for mapping in mappings:
        dst = mapping.target_dir(root)
        if not dst.is_dir():
            log.warning("sync_target_missing", framework=mapping.name, target=mapping.target)
            statuses.append(TargetStatus(mapping, exists=False))
            continue
        try:
            count = len(list_documents(dst, extension))
        except FileOperationError as exc:
            log.warning("sync_target_unreadable", framework=mapping.name, error=str(exc))
            count = 0
        statuses.append(TargetStatus(mapping, exists=True, count=count))
    return statuses
