"""Framework mapping table: which library/ directory feeds which package."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

import structlog
import yaml

from agentsync.errors import ConfigError
from agentsync.models import FrameworkMapping

log = structlog.get_logger()

DEFAULT_MAPPINGS: tuple[FrameworkMapping, ...] = (
    FrameworkMapping("react", "library/react", "packages/react/agents"),
    FrameworkMapping("vue", "library/vue", "packages/vue/agents"),
    FrameworkMapping("angular", "library/angular", "packages/angular/agents"),
    FrameworkMapping("svelte", "library/svelte", "packages/svelte/agents"),
    FrameworkMapping("css", "library/css", "packages/design-tools/agents"),
)

_ENTRY_KEYS = ("name", "source", "target")


def load_mappings(path: Path | None = None) -> tuple[FrameworkMapping, ...]:
    """Return the mapping table, read from ``path`` when one is given.

    The file holds a top-level ``frameworks`` list of ``{name, source, target}``
    entries, kept in file order.
    """
    if path is None:
        return DEFAULT_MAPPINGS

    if not path.is_file():
        raise ConfigError(f"Mappings file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in mappings file {path}: {exc}") from exc

    entries = data.get("frameworks") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ConfigError(f"Mappings file {path} must contain a 'frameworks' list")

    mappings = tuple(_parse_entry(entry, index, path) for index, entry in enumerate(entries))
    _check_unique(mappings, path)
    check_disjoint(mappings)
    log.info("mappings_loaded", path=str(path), count=len(mappings))
    return mappings


def _parse_entry(entry: object, index: int, path: Path) -> FrameworkMapping:
    if not isinstance(entry, dict):
        raise ConfigError(f"Entry #{index} in {path} must be a mapping")
    missing = [key for key in _ENTRY_KEYS if not entry.get(key)]
    if missing:
        raise ConfigError(f"Entry #{index} in {path} is missing: {', '.join(missing)}")
    return FrameworkMapping(
        name=str(entry["name"]),
        source=str(entry["source"]),
        target=str(entry["target"]),
    )


def _check_unique(mappings: tuple[FrameworkMapping, ...], path: Path) -> None:
    seen: set[str] = set()
    for mapping in mappings:
        if mapping.name in seen:
            raise ConfigError(f"Duplicate framework name '{mapping.name}' in {path}")
        seen.add(mapping.name)


def _overlaps(a: Path, b: Path) -> bool:
    return a == b or a in b.parents or b in a.parents


def check_disjoint(mappings: Sequence[FrameworkMapping], root: Path | None = None) -> None:
    """Reject tables where emptying a target would touch any source directory.

    Paths are resolved against ``root`` when given, otherwise compared after
    lexical normalization.
    """

    def _norm(value: str) -> Path:
        if root is None:
            return Path(os.path.normpath(value))
        return (root / value).resolve()

    sources = [(m.name, _norm(m.source)) for m in mappings]
    for mapping in mappings:
        target = _norm(mapping.target)
        for name, source in sources:
            if _overlaps(target, source):
                raise ConfigError(
                    f"Target of '{mapping.name}' ({mapping.target}) overlaps the source "
                    f"of '{name}'; syncing would delete canonical agents"
                )
