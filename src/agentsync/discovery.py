"""Glob expansion for agent documents, shared by the validator and the catalog."""

from __future__ import annotations

import glob
from collections.abc import Iterable
from pathlib import Path


def expand(root: Path, pattern: str) -> list[Path]:
    """Files matching ``pattern``, relative to ``root`` unless the pattern is absolute.

    The root is never part of the glob expression, so brackets or wildcards in
    its path are taken literally.
    """
    if Path(pattern).is_absolute():
        matches = [Path(p) for p in glob.glob(pattern, recursive=True)]
    else:
        matches = [root / p for p in glob.glob(pattern, root_dir=root, recursive=True)]
    return sorted(p for p in matches if p.is_file())


def expand_all(root: Path, patterns: Iterable[str]) -> tuple[list[Path], list[str]]:
    """Expand every pattern, each file once, in first-match order.

    Returns the files and the patterns that matched nothing.
    """
    seen: set[Path] = set()
    files: list[Path] = []
    unmatched: list[str] = []
    for pattern in patterns:
        matches = expand(root, pattern)
        if not matches:
            unmatched.append(pattern)
            continue
        for path in matches:
            key = path.resolve()
            if key in seen:
                continue
            seen.add(key)
            files.append(path)
    return files, unmatched
