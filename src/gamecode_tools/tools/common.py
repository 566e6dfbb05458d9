"""Shared helpers for filesystem tools."""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from pathlib import Path

from gamecode_tools.errors import raise_invalid_params


def require_directory(raw_path: str) -> Path:
    """Resolve a directory path or raise an invalid params error."""
    path = Path(raw_path)
    if not path.exists():
        raise_invalid_params(f"Directory not found: {raw_path}")
    if not path.is_dir():
        raise_invalid_params(f"Path is not a directory: {raw_path}")
    return path.resolve()


def require_file(raw_path: str) -> Path:
    """Check that ``raw_path`` names an existing regular file."""
    path = Path(raw_path)
    if not path.exists():
        raise_invalid_params(f"File not found: {raw_path}")
    if not path.is_file():
        raise_invalid_params(f"Path is not a file: {raw_path}")
    return path


def require_parent(path: Path, create: bool, label: str = "Parent directory") -> None:
    """Ensure the parent of ``path`` exists, creating it when allowed."""
    parent = path.parent
    if parent.exists():
        return
    if not create:
        raise_invalid_params(f"{label} does not exist: {parent}")
    parent.mkdir(parents=True, exist_ok=True)


def search_depth(recursive: bool, max_depth: int) -> int | None:
    """Translate ``recursive``/``max_depth`` into a walk depth (None is unbounded)."""
    if not recursive:
        return 1
    return max_depth if max_depth > 0 else None


def walk_directory(
    root: Path, max_depth: int | None, follow_links: bool
) -> Iterator[tuple[Path, bool]]:
    """Yield ``(path, is_dir)`` for every entry below ``root``.

    Entries directly inside ``root`` are at depth 1. Unreadable directories are
    skipped. Siblings are visited in name order.
    """
    visited: set[Path] = {root.resolve()} if follow_links else set()
    pending: list[tuple[Path, int]] = [(root, 0)]
    while pending:
        current, depth = pending.pop()
        try:
            with os.scandir(current) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError:
            continue
        children: list[tuple[Path, int]] = []
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=follow_links)
            except OSError:
                continue
            path = Path(entry.path)
            yield path, is_dir
            if not is_dir or (max_depth is not None and depth + 1 >= max_depth):
                continue
            if follow_links:
                real = path.resolve()
                if real in visited:
                    continue
                visited.add(real)
            children.append((path, depth + 1))
        pending.extend(reversed(children))


def matches_any(value: str, patterns: Iterable[str]) -> bool:
    """Return True if ``value`` matches one of the glob patterns."""
    return any(fnmatch.fnmatchcase(value, pattern) for pattern in patterns)


def isoformat_mtime(timestamp: float) -> str:
    """Format a modification time as an RFC 3339 UTC string."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()
