"""Recursive file search by name, glob or path substring."""

from __future__ import annotations

import asyncio
import fnmatch
from enum import Enum
from pathlib import Path

from pydantic import Field

from gamecode_tools.tooling import Tool, ToolOutput, ToolParameters
from gamecode_tools.tools.common import (
    matches_any,
    require_directory,
    search_depth,
    walk_directory,
)


class FindMode(str, Enum):
    """How ``pattern`` is matched.

    ``name`` compares the entry name (globs allowed when the pattern contains
    ``*``), ``pattern`` globs the full path and ``path`` is a substring test on
    the full path.
    """

    NAME = "name"
    PATTERN = "pattern"
    PATH = "path"


class FileKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    ALL = "all"


class FileFindParams(ToolParameters):
    """Parameters for the file_find tool.

    ``max_depth`` and ``limit`` use 0 for "no limit".
    """

    directory: str
    pattern: str
    mode: FindMode = FindMode.NAME
    file_type: FileKind = FileKind.ALL
    recursive: bool = True
    max_depth: int = Field(default=0, ge=0)
    limit: int = Field(default=0, ge=0)
    follow_links: bool = False
    ignore: list[str] = Field(default_factory=list)


class FoundEntry(ToolOutput):
    path: str
    name: str
    is_dir: bool
    size: int | None = None
    modified: int | None = None


class FileFindOutput(ToolOutput):
    directory: str
    pattern: str
    entries: list[FoundEntry]
    total: int
    limited: bool


def _matches(path: Path, params: FileFindParams) -> bool:
    if params.mode is FindMode.NAME:
        return path.name == params.pattern or (
            "*" in params.pattern and fnmatch.fnmatchcase(path.name, params.pattern)
        )
    if params.mode is FindMode.PATTERN:
        return fnmatch.fnmatchcase(str(path), params.pattern)
    return params.pattern in str(path)


def _describe(path: Path, is_dir: bool) -> FoundEntry:
    try:
        stat = path.stat()
    except OSError:
        return FoundEntry(path=str(path), name=path.name, is_dir=is_dir)
    return FoundEntry(
        path=str(path),
        name=path.name,
        is_dir=is_dir,
        size=None if is_dir else stat.st_size,
        modified=int(stat.st_mtime),
    )


def find_entries(
    root: Path, params: FileFindParams
) -> tuple[list[FoundEntry], int, bool]:
    """Walk ``root`` and collect matches.

    Returns:
        The kept entries sorted by path, the total number of matches and
        whether the limit cut the result short.

    """
    max_depth = search_depth(params.recursive, params.max_depth)
    found: list[tuple[Path, bool]] = []
    total = 0
    limited = False
    for path, is_dir in walk_directory(root, max_depth, params.follow_links):
        if params.file_type is FileKind.FILE and is_dir:
            continue
        if params.file_type is FileKind.DIRECTORY and not is_dir:
            continue
        if matches_any(str(path), params.ignore):
            continue
        if not _matches(path, params):
            continue
        total += 1
        if params.limit and len(found) >= params.limit:
            limited = True
            continue
        found.append((path, is_dir))

    entries = [_describe(path, is_dir) for path, is_dir in found]
    entries.sort(key=lambda entry: entry.path)
    return entries, total, limited


class FileFind(Tool[FileFindParams, FileFindOutput]):
    """Find files and directories below a root directory."""

    name = "file_find"
    description = "Find files matching a pattern"
    parameters_model = FileFindParams

    async def execute(self, params: FileFindParams) -> FileFindOutput:
        root = require_directory(params.directory)
        entries, total, limited = await asyncio.to_thread(find_entries, root, params)
        return FileFindOutput(
            directory=str(root),
            pattern=params.pattern,
            entries=entries,
            total=total,
            limited=limited,
        )
