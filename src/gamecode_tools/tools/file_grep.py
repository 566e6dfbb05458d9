"""Content search across the files below a directory."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable
from pathlib import Path

from pydantic import Field

from gamecode_tools.errors import raise_invalid_params
from gamecode_tools.tooling import Tool, ToolOutput, ToolParameters
from gamecode_tools.tools.common import (
    matches_any,
    require_directory,
    search_depth,
    walk_directory,
)

logger = logging.getLogger(__name__)

LineMatcher = Callable[[str], bool]


class FileGrepParams(ToolParameters):
    """Parameters for the file_grep tool.

    ``include`` and ``exclude`` are globs matched against the full file path.
    ``limit`` caps the number of matching files; 0 means no limit. Line
    numbers are always reported; ``line_numbers`` is accepted for compatibility.
    """

    directory: str
    pattern: str
    regex: bool = False
    case_insensitive: bool = False
    recursive: bool = True
    max_depth: int = Field(default=0, ge=0)
    limit: int = Field(default=0, ge=0)
    follow_links: bool = False
    include: str | None = None
    exclude: list[str] = Field(default_factory=list)
    line_numbers: bool = False
    before_context: int = Field(default=0, ge=0)
    after_context: int = Field(default=0, ge=0)
    file_names_only: bool = False


class LineMatch(ToolOutput):
    line_number: int
    line: str
    before_context: list[str] | None = None
    after_context: list[str] | None = None


class FileMatch(ToolOutput):
    path: str
    size: int
    matches: list[LineMatch] | None = None


class FileGrepOutput(ToolOutput):
    directory: str
    pattern: str
    files: list[FileMatch]
    files_searched: int
    files_matched: int
    total_matches: int
    limited: bool


def build_matcher(params: FileGrepParams) -> LineMatcher:
    """Compile the search pattern into a predicate over text."""
    if params.regex:
        flags = re.IGNORECASE if params.case_insensitive else 0
        try:
            compiled = re.compile(params.pattern, flags)
        except re.error as exc:
            raise_invalid_params(f"Invalid regex pattern '{params.pattern}': {exc}")
        return lambda text: compiled.search(text) is not None
    if params.case_insensitive:
        needle = params.pattern.lower()
        return lambda text: needle in text.lower()
    return lambda text: params.pattern in text


def _context(lines: list[str], start: int, end: int) -> list[str] | None:
    if start >= end:
        return None
    return [f"{index + 1}:{lines[index]}" for index in range(start, end)]


def search_file(
    path: Path, matcher: LineMatcher, params: FileGrepParams
) -> FileMatch | None:
    """Search one file; returns None when nothing matches."""
    size = path.stat().st_size
    content = path.read_text(encoding="utf-8")

    if params.file_names_only:
        if matcher(content):
            return FileMatch(path=str(path), size=size)
        return None

    lines = content.splitlines()
    matches: list[LineMatch] = []
    for index, line in enumerate(lines):
        if not matcher(line):
            continue
        before = after = None
        if params.before_context:
            before = _context(lines, max(0, index - params.before_context), index)
        if params.after_context:
            after = _context(
                lines, index + 1, min(len(lines), index + 1 + params.after_context)
            )
        matches.append(
            LineMatch(
                line_number=index + 1,
                line=line,
                before_context=before,
                after_context=after,
            )
        )
    if not matches:
        return None
    return FileMatch(path=str(path), size=size, matches=matches)


def grep_directory(
    root: Path, matcher: LineMatcher, params: FileGrepParams
) -> FileGrepOutput:
    """Search the files below ``root``.

    ``files_searched`` counts the files actually read. Unreadable and non UTF-8
    files are skipped and not counted.
    """
    max_depth = search_depth(params.recursive, params.max_depth)
    candidates = [
        path
        for path, is_dir in walk_directory(root, max_depth, params.follow_links)
        if not is_dir
        and path.is_file()
        and not matches_any(str(path), params.exclude)
        and (params.include is None or matches_any(str(path), [params.include]))
    ]

    files: list[FileMatch] = []
    files_searched = 0
    total_matches = 0
    limited = False
    for path in candidates:
        try:
            file_match = search_file(path, matcher, params)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping %s: %s", path, exc)
            continue
        files_searched += 1
        if file_match is None:
            continue
        # a further matching file exists past the limit
        if params.limit and len(files) >= params.limit:
            limited = True
            break
        total_matches += len(file_match.matches or [])
        files.append(file_match)

    files.sort(key=lambda item: item.path)
    return FileGrepOutput(
        directory=str(root),
        pattern=params.pattern,
        files=files,
        files_searched=files_searched,
        files_matched=len(files),
        total_matches=total_matches,
        limited=limited,
    )


class FileGrep(Tool[FileGrepParams, FileGrepOutput]):
    """Search file contents for a literal string or regular expression."""

    name = "file_grep"
    description = "Search file contents for a pattern"
    parameters_model = FileGrepParams

    async def execute(self, params: FileGrepParams) -> FileGrepOutput:
        root = require_directory(params.directory)
        matcher = build_matcher(params)
        return await asyncio.to_thread(grep_directory, root, matcher, params)
