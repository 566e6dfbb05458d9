"""Directory listing tool."""

from __future__ import annotations

import asyncio
import fnmatch
import os
from pathlib import Path

from gamecode_tools.errors import raise_invalid_params
from gamecode_tools.tooling import Tool, ToolOutput, ToolParameters
from gamecode_tools.tools.common import isoformat_mtime


class DirectoryListParams(ToolParameters):
    """Parameters for the directory_list tool."""

    path: str
    pattern: str | None = None
    include_hidden: bool = False
    directories_only: bool = False
    files_only: bool = False


class DirectoryEntry(ToolOutput):
    """One entry of a directory listing."""

    name: str
    path: str
    is_directory: bool
    size: int
    modified: str | None = None


class DirectoryListOutput(ToolOutput):
    entries: list[DirectoryEntry]
    count: int


def _list_entries(params: DirectoryListParams) -> list[DirectoryEntry]:
    entries: list[DirectoryEntry] = []
    with os.scandir(params.path) as iterator:
        for entry in iterator:
            if not params.include_hidden and entry.name.startswith("."):
                continue
            try:
                stat = entry.stat()
                is_directory = entry.is_dir()
            except OSError:
                continue
            if params.directories_only and not is_directory:
                continue
            if params.files_only and is_directory:
                continue
            if params.pattern and not fnmatch.fnmatchcase(entry.name, params.pattern):
                continue
            entries.append(
                DirectoryEntry(
                    name=entry.name,
                    path=entry.path,
                    is_directory=is_directory,
                    size=0 if is_directory else stat.st_size,
                    modified=isoformat_mtime(stat.st_mtime),
                )
            )
    entries.sort(key=lambda item: item.name)
    return entries


class DirectoryList(Tool[DirectoryListParams, DirectoryListOutput]):
    """List the contents of a directory."""

    name = "directory_list"
    description = "List contents of a directory"
    parameters_model = DirectoryListParams

    async def execute(self, params: DirectoryListParams) -> DirectoryListOutput:
        path = Path(params.path)
        if not path.is_dir():
            if not path.exists():
                raise FileNotFoundError(f"No such directory: '{params.path}'")
            raise_invalid_params(f"Path '{params.path}' is not a directory")
        entries = await asyncio.to_thread(_list_entries, params)
        return DirectoryListOutput(entries=entries, count=len(entries))
