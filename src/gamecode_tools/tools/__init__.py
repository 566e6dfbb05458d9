"""Default filesystem and process tools."""

from __future__ import annotations

from typing import Any

from gamecode_tools.tooling import Tool
from gamecode_tools.tools.directory_list import DirectoryList
from gamecode_tools.tools.directory_make import DirectoryMake
from gamecode_tools.tools.file_find import FileFind
from gamecode_tools.tools.file_grep import FileGrep
from gamecode_tools.tools.file_move import FileMove
from gamecode_tools.tools.file_read import FileRead
from gamecode_tools.tools.file_write import FileWrite
from gamecode_tools.tools.shell import Shell

__all__ = [
    "DirectoryList",
    "DirectoryMake",
    "FileFind",
    "FileGrep",
    "FileMove",
    "FileRead",
    "FileWrite",
    "Shell",
    "build_tools",
]


def build_tools() -> list[Tool[Any, Any]]:
    """Instantiate every default tool."""
    return [
        DirectoryList(),
        FileRead(),
        FileWrite(),
        DirectoryMake(),
        FileMove(),
        FileFind(),
        FileGrep(),
        Shell(),
    ]
