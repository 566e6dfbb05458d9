"""Directory creation tool."""

from __future__ import annotations

import asyncio
from pathlib import Path

from gamecode_tools.errors import PermissionDeniedError, raise_invalid_params
from gamecode_tools.tooling import Tool, ToolOutput, ToolParameters


class DirectoryMakeParams(ToolParameters):
    """Parameters for the directory_make tool."""

    path: str
    parents: bool = False
    exist_ok: bool = False


class DirectoryMakeOutput(ToolOutput):
    """Result of directory_make.

    ``created`` is False when the directory already existed and ``exist_ok``
    was set.
    """

    path: str
    created: bool


class DirectoryMake(Tool[DirectoryMakeParams, DirectoryMakeOutput]):
    """Create a directory."""

    name = "directory_make"
    description = "Create a directory"
    parameters_model = DirectoryMakeParams

    async def execute(self, params: DirectoryMakeParams) -> DirectoryMakeOutput:
        path = Path(params.path)
        if path.exists():
            if not path.is_dir():
                raise_invalid_params(
                    f"Path exists but is not a directory: {params.path}"
                )
            if not params.exist_ok:
                raise_invalid_params(f"Directory already exists: {params.path}")
            return DirectoryMakeOutput(path=params.path, created=False)

        try:
            await asyncio.to_thread(path.mkdir, parents=params.parents)
        except FileNotFoundError:
            raise_invalid_params(f"Parent directory does not exist: {path.parent}")
        except PermissionError as exc:
            raise PermissionDeniedError(params.path) from exc
        return DirectoryMakeOutput(path=params.path, created=True)
