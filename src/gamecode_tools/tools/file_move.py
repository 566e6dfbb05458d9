"""File move tool."""

from __future__ import annotations

import asyncio
import errno
import os
import shutil
from pathlib import Path

from gamecode_tools.errors import raise_invalid_params
from gamecode_tools.tooling import Tool, ToolOutput, ToolParameters
from gamecode_tools.tools.common import require_parent


class FileMoveParams(ToolParameters):
    """Parameters for the file_move tool."""

    source: str
    destination: str
    overwrite: bool = False
    create_dirs: bool = False


class FileMoveOutput(ToolOutput):
    source: str
    destination: str
    overwritten: bool


def _move(source: Path, destination: Path) -> None:
    try:
        os.replace(source, destination)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        # rename cannot cross filesystems
        if destination.is_file():
            destination.unlink()
        shutil.move(os.fspath(source), os.fspath(destination))


class FileMove(Tool[FileMoveParams, FileMoveOutput]):
    """Move or rename a file or directory."""

    name = "file_move"
    description = "Move or rename a file"
    parameters_model = FileMoveParams

    async def execute(self, params: FileMoveParams) -> FileMoveOutput:
        source = Path(params.source)
        destination = Path(params.destination)

        if not source.exists():
            raise_invalid_params(f"Source not found: {params.source}")
        await asyncio.to_thread(
            require_parent,
            destination,
            params.create_dirs,
            "Destination parent directory",
        )

        dest_exists = destination.exists()
        if dest_exists and not params.overwrite:
            raise_invalid_params(f"Destination already exists: {params.destination}")

        await asyncio.to_thread(_move, source, destination)
        return FileMoveOutput(
            source=params.source,
            destination=params.destination,
            overwritten=dest_exists,
        )
