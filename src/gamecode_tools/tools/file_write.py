"""File write tool."""

from __future__ import annotations

import asyncio
import base64
import binascii
from enum import Enum
from pathlib import Path

from gamecode_tools.errors import raise_invalid_params
from gamecode_tools.tooling import Tool, ToolOutput, ToolParameters
from gamecode_tools.tools.common import require_parent


class WriteContentType(str, Enum):
    TEXT = "text"
    BINARY = "binary"


class FileWriteParams(ToolParameters):
    """Parameters for the file_write tool.

    Binary content is given as base64 text.
    """

    path: str
    content: str
    content_type: WriteContentType = WriteContentType.TEXT
    create_dirs: bool = False


class FileWriteOutput(ToolOutput):
    path: str
    size: int
    content_type: WriteContentType
    created: bool


def _decode_content(params: FileWriteParams) -> bytes:
    if params.content_type is WriteContentType.TEXT:
        return params.content.encode("utf-8")
    try:
        return base64.b64decode(params.content, validate=True)
    except binascii.Error as exc:
        raise_invalid_params(f"Invalid base64 content: {exc}")


class FileWrite(Tool[FileWriteParams, FileWriteOutput]):
    """Write text or binary content to a file, replacing it if present."""

    name = "file_write"
    description = "Write content to a file"
    parameters_model = FileWriteParams

    async def execute(self, params: FileWriteParams) -> FileWriteOutput:
        path = Path(params.path)
        payload = _decode_content(params)
        await asyncio.to_thread(require_parent, path, params.create_dirs)

        created = not path.exists()
        await asyncio.to_thread(path.write_bytes, payload)
        size = path.stat().st_size
        return FileWriteOutput(
            path=params.path,
            size=size,
            content_type=params.content_type,
            created=created,
        )
