"""File read tool."""

from __future__ import annotations

import asyncio
import base64
from enum import Enum
from pathlib import Path

from pydantic import Field

from gamecode_tools.errors import ToolIOError
from gamecode_tools.tooling import Tool, ToolOutput, ToolParameters
from gamecode_tools.tools.common import require_file

_TEXT_EXTENSIONS = frozenset(
    {"txt", "md", "rs", "py", "js", "ts", "json", "yml", "yaml", "toml", "html", "css"}
)
_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "webp": "image/webp",
    "pdf": "application/pdf",
    "zip": "application/zip",
    "gz": "application/gzip",
    "tar": "application/x-tar",
}
_TEXT_MIME_TYPES = frozenset(
    {"application/json", "application/xml", "application/javascript"}
)


class ContentType(str, Enum):
    TEXT = "text"
    BINARY = "binary"
    AUTO = "auto"


class FileReadParams(ToolParameters):
    """Parameters for the file_read tool.

    ``offset``, ``limit`` and ``line_numbers`` only apply to text content.
    """

    path: str
    content_type: ContentType = ContentType.AUTO
    offset: int | None = Field(default=None, ge=0)
    limit: int | None = Field(default=None, ge=0)
    line_numbers: bool = False


class FileReadOutput(ToolOutput):
    content: str
    size: int
    mime_type: str
    content_type: ContentType
    line_count: int | None = None


def guess_mime_type(path: Path) -> str:
    """Guess a MIME type from the file extension."""
    extension = path.suffix.lstrip(".").lower()
    if extension in _TEXT_EXTENSIONS:
        return "text/plain"
    return _MIME_TYPES.get(extension, "application/octet-stream")


def is_text_mime_type(mime_type: str) -> bool:
    return mime_type.startswith("text/") or mime_type in _TEXT_MIME_TYPES


def _number(lines: list[str], start: int) -> str:
    return "\n".join(
        f"{number:>6}  {line}" for number, line in enumerate(lines, start=start + 1)
    )


def render_text(content: str, params: FileReadParams) -> tuple[str, int | None]:
    """Apply the line window and numbering options to text content."""
    lines = content.splitlines()
    line_count = len(lines) if params.line_numbers else None

    if params.offset is None and params.limit is None:
        if params.line_numbers:
            return _number(lines, 0), line_count
        return content, line_count

    offset = params.offset or 0
    if offset >= len(lines):
        return "", line_count
    end = len(lines) if params.limit is None else min(offset + params.limit, len(lines))
    window = lines[offset:end]
    if params.line_numbers:
        return _number(window, offset), line_count
    return "\n".join(window), line_count


class FileRead(Tool[FileReadParams, FileReadOutput]):
    """Read a file as text or base64 encoded bytes."""

    name = "file_read"
    description = "Read a file from the filesystem"
    parameters_model = FileReadParams

    async def execute(self, params: FileReadParams) -> FileReadOutput:
        path = require_file(params.path)
        data = await asyncio.to_thread(path.read_bytes)
        mime_type = guess_mime_type(path)

        content_type = params.content_type
        if content_type is ContentType.AUTO:
            content_type = (
                ContentType.TEXT if is_text_mime_type(mime_type) else ContentType.BINARY
            )

        if content_type is ContentType.BINARY:
            return FileReadOutput(
                content=base64.b64encode(data).decode("ascii"),
                size=len(data),
                mime_type=mime_type,
                content_type=ContentType.BINARY,
            )

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ToolIOError(f"{params.path} is not valid UTF-8: {exc}") from exc
        content, line_count = render_text(text, params)
        return FileReadOutput(
            content=content,
            size=len(data),
            mime_type=mime_type,
            content_type=ContentType.TEXT,
            line_count=line_count,
        )
