"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import pytest
from pydantic import ConfigDict

from gamecode_tools.factory import create_default_dispatcher
from gamecode_tools.tooling import Tool, ToolParameters


class EchoParams(ToolParameters):
    """Accept any object."""

    model_config = ConfigDict(extra="allow")


class EchoTool(Tool[EchoParams, dict[str, Any]]):
    """Return the decoded parameters verbatim, counting calls."""

    name = "echo"
    description = "Echo the parameters back"
    parameters_model = EchoParams

    def __init__(self) -> None:
        self.calls = 0

    async def execute(self, params: EchoParams) -> dict[str, Any]:
        self.calls += 1
        return params.model_dump()


@pytest.fixture()
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture()
def echo_tool() -> EchoTool:
    """Provide a fresh echo tool."""
    return EchoTool()


@pytest.fixture()
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree for filesystem tool tests.

    Layout::

        notes.txt
        data.bin
        .hidden
        src/main.py
        src/util.py
        src/nested/deep.py
    """
    (tmp_path / "notes.txt").write_text("alpha\nbeta\ngamma\n", encoding="utf-8")
    (tmp_path / "data.bin").write_bytes(b"\x00\x01\x02\xff")
    (tmp_path / ".hidden").write_text("secret", encoding="utf-8")
    src = tmp_path / "src"
    (src / "nested").mkdir(parents=True)
    (src / "main.py").write_text(
        "import util\n\ndef main():\n    return util.helper()\n", encoding="utf-8"
    )
    (src / "util.py").write_text("def helper():\n    return 42\n", encoding="utf-8")
    (src / "nested" / "deep.py").write_text("HELPER = 'deep'\n", encoding="utf-8")
    return tmp_path


CallTool = Callable[[str, dict[str, Any]], Awaitable[dict[str, Any]]]


@pytest.fixture()
def call_tool() -> CallTool:
    """Dispatch a request against the default tools and decode the response."""
    dispatcher = create_default_dispatcher()

    async def call(method: str, params: dict[str, Any]) -> dict[str, Any]:
        request = {
            "protocol_version": "2.0",
            "method": method,
            "params": params,
            "id": 1,
        }
        return json.loads(await dispatcher.dispatch(json.dumps(request)))

    return call
