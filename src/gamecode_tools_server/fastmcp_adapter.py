"""Adapters for exposing gamecode tools via FastMCP."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool as FastMCPTool
from fastmcp.tools.tool import ToolResult

from gamecode_tools.dispatcher import Dispatcher, MethodHandler
from gamecode_tools.errors import error_from_exception
from gamecode_tools.factory import create_dispatcher
from gamecode_tools.tooling import Tool
from gamecode_tools.tools import build_tools
from gamecode_tools.transform import FormatConfig

logger = logging.getLogger(__name__)


class DispatchedTool(FastMCPTool):
    """Expose one registered dispatcher method as a FastMCP tool.

    Arguments go through the same transform, decode, execute and encode steps
    as a JSON-RPC request. Failures are re-raised as FastMCP ``ToolError`` so
    the error message reaches the client.
    """

    def __init__(self, tool: Tool[Any, Any], handler: MethodHandler) -> None:
        super().__init__(
            name=tool.name,
            description=tool.description,
            parameters=tool.parameters_model.model_json_schema(),
            output_schema=None,
            tags=set(),
        )
        self._handler = handler

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Run the dispatcher pipeline for ``arguments``."""
        try:
            payload = await self._handler(arguments)
        except Exception as exc:
            error = error_from_exception(exc)
            logger.warning(
                "Tool '%s' failed (code=%d): %s", self.name, error.code, error.message
            )
            raise ToolError(error.wire_message) from exc
        if not isinstance(payload, dict):
            payload = {"result": payload}
        return ToolResult(structured_content=payload)


def to_fastmcp_tools(
    dispatcher: Dispatcher, tools: Sequence[Tool[Any, Any]]
) -> list[FastMCPTool]:
    """Wrap every tool registered on ``dispatcher`` for FastMCP."""
    handlers = dispatcher.methods
    return [DispatchedTool(tool, handlers[tool.name]) for tool in tools]


def build_fastmcp_app(
    config: FormatConfig | None = None,
) -> tuple[FastMCP, list[Tool[Any, Any]]]:
    """Create a FastMCP server instance with all default tools registered."""
    app = FastMCP(
        name="gamecode-tools",
        instructions=(
            "Filesystem and process tools exposed over the Model Context Protocol."
        ),
    )
    tools = build_tools()
    dispatcher = create_dispatcher(config, tools)
    for tool in to_fastmcp_tools(dispatcher, tools):
        app.add_tool(tool)
    return app, tools
