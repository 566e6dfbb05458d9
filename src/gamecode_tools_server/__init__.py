"""Model Context Protocol front-end for the gamecode tools."""

from gamecode_tools_server.fastmcp_adapter import (
    DispatchedTool,
    build_fastmcp_app,
    to_fastmcp_tools,
)

__all__ = ["DispatchedTool", "build_fastmcp_app", "to_fastmcp_tools"]
