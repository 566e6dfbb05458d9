"""JSON-RPC dispatch of filesystem and process tools with wrapped-format support."""

from gamecode_tools.dispatcher import Dispatcher
from gamecode_tools.errors import (
    ErrorCode,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    PermissionDeniedError,
    RpcError,
    ToolError,
    ToolIOError,
)
from gamecode_tools.factory import (
    create_default_dispatcher,
    create_dispatcher,
    create_dispatcher_with_schema_registry,
    create_plain_to_wrapped_dispatcher,
    create_wrapped_dispatcher,
    create_wrapped_dispatcher_with_schemas,
    create_wrapped_to_plain_dispatcher,
)
from gamecode_tools.logging_config import LogLevel, setup_logging
from gamecode_tools.schema import ToolSchema, ToolSchemaRegistry
from gamecode_tools.tooling import Tool, ToolDefinition, ToolOutput, ToolParameters
from gamecode_tools.transform import FormatConfig, FormatTransformer, WireFormat

__all__ = [
    "Dispatcher",
    "ErrorCode",
    "FormatConfig",
    "FormatTransformer",
    "InvalidParamsError",
    "InvalidRequestError",
    "LogLevel",
    "MethodNotFoundError",
    "ParseError",
    "PermissionDeniedError",
    "RpcError",
    "Tool",
    "ToolDefinition",
    "ToolError",
    "ToolIOError",
    "ToolOutput",
    "ToolParameters",
    "ToolSchema",
    "ToolSchemaRegistry",
    "WireFormat",
    "create_default_dispatcher",
    "create_dispatcher",
    "create_dispatcher_with_schema_registry",
    "create_plain_to_wrapped_dispatcher",
    "create_wrapped_dispatcher",
    "create_wrapped_dispatcher_with_schemas",
    "create_wrapped_to_plain_dispatcher",
    "setup_logging",
]
