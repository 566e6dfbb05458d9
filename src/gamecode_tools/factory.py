"""Ready-made dispatchers with the default tool set registered."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from gamecode_tools.dispatcher import Dispatcher
from gamecode_tools.schema import ToolSchemaRegistry
from gamecode_tools.tooling import Tool
from gamecode_tools.tools import build_tools
from gamecode_tools.transform import FormatConfig


def create_dispatcher(
    config: FormatConfig | None = None,
    tools: Iterable[Tool[Any, Any]] | None = None,
) -> Dispatcher:
    """Create a dispatcher with ``tools`` (default: all tools) registered by name."""
    dispatcher = Dispatcher.with_config(config or FormatConfig.plain())
    dispatcher.register_tools(*(build_tools() if tools is None else tools))
    return dispatcher


def create_default_dispatcher() -> Dispatcher:
    return create_dispatcher(FormatConfig.plain())


def create_wrapped_dispatcher() -> Dispatcher:
    return create_dispatcher(FormatConfig.wrapped())


def create_plain_to_wrapped_dispatcher() -> Dispatcher:
    return create_dispatcher(FormatConfig.plain_to_wrapped())


def create_wrapped_to_plain_dispatcher() -> Dispatcher:
    return create_dispatcher(FormatConfig.wrapped_to_plain())


def create_dispatcher_with_schema_registry(
    config: FormatConfig | None = None,
    tools: Iterable[Tool[Any, Any]] | None = None,
) -> tuple[Dispatcher, ToolSchemaRegistry]:
    """Create a dispatcher and a schema registry covering the same tools."""
    selected = build_tools() if tools is None else list(tools)
    registry = ToolSchemaRegistry()
    for tool in selected:
        registry.register(tool)
    return create_dispatcher(config, selected), registry


def create_wrapped_dispatcher_with_schemas() -> tuple[Dispatcher, ToolSchemaRegistry]:
    """Dispatcher for platforms that send wrapped arguments and read plain results."""
    return create_dispatcher_with_schema_registry(FormatConfig.wrapped_to_plain())
