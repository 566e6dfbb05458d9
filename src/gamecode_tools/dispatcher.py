"""JSON-RPC method registry and request dispatcher.

The dispatcher owns a mapping from method name to an invocation closure. Each
closure wraps one tool's decode, execute and encode steps around the format
transformer shared by the whole dispatcher, so every entry has the same erased
signature: a raw JSON value in, a JSON value out. Registration happens once at
setup; afterwards the mapping is only read, and concurrent ``dispatch`` calls do
not interact.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from gamecode_tools.envelope import (
    PROTOCOL_VERSION,
    VERSION_FIELD,
    RawRequest,
    Response,
    failure,
    invalid_request,
    method_not_found,
    parse_envelope,
    serialize_response,
    success,
)
from gamecode_tools.errors import InvalidParamsError, ToolError, error_from_exception
from gamecode_tools.tooling import Tool
from gamecode_tools.transform import FormatConfig, FormatTransformer

logger = logging.getLogger(__name__)

MethodHandler = Callable[[Any], Awaitable[Any]]


class Dispatcher:
    """Registry and dispatcher for JSON-RPC methods."""

    def __init__(self, transformer: FormatTransformer | None = None) -> None:
        """Initialize an empty registry.

        Args:
            transformer: Format transformer shared by every registered method.
                Defaults to plain JSON in both directions.

        """
        self._transformer = transformer or FormatTransformer.plain()
        self._handlers: dict[str, MethodHandler] = {}

    @classmethod
    def with_config(cls, config: FormatConfig) -> Dispatcher:
        """Create a dispatcher using a transformer built from ``config``."""
        return cls(FormatTransformer(config))

    @property
    def transformer(self) -> FormatTransformer:
        return self._transformer

    @property
    def config(self) -> FormatConfig:
        return self._transformer.config

    @property
    def methods(self) -> Mapping[str, MethodHandler]:
        """Read-only view of the registered handlers."""
        return MappingProxyType(self._handlers)

    def register(self, method: str, tool: Tool[Any, Any]) -> None:
        """Bind a tool under ``method``.

        Registering a name again replaces the earlier entry.

        Args:
            method: Method name requests will use.
            tool: Tool providing the decode, execute and encode steps.

        Raises:
            ValueError: If ``method`` is empty.

        """
        if not method:
            raise ValueError("Method name must be a non-empty string")
        if method in self._handlers:
            logger.debug("Replacing handler for method '%s'", method)
        self._handlers[method] = self._bind(tool)

    def register_tools(self, *tools: Tool[Any, Any]) -> None:
        """Register several tools, each under its own name."""
        for tool in tools:
            self.register(tool.name, tool)

    def available_methods(self) -> list[str]:
        """List registered method names in sorted order."""
        return sorted(self._handlers)

    def _bind(self, tool: Tool[Any, Any]) -> MethodHandler:
        transformer = self._transformer

        async def invoke(raw_params: Any) -> Any:
            params_value = transformer.transform_params(raw_params)
            try:
                params = tool.decode(params_value)
            except ValidationError as exc:
                raise InvalidParamsError(
                    f"{exc.error_count()} validation error(s) for {tool.name}",
                    data=exc.errors(include_url=False, include_context=False),
                ) from exc
            result = await tool.execute(params)
            return transformer.transform_result(tool.encode(result))

        return invoke

    async def dispatch(self, request: str | bytes) -> str:
        """Handle one request and return the serialized response.

        Args:
            request: JSON request text.

        Raises:
            ParseError: If the text is not a JSON object, so no id can be
                recovered and no response envelope can be addressed.

        Returns:
            The serialized success or failure envelope.

        """
        document = parse_envelope(request)
        response = await self._respond(document)
        try:
            return serialize_response(response)
        except (TypeError, ValueError, RecursionError) as exc:
            error = ToolError(f"Result is not JSON serializable: {exc}")
            return serialize_response(failure(error, response.id))

    async def _respond(self, document: dict[str, Any]) -> Response:
        request_id = document.get("id")

        version = document.get(VERSION_FIELD)
        if version != PROTOCOL_VERSION:
            logger.debug("Rejecting request %r with version %r", request_id, version)
            return invalid_request("Invalid protocol version", request_id)

        try:
            request = RawRequest.model_validate(document)
        except ValidationError as exc:
            return invalid_request(
                f"Malformed envelope ({exc.error_count()} error(s))", request_id
            )

        handler = self._handlers.get(request.method)
        if handler is None:
            logger.debug("Method '%s' not found (id=%r)", request.method, request_id)
            return method_not_found(request.method, request_id)

        logger.debug("Dispatching '%s' (id=%r)", request.method, request_id)
        try:
            result = await handler(request.params)
        except Exception as exc:  # every tool failure becomes an error envelope
            error = error_from_exception(exc)
            logger.warning(
                "Method '%s' failed (id=%r, code=%d): %s",
                request.method,
                request_id,
                error.code,
                error.message,
            )
            return failure(error, request_id)
        return success(result, request_id)
