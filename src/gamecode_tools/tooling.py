"""The contract every tool exposes to the dispatcher."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter


class ToolParameters(BaseModel):
    """Base parameters schema for tools."""

    model_config = ConfigDict(extra="forbid")


class ToolOutput(BaseModel):
    """Base schema for tool results."""


ParamsT = TypeVar("ParamsT", bound=BaseModel)
ResultT = TypeVar("ResultT")

_ANY_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


def encode_result(result: Any) -> Any:
    """Convert a tool result into a plain JSON value.

    Pydantic models are dumped in JSON mode with ``None`` fields left out; other
    values are dumped in JSON mode through a ``TypeAdapter(Any)``.

    Raises:
        ValueError: If the value cannot be represented as JSON.

    """
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", exclude_none=True)
    return _ANY_ADAPTER.dump_python(result, mode="json")


class Tool(ABC, Generic[ParamsT, ResultT]):
    """A named capability with typed parameters and an async execute step.

    Attributes:
        name: Stable tool name, used as the default method name.
        description: Human-readable description of the tool purpose.
        parameters_model: Pydantic model used to decode incoming parameters.

    """

    name: str
    description: str
    parameters_model: type[ParamsT]

    def decode(self, value: Any) -> ParamsT:
        """Decode a plain JSON value into the typed parameters.

        Raises:
            pydantic.ValidationError: If the value does not fit the model.

        """
        return self.parameters_model.model_validate(value)

    @abstractmethod
    async def execute(self, params: ParamsT) -> ResultT:
        """Run the tool."""

    def encode(self, result: ResultT) -> Any:
        """Encode a typed result into a plain JSON value."""
        return encode_result(result)

    def metadata(self) -> dict[str, Any]:
        """Return a discovery-friendly description of the tool."""
        return {
            "name": self.name,
            "description": self.description,
            "schema": self.parameters_model.model_json_schema(),
        }


Handler = Callable[[Any], Any]


@dataclass
class ToolDefinition(Tool[Any, Any]):
    """Tool built from a plain handler callable.

    Attributes:
        name: Unique name of the tool.
        description: Human-readable description of the tool purpose.
        parameters_model: Pydantic model used to validate input parameters.
        handler: Callable receiving the decoded parameters. It may be a
            coroutine function.
    """

    name: str
    description: str
    parameters_model: type[BaseModel]
    handler: Handler

    async def execute(self, params: Any) -> Any:
        result = self.handler(params)
        if inspect.isawaitable(result):
            result = await result
        return result
