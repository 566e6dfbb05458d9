"""JSON schema catalog for tool parameters.

Schemas come straight from each tool's pydantic parameters model and can be
rendered in the native catalog shape or in the tool-spec formats expected by
common agent platforms.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from gamecode_tools.tooling import Tool


@dataclass(frozen=True)
class ToolSchema:
    """Schema information for one tool.

    Attributes:
        name: Method name the tool is exposed under.
        description: Human-readable description.
        parameters_schema: JSON schema of the parameters object.

    """

    name: str
    description: str
    parameters_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def generate_tool_schema(
    tool: Tool[Any, Any], name: str | None = None, description: str | None = None
) -> ToolSchema:
    """Build a :class:`ToolSchema` from a tool's parameters model."""
    return ToolSchema(
        name=name or tool.name,
        description=tool.description if description is None else description,
        parameters_schema=tool.parameters_model.model_json_schema(),
    )


def to_bedrock_tool_spec(schema: ToolSchema) -> dict[str, Any]:
    """Render a schema as a Bedrock ``toolSpec`` entry."""
    return {
        "name": schema.name,
        "description": schema.description,
        "input_schema": {"json": schema.parameters_schema},
    }


def to_openai_function(schema: ToolSchema) -> dict[str, Any]:
    """Render a schema as an OpenAI function definition."""
    return {
        "name": schema.name,
        "description": schema.description,
        "parameters": schema.parameters_schema,
    }


class ToolSchemaRegistry:
    """Collection of tool schemas keyed by method name."""

    def __init__(self) -> None:
        self._schemas: dict[str, ToolSchema] = {}

    def register(
        self,
        tool: Tool[Any, Any],
        name: str | None = None,
        description: str | None = None,
    ) -> ToolSchema:
        """Generate and store the schema for ``tool``.

        Args:
            tool: Tool whose parameters model provides the schema.
            name: Method name; defaults to the tool name.
            description: Description override.

        Returns:
            The stored schema.

        """
        schema = generate_tool_schema(tool, name=name, description=description)
        self._schemas[schema.name] = schema
        return schema

    def get(self, name: str) -> ToolSchema | None:
        return self._schemas.get(name)

    def all(self) -> dict[str, ToolSchema]:
        return dict(self._schemas)

    def tool_names(self) -> list[str]:
        """Sorted list of registered names."""
        return sorted(self._schemas)

    def to_bedrock_specs(self) -> list[dict[str, Any]]:
        return [to_bedrock_tool_spec(self._schemas[name]) for name in self.tool_names()]

    def to_openai_functions(self) -> list[dict[str, Any]]:
        return [to_openai_function(self._schemas[name]) for name in self.tool_names()]

    def to_json(self) -> dict[str, dict[str, Any]]:
        """Mapping of names to schema dictionaries."""
        return {name: self._schemas[name].to_dict() for name in self.tool_names()}

    def __len__(self) -> int:
        return len(self._schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas
