"""Tool descriptors for the media MCP server."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from pydantic import ValidationError

from media_mcp.errors import ToolShapeError
from media_mcp.schema import SchemaNode, validate_arguments

ToolHandler = Callable[[dict[str, Any]], Union[Awaitable[Any], Any]]


@dataclass(frozen=True)
class ToolDescriptor:
    """Description of a tool that can be registered with the server.

    Attributes:
        name: Unique name of the tool.
        description: Human-readable description of the tool purpose.
        parameters: Schema used to validate input arguments.
        handler: Callable that executes the tool logic. It receives the normalized
            arguments and returns, or resolves to, a JSON value.
    """

    name: str
    description: str
    parameters: SchemaNode
    handler: ToolHandler

    def validate(self, arguments: object) -> dict[str, Any]:
        """Validate incoming arguments and apply schema defaults.

        Raises:
            SchemaValidationError: If the arguments violate the schema.
        """
        return validate_arguments(self.parameters, arguments)

    def metadata(self) -> dict[str, Any]:
        """Return a discovery-friendly description of the tool."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.parameters.to_json_schema(),
        }

    @classmethod
    def from_api_tool(cls, api_tool: object) -> ToolDescriptor:
        """Build a descriptor from a tool module object.

        The object uses the function-calling layout::

            {"definition": {"type": "function",
                            "function": {"name", "description", "parameters"}},
             "function": handler}

        Raises:
            ToolShapeError: If the object does not match that layout.
        """
        if not isinstance(api_tool, Mapping):
            raise ToolShapeError(
                f"tool module must be a mapping, got {type(api_tool).__name__}"
            )
        definition = api_tool.get("definition")
        function = (
            definition.get("function") if isinstance(definition, Mapping) else None
        )
        if not isinstance(function, Mapping):
            raise ToolShapeError("tool module is missing 'definition.function'")

        name = function.get("name")
        if not isinstance(name, str) or not name:
            raise ToolShapeError("tool definition is missing 'name'")
        if "parameters" not in function:
            raise ToolShapeError(f"tool '{name}' is missing 'parameters'")
        handler = api_tool.get("function")
        if not callable(handler):
            raise ToolShapeError(f"tool '{name}' handler is not callable")

        try:
            parameters = SchemaNode.model_validate(function["parameters"])
        except ValidationError as error:
            raise ToolShapeError(
                f"tool '{name}' has an invalid parameter schema: {error}"
            ) from error
        if parameters.type != "object":
            raise ToolShapeError(f"tool '{name}' parameters must be an object schema")

        return cls(
            name=name,
            description=str(function.get("description") or ""),
            parameters=parameters,
            handler=handler,
        )


def api_tool(
    name: str,
    description: str,
    parameters: dict[str, Any],
    handler: ToolHandler,
) -> dict[str, Any]:
    """Package a handler and its schema as a tool module object."""
    return {
        "function": handler,
        "definition": {
            "type": "function",
            "function": {
                "name": name,
                "description": description,
                "parameters": parameters,
            },
        },
    }
