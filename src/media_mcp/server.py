"""Call dispatch for registered tools.

The dispatcher resolves a tool by name, validates the arguments against the tool's
schema, runs the handler and wraps the outcome in a :class:`CallSuccess` or
:class:`CallError`. It never raises for a failed call: unknown tools, invalid
arguments and handler exceptions all come back as error results, so a single tool
cannot take the server down. It keeps no state between calls.
"""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Union

from pydantic_core import PydanticSerializationError, to_jsonable_python

from media_mcp.errors import (
    ErrorKind,
    SchemaValidationError,
    ToolNotFound,
)
from media_mcp.registry import ToolRegistry
from media_mcp.schema import SchemaNode, validate_arguments

logger = logging.getLogger("media_mcp.server")

Validator = Callable[[SchemaNode, object], Any]


@dataclass(frozen=True)
class CallRequest:
    """A request to invoke one tool."""

    tool_name: str
    arguments: Any = field(default_factory=dict)


@dataclass(frozen=True)
class CallSuccess:
    """Value produced by a tool that completed normally."""

    value: Any
    kind: Literal["success"] = "success"

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "value": self.value}

    def to_json(self) -> str:
        """Serialize the result to JSON."""
        return json.dumps(self.to_dict(), allow_nan=False)


@dataclass(frozen=True)
class CallError:
    """Structured failure of a tool call.

    Attributes:
        code: Stable error code (``ToolNotFound``, ``InvalidArguments`` or
            ``HandlerFailed``).
        message: Human-readable explanation.
        details: JSON-friendly context, e.g. the validator's reason.
    """

    code: ErrorKind
    message: str
    details: Any = None
    kind: Literal["error"] = "error"

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Serialize the result to JSON."""
        return json.dumps(self.to_dict(), allow_nan=False)


CallResult = Union[CallSuccess, CallError]


class Dispatcher:
    """Expose a :class:`ToolRegistry` as a callable tool surface."""

    def __init__(
        self, registry: ToolRegistry, validator: Validator = validate_arguments
    ) -> None:
        self._registry = registry
        self._validate = validator

    def describe_tools(self) -> list[dict[str, Any]]:
        """Advertise name, description and input schema of every tool."""
        return [descriptor.metadata() for descriptor in self._registry.list_tools()]

    async def call_tool(
        self, name: str, arguments: Mapping[str, Any] | None = None
    ) -> CallResult:
        """Shortcut for :meth:`call` with a name and an argument mapping."""
        payload = {} if arguments is None else arguments
        return await self.call(CallRequest(name, payload))

    async def call(self, request: CallRequest) -> CallResult:
        """Run one tool call and return its result envelope."""
        name = request.tool_name
        logger.debug("Received call for %s", name)
        try:
            descriptor = self._registry.get(name)
        except ToolNotFound as error:
            return CallError(ErrorKind.TOOL_NOT_FOUND, error.message, error.details)

        try:
            arguments = self._validate(descriptor.parameters, request.arguments)
        except SchemaValidationError as error:
            logger.debug("Rejected arguments for %s: %s", name, error.reason)
            return CallError(
                ErrorKind.INVALID_ARGUMENTS,
                f"Invalid arguments for tool '{name}': {error.message}",
                error.reason,
            )

        logger.debug("Executing %s", name)
        try:
            value = descriptor.handler(arguments)
            if inspect.isawaitable(value):
                value = await value
        except Exception as exc:
            logger.exception("Tool %s failed", name)
            return CallError(
                ErrorKind.HANDLER_FAILED,
                str(exc) or type(exc).__name__,
                {"exception": type(exc).__name__},
            )

        try:
            value = _json_value(value)
        except (PydanticSerializationError, ValueError) as error:
            logger.error("Tool %s returned a non-JSON value: %s", name, error)
            return CallError(
                ErrorKind.HANDLER_FAILED,
                f"Tool '{name}' returned a value that is not JSON serializable",
                {"exception": type(error).__name__},
            )

        legacy_error = _legacy_error(value)
        if legacy_error is not None:
            logger.error("Tool %s reported an error: %s", name, legacy_error)
            return CallError(ErrorKind.HANDLER_FAILED, legacy_error)

        logger.debug("Completed %s", name)
        return CallSuccess(value)


def _json_value(value: Any) -> Any:
    """Convert a handler value to strict JSON data.

    Raises:
        ValueError: If the value holds NaN or an infinity.
    """
    value = to_jsonable_python(value)
    json.dumps(value, allow_nan=False)
    return value


def _legacy_error(value: Any) -> str | None:
    """Return the message of an ``{"error": "..."}`` value, if it is one."""
    if isinstance(value, dict) and len(value) == 1:
        message = value.get("error")
        if isinstance(message, str):
            return message
    return None
