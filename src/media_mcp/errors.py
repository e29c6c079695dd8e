"""Error taxonomy for tool registration and dispatch."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypedDict


class ErrorKind(str, Enum):
    """Stable error codes surfaced to MCP clients."""

    DUPLICATE_TOOL_NAME = "DuplicateToolName"
    TOOL_LOAD_ERROR = "ToolLoadError"
    TOOL_NOT_FOUND = "ToolNotFound"
    INVALID_ARGUMENTS = "InvalidArguments"
    MISSING_FIELD = "MissingField"
    TYPE_MISMATCH = "TypeMismatch"
    INVALID_ENUM = "InvalidEnum"
    OUT_OF_RANGE = "OutOfRange"
    INVALID_LENGTH = "InvalidLength"
    HANDLER_FAILED = "HandlerFailed"


class MCPErrorPayload(TypedDict):
    """Structured JSON payload for MCP errors."""

    error: dict[str, object | None]


class MCPError(Exception):
    """Structured MCP error containing a JSON-friendly payload."""

    def __init__(
        self, error_type: str, message: str, details: object | None = None
    ) -> None:
        """Create a structured MCP error payload."""
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.details = details
        self.error: MCPErrorPayload = {
            "error": {
                "type": error_type,
                "message": message,
                "details": details,
            }
        }

    def to_dict(self) -> MCPErrorPayload:
        """Return the structured error payload."""
        return self.error


class DuplicateToolName(MCPError):
    """Raised when a tool name is registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(
            ErrorKind.DUPLICATE_TOOL_NAME.value,
            f"Tool '{name}' is already registered",
            {"name": name},
        )
        self.name = name


class ToolNotFound(MCPError):
    """Raised when a tool name is not present in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(
            ErrorKind.TOOL_NOT_FOUND.value,
            f"Tool '{name}' is not registered",
            {"name": name},
        )
        self.name = name


class ToolLoadError(MCPError):
    """A tool reference that could not be turned into a descriptor.

    Attributes:
        reference: The registration reference that failed.
        cause: The underlying exception.
    """

    def __init__(self, reference: str, cause: BaseException) -> None:
        super().__init__(
            ErrorKind.TOOL_LOAD_ERROR.value,
            f"Failed to load tool '{reference}': {cause}",
            {"reference": reference, "cause": type(cause).__name__},
        )
        self.reference = reference
        self.cause = cause


class ToolShapeError(ValueError):
    """A tool module object that does not match the tool module contract."""


class SchemaValidationError(MCPError):
    """First constraint violation found while validating tool arguments.

    Attributes:
        kind: One of the validation error kinds (``MissingField`` and friends).
        path: Dotted/indexed location of the offending value; empty for the root.
    """

    def __init__(
        self,
        kind: ErrorKind,
        path: str,
        message: str,
        **details: Any,
    ) -> None:
        reason: dict[str, Any] = {"kind": kind.value, "path": path, **details}
        super().__init__(kind.value, message, reason)
        self.kind = kind
        self.path = path
        self.reason = reason

