"""media_mcp package initialization."""

from media_mcp.errors import ErrorKind, MCPError
from media_mcp.registry import LoadReport, ToolRegistry
from media_mcp.schema import SchemaNode, validate_arguments
from media_mcp.server import CallError, CallRequest, CallResult, CallSuccess, Dispatcher
from media_mcp.tools import ToolDescriptor, api_tool

__all__ = [
    "CallError",
    "CallRequest",
    "CallResult",
    "CallSuccess",
    "Dispatcher",
    "ErrorKind",
    "LoadReport",
    "MCPError",
    "SchemaNode",
    "ToolDescriptor",
    "ToolRegistry",
    "api_tool",
    "validate_arguments",
]
