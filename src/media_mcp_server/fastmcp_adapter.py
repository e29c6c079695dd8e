"""Adapters for exposing registered tools via FastMCP."""

from __future__ import annotations

from typing import Any

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult

from media_mcp.registry import LoadReport, ToolRegistry
from media_mcp.server import CallError, CallRequest, Dispatcher
from media_mcp.tools import ToolDescriptor
from media_mcp_server.config import Settings
from media_mcp_server.tools import build_registry


class DispatchedTool(Tool):
    """Expose a registered tool as a FastMCP tool backed by the dispatcher."""

    def __init__(self, descriptor: ToolDescriptor, dispatcher: Dispatcher) -> None:
        """Create a FastMCP tool wrapper for the provided descriptor."""
        metadata = descriptor.metadata()
        super().__init__(
            name=metadata["name"],
            description=metadata["description"],
            parameters=metadata["inputSchema"],
            tags=set(),
        )
        self._dispatcher = dispatcher

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Dispatch the call and translate the result envelope."""
        result = await self._dispatcher.call(CallRequest(self.name, arguments))
        if isinstance(result, CallError):
            raise ToolError(result.to_json())
        value = result.value
        if not isinstance(value, dict):
            value = {"result": value}
        return ToolResult(structured_content=value)


def create_fastmcp_app(registry: ToolRegistry) -> tuple[FastMCP, Dispatcher]:
    """Create a FastMCP server exposing every tool in ``registry``."""
    dispatcher = Dispatcher(registry)
    app = FastMCP(
        name="media-mcp-server",
        instructions=(
            "OpenAI and Luma image, video and file tools exposed over the "
            "Model Context Protocol."
        ),
    )
    for descriptor in registry:
        app.add_tool(DispatchedTool(descriptor, dispatcher))
    return app, dispatcher


def build_fastmcp_app(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    strict: bool = False,
) -> tuple[FastMCP, Dispatcher, LoadReport]:
    """Load the configured toolsets and create the FastMCP server for them."""
    registry, report = build_registry(settings, transport=transport, strict=strict)
    app, dispatcher = create_fastmcp_app(registry)
    return app, dispatcher, report
