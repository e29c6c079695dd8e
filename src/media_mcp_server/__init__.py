"""Model Context Protocol server for OpenAI and Luma media tools."""

from media_mcp_server.config import Settings
from media_mcp_server.fastmcp_adapter import build_fastmcp_app, create_fastmcp_app
from media_mcp_server.providers import ProviderClient, ProviderError
from media_mcp_server.tools import TOOL_TABLE, build_registry

__all__ = [
    "TOOL_TABLE",
    "ProviderClient",
    "ProviderError",
    "Settings",
    "build_fastmcp_app",
    "build_registry",
    "create_fastmcp_app",
]
