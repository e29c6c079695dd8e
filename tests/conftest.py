"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from media_mcp.registry import ToolRegistry
from media_mcp.schema import SchemaNode
from media_mcp.tools import ToolDescriptor, api_tool
from media_mcp_server.config import Settings

RecordedRequests = list[httpx.Request]


def make_descriptor(
    name: str,
    handler: Callable[[dict[str, Any]], Any],
    parameters: dict[str, Any] | None = None,
    description: str = "",
) -> ToolDescriptor:
    """Build a descriptor around an in-memory handler."""
    schema = parameters if parameters is not None else {"type": "object"}
    return ToolDescriptor(
        name=name,
        description=description or f"{name} test tool",
        parameters=SchemaNode.model_validate(schema),
        handler=handler,
    )


@pytest.fixture()
def anyio_backend() -> str:
    """Run anyio-marked tests on asyncio, the backend FastMCP's client requires."""
    return "asyncio"


@pytest.fixture()
def echo_parameters() -> dict[str, Any]:
    """Schema exercising every enforced keyword."""
    return {
        "type": "object",
        "properties": {
            "prompt": {"type": "string", "description": "Text to echo."},
            "size": {
                "type": "string",
                "enum": ["256x256", "512x512", "1024x1024"],
                "default": "1024x1024",
            },
            "n": {"type": "integer", "minimum": 1, "maximum": 10, "default": 1},
            "tags": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 1,
                "maxItems": 3,
            },
        },
        "required": ["prompt"],
    }


@pytest.fixture()
def echo_tool(echo_parameters: dict[str, Any]) -> dict[str, Any]:
    """Tool module object whose handler returns its normalized arguments."""

    def handler(args: dict[str, Any]) -> dict[str, Any]:
        return {"echo": args}

    return api_tool("Echo", "Echo the normalized arguments.", echo_parameters, handler)


@pytest.fixture()
def registry(echo_tool: dict[str, Any]) -> ToolRegistry:
    """Registry with an echo tool and tools that fail in different ways."""

    def boom(_: dict[str, Any]) -> Any:
        raise RuntimeError("provider exploded")

    async def slow_echo(args: dict[str, Any]) -> dict[str, Any]:
        return {"async": True, **args}

    def legacy(_: dict[str, Any]) -> dict[str, str]:
        return {"error": "API key not configured"}

    def not_json(_: dict[str, Any]) -> object:
        return object()

    registry = ToolRegistry()
    registry.register(ToolDescriptor.from_api_tool(echo_tool))
    registry.register(make_descriptor("Boom", boom))
    registry.register(make_descriptor("AsyncEcho", slow_echo))
    registry.register(make_descriptor("Legacy", legacy))
    registry.register(make_descriptor("NotJson", not_json))
    return registry


@pytest.fixture()
def settings() -> Settings:
    """Settings with fake credentials for both providers."""
    return Settings(
        openai_api_key="sk-test",
        openai_base_url="https://openai.test",
        luma_api_key="luma-test",
        luma_base_url="https://luma.test",
        http_timeout=5.0,
    )


@pytest.fixture()
def recorded() -> RecordedRequests:
    """Requests captured by :func:`mock_transport`."""
    return []


@pytest.fixture()
def mock_transport(recorded: RecordedRequests) -> httpx.MockTransport:
    """Transport that records requests and answers with a canned JSON body."""

    def handler(request: httpx.Request) -> httpx.Response:
        recorded.append(request)
        if request.url.path.endswith("/content"):
            return httpx.Response(200, text="line one\nline two")
        if request.method == "DELETE" and "generations" in request.url.path:
            return httpx.Response(204)
        return httpx.Response(
            200,
            json={"id": "res-1", "path": request.url.path, "method": request.method},
        )

    return httpx.MockTransport(handler)


def json_body(request: httpx.Request) -> Any:
    """Decode the JSON body of a recorded request."""
    return json.loads(request.content)
