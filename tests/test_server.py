"""Tests for the call dispatcher."""

from __future__ import annotations

import json
from typing import Any

import pytest

from conftest import make_descriptor
from media_mcp.errors import ErrorKind
from media_mcp.registry import ToolRegistry
from media_mcp.server import CallError, CallRequest, CallSuccess, Dispatcher
from media_mcp_server.tools.openai_images import GENERATE_IMAGE_PARAMETERS


class TestDispatcher:
    """Behavioral coverage for Dispatcher."""

    def test_describe_tools_in_registration_order(
        self, registry: ToolRegistry
    ) -> None:
        """Every registered tool is advertised with its input schema."""
        # Act
        catalog = Dispatcher(registry).describe_tools()

        # Assert
        assert [tool["name"] for tool in catalog] == [
            "Echo",
            "Boom",
            "AsyncEcho",
            "Legacy",
            "NotJson",
        ]
        assert catalog[0]["inputSchema"]["properties"]["n"]["maximum"] == 10
        for tool in catalog:
            assert set(tool) == {"name", "description", "inputSchema"}

    @pytest.mark.anyio()
    async def test_success_receives_normalized_arguments(
        self, registry: ToolRegistry
    ) -> None:
        """Handlers see the validated arguments with defaults applied."""
        # Arrange
        dispatcher = Dispatcher(registry)

        # Act
        result = await dispatcher.call(CallRequest("Echo", {"prompt": "a fox"}))

        # Assert
        assert isinstance(result, CallSuccess)
        assert result.ok
        assert result.value == {
            "echo": {"prompt": "a fox", "size": "1024x1024", "n": 1}
        }
        assert json.loads(result.to_json())["kind"] == "success"

    @pytest.mark.anyio()
    async def test_async_handlers_are_awaited(self, registry: ToolRegistry) -> None:
        result = await Dispatcher(registry).call_tool("AsyncEcho", {"x": 1})

        assert result == CallSuccess({"async": True, "x": 1})

    @pytest.mark.anyio()
    async def test_missing_arguments_default_to_empty_object(
        self, registry: ToolRegistry
    ) -> None:
        result = await Dispatcher(registry).call_tool("AsyncEcho")

        assert result == CallSuccess({"async": True})

    @pytest.mark.anyio()
    async def test_unknown_tool(self, registry: ToolRegistry) -> None:
        result = await Dispatcher(registry).call_tool("Missing", {})

        assert isinstance(result, CallError)
        assert result.code is ErrorKind.TOOL_NOT_FOUND
        assert result.details == {"name": "Missing"}

    @pytest.mark.anyio()
    async def test_invalid_arguments_never_reach_handler(self) -> None:
        """Validation failures short-circuit before the handler runs."""
        # Arrange
        calls: list[dict[str, Any]] = []
        registry = ToolRegistry()
        registry.register(
            make_descriptor(
                "Count",
                calls.append,
                {
                    "type": "object",
                    "properties": {"n": {"type": "integer", "maximum": 3}},
                },
            )
        )

        # Act
        result = await Dispatcher(registry).call_tool("Count", {"n": 4})

        # Assert
        assert calls == []
        assert isinstance(result, CallError)
        assert result.code is ErrorKind.INVALID_ARGUMENTS
        assert result.message.startswith("Invalid arguments for tool 'Count'")
        assert result.details["kind"] == "OutOfRange"
        assert result.details["path"] == "n"

    @pytest.mark.anyio()
    async def test_non_object_arguments_are_rejected(
        self, registry: ToolRegistry
    ) -> None:
        result = await Dispatcher(registry).call(CallRequest("Echo", "prompt"))

        assert isinstance(result, CallError)
        assert result.details["kind"] == "TypeMismatch"

    @pytest.mark.anyio()
    async def test_handler_exception_is_contained(
        self, registry: ToolRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A raising handler yields HandlerFailed and the dispatcher keeps working."""
        # Arrange
        dispatcher = Dispatcher(registry)

        # Act
        failed = await dispatcher.call_tool("Boom", {})
        after = await dispatcher.call_tool("Echo", {"prompt": "still alive"})

        # Assert
        assert isinstance(failed, CallError)
        assert failed.code is ErrorKind.HANDLER_FAILED
        assert failed.message == "provider exploded"
        assert failed.details == {"exception": "RuntimeError"}
        assert after.ok
        assert "Tool Boom failed" in caplog.text

    @pytest.mark.anyio()
    async def test_legacy_error_values_become_errors(
        self, registry: ToolRegistry
    ) -> None:
        result = await Dispatcher(registry).call_tool("Legacy", {})

        assert isinstance(result, CallError)
        assert result.code is ErrorKind.HANDLER_FAILED
        assert result.message == "API key not configured"

    @pytest.mark.anyio()
    async def test_non_json_values_become_errors(self, registry: ToolRegistry) -> None:
        result = await Dispatcher(registry).call_tool("NotJson", {})

        assert isinstance(result, CallError)
        assert result.code is ErrorKind.HANDLER_FAILED
        assert "not JSON serializable" in result.message

    @pytest.mark.anyio()
    async def test_non_finite_numbers_become_errors(self) -> None:
        """NaN and infinities have no JSON form, so they never reach a client."""
        # Arrange
        registry = ToolRegistry()
        registry.register(
            make_descriptor("Score", lambda _: {"score": float("nan")})
        )
        registry.register(make_descriptor("Limit", lambda _: [float("inf")]))
        dispatcher = Dispatcher(registry)

        # Act
        results = [
            await dispatcher.call_tool("Score", {}),
            await dispatcher.call_tool("Limit", {}),
        ]

        # Assert
        for result in results:
            assert isinstance(result, CallError)
            assert result.code is ErrorKind.HANDLER_FAILED
            assert "not JSON serializable" in result.message
            assert "NaN" not in result.to_json()

    @pytest.mark.anyio()
    async def test_custom_validator_is_used(self, registry: ToolRegistry) -> None:
        seen: list[object] = []

        def validator(schema: object, arguments: object) -> Any:
            seen.append(arguments)
            return {"prompt": "replaced"}

        result = await Dispatcher(registry, validator).call_tool("Echo", {})

        assert seen == [{}]
        assert result == CallSuccess({"echo": {"prompt": "replaced"}})

    def test_error_envelope_serializes_code(self) -> None:
        error = CallError(ErrorKind.TOOL_NOT_FOUND, "Tool 'x' is not registered")

        assert json.loads(error.to_json()) == {
            "kind": "error",
            "code": "ToolNotFound",
            "message": "Tool 'x' is not registered",
            "details": None,
        }


class TestGenerateImageStub:
    """The OpenAI GenerateImage schema driven by in-memory handlers."""

    @pytest.fixture()
    def calls(self) -> list[dict[str, Any]]:
        return []

    def _dispatcher(self, handler: Any) -> Dispatcher:
        registry = ToolRegistry()
        registry.register(
            make_descriptor("GenerateImage", handler, GENERATE_IMAGE_PARAMETERS)
        )
        return Dispatcher(registry)

    @pytest.mark.anyio()
    async def test_stub_success(self, calls: list[dict[str, Any]]) -> None:
        def handler(args: dict[str, Any]) -> dict[str, str]:
            calls.append(args)
            return {"url": "https://img.test/cat.png"}

        result = await self._dispatcher(handler).call_tool(
            "GenerateImage", {"prompt": "cat"}
        )

        assert result == CallSuccess({"url": "https://img.test/cat.png"})
        assert calls[0]["model"] == "gpt-image-1"

    @pytest.mark.anyio()
    async def test_missing_prompt(self) -> None:
        result = await self._dispatcher(lambda args: {}).call_tool("GenerateImage", {})

        assert isinstance(result, CallError)
        assert result.details == {"kind": "MissingField", "path": "prompt"}

    @pytest.mark.anyio()
    async def test_too_many_images(self) -> None:
        result = await self._dispatcher(lambda args: {}).call_tool(
            "GenerateImage", {"prompt": "cat", "n": 15}
        )

        assert isinstance(result, CallError)
        assert result.details["kind"] == "OutOfRange"

    @pytest.mark.anyio()
    async def test_raising_stub_then_recovery(self) -> None:
        attempts: list[int] = []

        def handler(args: dict[str, Any]) -> dict[str, str]:
            attempts.append(1)
            if len(attempts) == 1:
                raise TimeoutError("request timed out")
            return {"url": "https://img.test/cat.png"}

        dispatcher = self._dispatcher(handler)
        failed = await dispatcher.call_tool("GenerateImage", {"prompt": "cat"})
        retried = await dispatcher.call_tool("GenerateImage", {"prompt": "cat"})

        assert isinstance(failed, CallError)
        assert failed.code is ErrorKind.HANDLER_FAILED
        assert failed.message == "request timed out"
        assert retried.ok
