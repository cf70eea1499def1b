"""Tests for tool registration and dispatch."""

from typing import Optional

import pytest
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND
from pydantic import Field

from issue_qa_mcp.errors import invalid_params
from issue_qa_mcp.tool_registry import ToolDefinition, ToolInput, ToolRegistry, to_json


class EchoInput(ToolInput):
    message: str = Field(description="Text to echo")
    repeat_count: Optional[int] = Field(None, alias="repeatCount", description="Repetitions")


async def _echo(args: EchoInput) -> str:
    return args.message * (args.repeat_count or 1)


async def _typed_failure(args: EchoInput) -> str:
    raise invalid_params("mensaje inválido")


async def _untyped_failure(args: EchoInput) -> str:
    raise ValueError("boom")


@pytest.fixture
def registry() -> ToolRegistry:
    return ToolRegistry([
        ToolDefinition("echo", "Echo a message", EchoInput, _echo),
        ToolDefinition("typed_failure", "Raise a typed error", EchoInput, _typed_failure),
        ToolDefinition("untyped_failure", "Raise a plain exception", EchoInput, _untyped_failure),
    ])


class TestToolRegistry:
    """Test registry bookkeeping."""

    def test_names_keep_registration_order(self, registry: ToolRegistry) -> None:
        """Test names and listed tools follow registration order."""
        assert registry.names == ["echo", "typed_failure", "untyped_failure"]
        assert [tool.name for tool in registry.list_tools()] == registry.names
        assert len(registry) == 3
        assert "echo" in registry

    def test_duplicate_registration(self, registry: ToolRegistry) -> None:
        """Test registering a name twice is rejected."""
        with pytest.raises(ValueError):
            registry.register(ToolDefinition("echo", "Again", EchoInput, _echo))

    def test_schema_uses_wire_names(self, registry: ToolRegistry) -> None:
        """Test the advertised schema uses camelCase aliases and marks required fields."""
        tool = registry.list_tools()[0]
        schema = tool.inputSchema

        assert tool.description == "Echo a message"
        assert set(schema["properties"]) == {"message", "repeatCount"}
        assert schema["required"] == ["message"]


class TestDispatch:
    """Test dispatch error semantics."""

    async def test_success(self, registry: ToolRegistry) -> None:
        """Test handlers receive validated arguments and return one text item."""
        result = await registry.dispatch("echo", {"message": "ab", "repeatCount": 2})

        assert len(result) == 1
        assert result[0].type == "text"
        assert result[0].text == "abab"

    async def test_unknown_tool(self, registry: ToolRegistry) -> None:
        """Test unknown names raise method-not-found."""
        with pytest.raises(McpError) as exc_info:
            await registry.dispatch("nope", {})

        assert exc_info.value.error.code == METHOD_NOT_FOUND
        assert exc_info.value.error.message == "Herramienta desconocida: nope"

    async def test_missing_required_argument(self, registry: ToolRegistry) -> None:
        """Test schema violations raise invalid-params."""
        with pytest.raises(McpError) as exc_info:
            await registry.dispatch("echo", None)

        assert exc_info.value.error.code == INVALID_PARAMS
        assert "message" in exc_info.value.error.message

    async def test_wrong_argument_type(self, registry: ToolRegistry) -> None:
        """Test non-coercible values raise invalid-params."""
        with pytest.raises(McpError) as exc_info:
            await registry.dispatch("echo", {"message": "x", "repeatCount": "many"})
        assert exc_info.value.error.code == INVALID_PARAMS

    async def test_typed_error_passes_through(self, registry: ToolRegistry) -> None:
        """Test errors already carrying a protocol code are not rewrapped."""
        with pytest.raises(McpError) as exc_info:
            await registry.dispatch("typed_failure", {"message": "x"})

        assert exc_info.value.error.code == INVALID_PARAMS
        assert exc_info.value.error.message == "mensaje inválido"

    async def test_untyped_error_is_wrapped(self, registry: ToolRegistry) -> None:
        """Test plain exceptions become internal errors naming the tool."""
        with pytest.raises(McpError) as exc_info:
            await registry.dispatch("untyped_failure", {"message": "x"})

        assert exc_info.value.error.code == INTERNAL_ERROR
        assert exc_info.value.error.message == "Error ejecutando untyped_failure: boom"


def test_to_json_keeps_non_ascii_and_stringifies_unknown_types() -> None:
    """Test payload serialization for provider and database results."""
    from datetime import date

    assert to_json({"título": "sí", "day": date(2024, 1, 2)}) == '{"título": "sí", "day": "2024-01-02"}'
