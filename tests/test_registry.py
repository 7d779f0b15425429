"""Tests for the tool registry and result combinator."""

from typing import Optional

import pytest
from pydantic import BaseModel, Field

from exploro_mcp.errors import ApiError, DuplicateToolError, ToolInvocationError
from exploro_mcp.tools.registry import (
    StaticTool,
    ToolDefinition,
    ToolRegistry,
    format_result,
    pick,
    text_result,
)


class EchoParams(BaseModel):
    word: str = Field(..., description="Word to echo")
    times: Optional[int] = Field(None, description="Repetitions")


async def echo(args):
    return args


def _echo_tool(name="echo"):
    return ToolDefinition(
        name=name,
        description="Echo arguments",
        params_model=EchoParams,
        handler=text_result(echo),
    )


class TestTextResult:
    """Test the result-wrapping combinator."""

    @pytest.mark.asyncio
    async def test_json_result(self):
        """Non-string results are pretty-printed JSON."""
        handler = text_result(echo)
        assert await handler({"a": [1, 2]}) == '{\n  "a": [\n    1,\n    2\n  ]\n}'

    @pytest.mark.asyncio
    async def test_string_passthrough(self):
        """Strings are returned unchanged."""

        async def greet(args):
            return "hello"

        assert await text_result(greet)({}) == "hello"

    @pytest.mark.asyncio
    async def test_exception_becomes_text(self):
        """Exceptions are converted to Error: text."""

        async def fail(args):
            raise ApiError("Not found", status_code=404)

        assert await text_result(fail)({}) == "Error: Not found"

    def test_format_result_unicode(self):
        """Non-ASCII text is kept readable."""
        assert format_result({"name_vi": "Phở"}) == '{\n  "name_vi": "Phở"\n}'


class TestToolRegistry:
    """Test registration and dispatch."""

    def test_add_and_get(self):
        """Registered tools are retrievable by name."""
        registry = ToolRegistry()
        registry.add(_echo_tool())

        assert "echo" in registry
        assert len(registry) == 1
        assert registry.get("echo").description == "Echo arguments"
        assert registry.get("missing") is None
        assert registry.names() == ["echo"]

    def test_duplicate_rejected(self):
        """A second tool with the same name is refused."""
        registry = ToolRegistry()
        registry.add(_echo_tool())

        with pytest.raises(DuplicateToolError):
            registry.add(_echo_tool())

    @pytest.mark.asyncio
    async def test_invoke_validates_and_drops_none(self):
        """Arguments are validated and absent optionals are omitted."""
        registry = ToolRegistry()
        registry.add(_echo_tool())

        result = await registry.invoke("echo", {"word": "hi", "times": None})
        assert result == '{\n  "word": "hi"\n}'

    @pytest.mark.asyncio
    async def test_invoke_unknown(self):
        """Unknown names raise ToolInvocationError."""
        with pytest.raises(ToolInvocationError, match="Unknown tool: nope"):
            await ToolRegistry().invoke("nope", {})

    @pytest.mark.asyncio
    async def test_invoke_invalid_arguments(self):
        """Schema violations raise ToolInvocationError."""
        registry = ToolRegistry()
        registry.add(_echo_tool())

        with pytest.raises(ToolInvocationError, match="Invalid arguments for tool echo"):
            await registry.invoke("echo", {"times": 2})

    def test_input_schema(self):
        """Tool input schema comes from the parameter model."""
        schema = _echo_tool().input_schema()
        assert schema["required"] == ["word"]
        assert schema["properties"]["word"]["description"] == "Word to echo"


class TestStaticTool:
    """Test binding declarative entries to a client."""

    @pytest.mark.asyncio
    async def test_bind_passes_client(self):
        """The bound handler receives the client as its first argument."""

        async def call(client, args):
            return {"client": client, "args": args}

        tool = StaticTool("probe", "Probe", EchoParams, call).bind("the-client")
        result = await tool.handler({"word": "x"})

        assert '"client": "the-client"' in result
        assert tool.name == "probe"


class TestPick:
    """Test the pick helper."""

    def test_only_present_keys(self):
        """Missing keys are skipped, present falsy values kept."""
        args = {"a": 1, "b": False, "c": None}
        assert pick(args, "a", "b", "d") == {"a": 1, "b": False}
