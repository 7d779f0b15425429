"""Tool registry shared by static and external tools."""

import functools
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, NamedTuple, Optional, Type

from pydantic import BaseModel, ValidationError

from exploro_mcp.errors import DuplicateToolError, ToolInvocationError

logger = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any]], Awaitable[str]]


def format_result(data: Any) -> str:
    """Render a handler result as text."""
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False)


def text_result(fn: Callable[[Dict[str, Any]], Awaitable[Any]]) -> Handler:
    """Wrap a handler so it always returns text.

    Results are pretty-printed JSON (strings pass through); any exception
    becomes "Error: <message>" instead of propagating to the MCP runtime.
    """

    @functools.wraps(fn)
    async def wrapper(args: Dict[str, Any]) -> str:
        try:
            return format_result(await fn(args))
        except Exception as e:
            logger.debug(f"{getattr(fn, '__name__', 'handler')} failed: {e}")
            return f"Error: {e}"

    return wrapper


@dataclass(frozen=True)
class ToolDefinition:
    """A callable tool: name, description, parameter model and text handler."""

    name: str
    description: str
    params_model: Type[BaseModel]
    handler: Handler

    def input_schema(self) -> Dict[str, Any]:
        return self.params_model.model_json_schema()

    def parse_arguments(self, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Validate raw arguments and return them as a JSON-ready dict.

        Absent and null optional arguments are dropped.

        Raises:
            ToolInvocationError: arguments do not match the parameter model
        """
        try:
            params = self.params_model.model_validate(arguments or {})
        except ValidationError as e:
            raise ToolInvocationError(f"Invalid arguments for tool {self.name}: {e}") from e
        return params.model_dump(mode="json", by_alias=True, exclude_none=True)


class ToolRegistry:
    """Name-keyed tool table.

    Populated at startup (static tools synchronously, external tools from
    a background task) and read by the MCP handlers.
    """

    def __init__(self):
        self._tools: Dict[str, ToolDefinition] = {}

    def add(self, tool: ToolDefinition) -> None:
        if tool.name in self._tools:
            raise DuplicateToolError(tool.name)
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> List[str]:
        return list(self._tools)

    def definitions(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    async def invoke(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        """Validate arguments and run the named tool.

        Raises:
            ToolInvocationError: unknown tool or invalid arguments
        """
        tool = self.get(name)
        if tool is None:
            raise ToolInvocationError(f"Unknown tool: {name}")
        return await tool.handler(tool.parse_arguments(arguments))


class StaticTool(NamedTuple):
    """Declarative entry for a tool backed by the Exploro API."""

    name: str
    description: str
    params_model: Type[BaseModel]
    call: Callable[[Any, Dict[str, Any]], Awaitable[Any]]

    def bind(self, client: Any) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            params_model=self.params_model,
            handler=text_result(functools.partial(self.call, client)),
        )


def register_all(registry: ToolRegistry, client: Any, tools: Iterable[StaticTool]) -> None:
    for tool in tools:
        registry.add(tool.bind(client))


def pick(args: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    """Subset of args with only the given keys that are present."""
    return {key: args[key] for key in keys if key in args}
