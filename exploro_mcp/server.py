"""MCP server for the Exploro culinary API.

Exposes:
- the static ingredient, dish, tag and menu tools
- prompt-template tools loaded from an external registry (optional)
- exploro://status resource
"""

import argparse
import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Resource, TextContent, Tool

from exploro_mcp import __version__
from exploro_mcp.config import Settings, get_settings
from exploro_mcp.constants import (
    SERVER_NAME,
    STATUS_RESOURCE_NAME,
    STATUS_RESOURCE_URI,
    STATUS_TEXT,
)
from exploro_mcp.errors import ToolInvocationError
from exploro_mcp.http_client import ApiClient
from exploro_mcp.loader import ExternalToolLoader, LoadReport
from exploro_mcp.logger import configure_logging
from exploro_mcp.tools import register_static_tools
from exploro_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class ExploroServer:
    """MCP server for Exploro."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        api_client: Optional[ApiClient] = None,
        registry_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        for warning in self.settings.missing_credentials():
            logger.warning(warning)

        self.registry = ToolRegistry()
        self.api_client = api_client or ApiClient(self.settings)
        self.loader = ExternalToolLoader(self.settings, self.registry, registry_client)
        self.loader_task: Optional["asyncio.Task[LoadReport]"] = None

        register_static_tools(self.registry, self.api_client)

        self.server = Server(SERVER_NAME)
        self._setup_handlers()

    async def list_tools(self) -> List[Tool]:
        """Current tools, including any loaded since startup."""
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema(),
            )
            for tool in self.registry.definitions()
        ]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Validate and dispatch one invocation.

        Handler failures come back as "Error: ..." text. Unknown tools and
        invalid arguments raise ToolInvocationError, which the MCP runtime
        reports as an error result.
        """
        logger.debug(f"call_tool: {name}")
        try:
            text = await self.registry.invoke(name, arguments)
        except ToolInvocationError as e:
            logger.warning(e.message)
            raise
        return [TextContent(type="text", text=text)]

    async def list_resources(self) -> List[Resource]:
        return [
            Resource(
                uri=STATUS_RESOURCE_URI,
                name=STATUS_RESOURCE_NAME,
                mimeType="text/plain",
            )
        ]

    async def read_resource(self, uri: Any) -> List[ReadResourceContents]:
        if str(uri).rstrip("/") == STATUS_RESOURCE_URI:
            return [ReadResourceContents(content=STATUS_TEXT, mime_type="text/plain")]
        raise ValueError(f"Unknown resource: {uri}")

    def _setup_handlers(self):
        """Register MCP handlers."""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            return await self.list_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict) -> List[TextContent]:
            return await self.call_tool(name, arguments)

        @self.server.list_resources()
        async def list_resources() -> List[Resource]:
            return await self.list_resources()

        @self.server.read_resource()
        async def read_resource(uri) -> List[ReadResourceContents]:
            return await self.read_resource(uri)

    def start_loading(self) -> "asyncio.Task[LoadReport]":
        """Spawn the external tool load in the background.

        Serving does not wait for it; external tools become callable once
        the task finishes.
        """
        self.loader_task = self.loader.start()
        return self.loader_task

    async def start(self):
        """Start the MCP server over stdio."""
        self.start_loading()
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    InitializationOptions(
                        server_name=SERVER_NAME,
                        server_version=__version__,
                        capabilities=self.server.get_capabilities(
                            notification_options=NotificationOptions(),
                            experimental_capabilities={},
                        ),
                    ),
                )
        finally:
            if self.loader_task and not self.loader_task.done():
                self.loader_task.cancel()
            await self.api_client.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="MCP server for the Exploro culinary API (stdio transport)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Dotenv file to read settings from (default: .env)",
    )
    return parser


async def run_stdio(settings: Settings):
    """Run in stdio mode."""
    server = ExploroServer(settings)
    await server.start()


def main(argv: Optional[List[str]] = None):
    """Entry point."""
    args = build_parser().parse_args(argv)
    settings = Settings(_env_file=args.env_file)

    level = logging.DEBUG if args.debug else settings.log_level
    configure_logging(level, settings.log_dir)

    asyncio.run(run_stdio(settings))


if __name__ == "__main__":
    main()
