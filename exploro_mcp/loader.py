"""External tool loader.

Fetches a tool manifest from the configured registry and registers one
prompt-template tool per entry. Best-effort: nothing here raises to the
caller, and a missing registry URL or key disables loading silently.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from exploro_mcp.config import Settings
from exploro_mcp.constants import REGISTRY_KEY_HEADER
from exploro_mcp.errors import ExploroError, RegistryFetchFailure
from exploro_mcp.schema import ExternalToolDescriptor, build_parameter_model
from exploro_mcp.templates import render
from exploro_mcp.tools.registry import ToolDefinition, ToolRegistry, text_result

logger = logging.getLogger(__name__)


@dataclass
class LoadReport:
    """Outcome of one load: registered tool names and skipped entries with reasons."""

    loaded: List[str] = field(default_factory=list)
    skipped: Dict[str, str] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.loaded)


def prompt_handler(prompt: str):
    """Handler that renders the tool's prompt with the invocation arguments."""

    async def handle(args: Dict[str, Any]) -> str:
        return render(prompt, args)

    handle.__name__ = "render_prompt"
    return text_result(handle)


def build_tool(descriptor: ExternalToolDescriptor) -> ToolDefinition:
    """Turn a descriptor into a registrable tool.

    Raises:
        UnsupportedArgumentType: an argument declares an unknown type
    """
    return ToolDefinition(
        name=descriptor.name,
        description=descriptor.description,
        params_model=build_parameter_model(descriptor),
        handler=prompt_handler(descriptor.prompt),
    )


class ExternalToolLoader:
    """Loads tool definitions from the external registry into a ToolRegistry."""

    def __init__(
        self,
        settings: Settings,
        registry: ToolRegistry,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_url = settings.api_url
        self.api_key = settings.api_key
        self.registry = registry
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self.api_url) and bool(self.api_key)

    async def fetch_manifest(self) -> List[Any]:
        """GET the manifest and return its raw entries.

        Raises:
            RegistryFetchFailure: transport error, non-2xx, or non-array body
        """
        headers = {REGISTRY_KEY_HEADER: self.api_key}
        try:
            if self._client is not None:
                response = await self._client.get(self.api_url, headers=headers)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(self.api_url, headers=headers)
        except httpx.HTTPError as e:
            raise RegistryFetchFailure(f"Registry unreachable: {e}", cause=e) from e

        if not response.is_success:
            raise RegistryFetchFailure(
                f"Failed to fetch external tools: {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            entries = response.json()
        except ValueError as e:
            raise RegistryFetchFailure(f"Registry returned invalid JSON: {e}", cause=e) from e

        if not isinstance(entries, list):
            raise RegistryFetchFailure(
                f"Registry returned {type(entries).__name__}, expected a list of tools"
            )
        return entries

    def register_entries(self, entries: List[Any]) -> LoadReport:
        """Register each manifest entry; a bad entry is skipped, never fatal."""
        report = LoadReport()

        for index, entry in enumerate(entries):
            label = entry.get("name") if isinstance(entry, dict) else None
            label = str(label or f"#{index}")
            try:
                descriptor = ExternalToolDescriptor.model_validate(entry)
                self.registry.add(build_tool(descriptor))
            except ValidationError as e:
                reason = f"invalid descriptor: {e.error_count()} validation error(s)"
                logger.warning(f"Skipping external tool {label}: {reason}")
                report.skipped[label] = reason
            except ExploroError as e:
                logger.warning(f"Skipping external tool {label}: {e.message}")
                report.skipped[label] = e.message
            except Exception as e:
                logger.warning(f"Skipping external tool {label}: {e}", exc_info=True)
                report.skipped[label] = str(e)
            else:
                report.loaded.append(descriptor.name)

        return report

    async def load(self) -> LoadReport:
        """Fetch and register external tools. Never raises."""
        if not self.enabled:
            return LoadReport()

        try:
            entries = await self.fetch_manifest()
        except RegistryFetchFailure as e:
            logger.warning(e.message)
            return LoadReport()
        except Exception as e:
            logger.error(f"Failed to load external tools: {e}", exc_info=True)
            return LoadReport()

        report = self.register_entries(entries)
        logger.info(f"Loaded {report.count} external tools")
        return report

    def start(self) -> "asyncio.Task[LoadReport]":
        """Schedule load() on the running loop without waiting for it."""
        return asyncio.get_running_loop().create_task(self.load(), name="load-external-tools")
