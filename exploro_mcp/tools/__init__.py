"""Static Exploro API tools."""

from exploro_mcp.http_client import ApiClient
from exploro_mcp.tools import dishes, ingredients, menus, tags
from exploro_mcp.tools.registry import ToolRegistry, register_all

STATIC_TOOLS = ingredients.TOOLS + dishes.TOOLS + tags.TOOLS + menus.TOOLS


def register_static_tools(registry: ToolRegistry, client: ApiClient) -> None:
    """Register every static tool against the given API client."""
    register_all(registry, client, STATIC_TOOLS)
