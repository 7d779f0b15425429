"""Tag tools."""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

from exploro_mcp.constants import API_PREFIX
from exploro_mcp.http_client import ApiClient
from exploro_mcp.schema import EmptyParams
from exploro_mcp.tools.registry import StaticTool, pick

TagCategoryName = Literal[
    "cooking_method",
    "meal_type",
    "cuisine",
    "dietary",
    "occasion",
    "flavor",
    "temperature",
    "texture",
]


class ListTagsParams(BaseModel):
    category: Optional[TagCategoryName] = Field(None, description="Filter by tag category")


class CreateTagParams(BaseModel):
    name_vi: str = Field(..., description="Vietnamese name of the tag")
    name_en: Optional[str] = Field(None, description="English name of the tag")
    category: Optional[TagCategoryName] = Field(None, description="Tag category")


async def get_tag_categories(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request("GET", f"{API_PREFIX}/tags/categories")


async def list_tags(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request("GET", f"{API_PREFIX}/tags", query_params=pick(args, "category"))


async def create_tag(client: ApiClient, args: Dict[str, Any]) -> Any:
    tag = pick(args, "name_vi", "name_en", "category")
    return await client.request("POST", f"{API_PREFIX}/tags", {"tag": tag})


TOOLS = [
    StaticTool(
        "get_tag_categories",
        "Get all available tag categories for dish classification",
        EmptyParams,
        get_tag_categories,
    ),
    StaticTool(
        "list_tags",
        "List all available tags with usage count",
        ListTagsParams,
        list_tags,
    ),
    StaticTool("create_tag", "Create a new tag", CreateTagParams, create_tag),
]
