"""Menu tools."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from exploro_mcp.constants import API_PREFIX, Visibility
from exploro_mcp.http_client import ApiClient
from exploro_mcp.schema import DayIndex, Number, PositiveNumber
from exploro_mcp.tools.registry import StaticTool, pick

DEFAULT_SERVINGS = 4


class ListMenusParams(BaseModel):
    visibility: Optional[str] = Field(None, description="Filter by visibility (private, public)")
    start_date: Optional[str] = Field(
        None, description="Filter menus starting after this date (ISO 8601)"
    )
    end_date: Optional[str] = Field(
        None, description="Filter menus ending before this date (ISO 8601)"
    )
    limit: Optional[Number] = Field(None, description="Number of results (default: 50, max: 200)")
    offset: Optional[Number] = Field(None, description="Number of results to skip")


class MenuDish(BaseModel):
    dish_id: str = Field(..., description="ID of the dish")
    day_index: Optional[DayIndex] = Field(None, description="Day index (0-6, Monday-Sunday)")
    meal_group: Optional[Literal["breakfast", "lunch", "dinner", "snack"]] = Field(
        None, description="Meal group"
    )
    order_index: Optional[Number] = Field(None, description="Order index (default: 0)")
    quantity: Optional[PositiveNumber] = Field(None, description="Quantity (default: 1)")


class CreateMenuParams(BaseModel):
    name: str = Field(..., description="Name of the menu")
    description: Optional[str] = Field(None, description="Description of the menu")
    start_date: Optional[str] = Field(None, description="Start date (ISO 8601)")
    end_date: Optional[str] = Field(None, description="End date (ISO 8601)")
    servings: Optional[PositiveNumber] = Field(
        None, description="Number of servings (default: 4)"
    )
    visibility: Optional[Literal["private", "public"]] = Field(
        None, description="Menu visibility (default: private)"
    )
    dishes: Optional[List[MenuDish]] = Field(
        None, description="Array of dishes to include in the menu"
    )


class MenuIdParams(BaseModel):
    id: str = Field(..., description="ID of the menu to retrieve")


async def list_menus(client: ApiClient, args: Dict[str, Any]) -> Any:
    query = pick(args, "visibility", "start_date", "end_date", "limit", "offset")
    return await client.request("GET", f"{API_PREFIX}/menus", query_params=query)


async def create_menu(client: ApiClient, args: Dict[str, Any]) -> Any:
    menu = pick(args, "name", "description", "start_date", "end_date")
    menu["servings"] = args.get("servings") or DEFAULT_SERVINGS
    menu["visibility"] = args.get("visibility") or Visibility.PRIVATE
    body = {"menu": menu, "dishes": args.get("dishes") or []}
    return await client.request("POST", f"{API_PREFIX}/menus", body)


async def get_menu(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request("GET", f"{API_PREFIX}/menus/{args['id']}")


TOOLS = [
    StaticTool(
        "list_menus",
        "List menus with cost calculation and optional filtering",
        ListMenusParams,
        list_menus,
    ),
    StaticTool(
        "create_menu",
        "Create a new menu with dish associations",
        CreateMenuParams,
        create_menu,
    ),
    StaticTool(
        "get_menu",
        "Get a single menu with full details including dishes and cost calculation",
        MenuIdParams,
        get_menu,
    ),
]
