"""Dish tools: categories, CRUD and batch creation."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from exploro_mcp.constants import API_PREFIX, DishStatus
from exploro_mcp.http_client import ApiClient
from exploro_mcp.schema import Number, PositiveNumber, UrlStr
from exploro_mcp.tools.registry import StaticTool, pick

DifficultyName = Literal["easy", "medium", "hard"]
StatusName = Literal["active", "inactive"]

DISH_FIELDS = (
    "name_vi",
    "name_en",
    "description_vi",
    "description_en",
    "instructions_vi",
    "instructions_en",
    "difficulty",
    "cook_time",
    "prep_time",
    "servings",
    "image_url",
    "source_url",
    "status",
)


class DishIngredient(BaseModel):
    ingredient_id: str = Field(..., description="ID of the ingredient")
    quantity: PositiveNumber = Field(..., description="Quantity needed")
    unit_id: str = Field(..., description="REQUIRED - Foreign key to unit")
    notes: Optional[str] = Field(None, description="Additional notes")
    optional: Optional[bool] = Field(None, description="Whether ingredient is optional")


class GetDishCategoriesParams(BaseModel):
    type: Optional[Literal["difficulty", "status", "meal_groups"]] = Field(
        None, description="Get specific category type"
    )


class ListDishesParams(BaseModel):
    status: Optional[Literal["active", "inactive", "all"]] = Field(
        None, description="Filter by status"
    )
    difficulty: Optional[str] = Field(
        None, description="Filter by difficulty (easy, medium, hard)"
    )
    max_cook_time: Optional[Number] = Field(None, description="Maximum cooking time in minutes")
    tags: Optional[List[str]] = Field(None, description="Filter by tag IDs")
    search: Optional[str] = Field(None, description="Search in names and descriptions")
    include_ingredients: Optional[bool] = Field(
        None, description="Include full ingredient details"
    )
    limit: Optional[Number] = Field(None, description="Number of results (default: 50, max: 200)")
    offset: Optional[Number] = Field(None, description="Number of results to skip")


class CreateDishParams(BaseModel):
    name_vi: str = Field(..., description="Vietnamese name of the dish")
    name_en: Optional[str] = Field(None, description="English name of the dish")
    description_vi: str = Field(..., description="Vietnamese description of the dish")
    description_en: Optional[str] = Field(None, description="English description of the dish")
    instructions_vi: str = Field(..., description="Vietnamese cooking instructions")
    instructions_en: Optional[str] = Field(None, description="English cooking instructions")
    difficulty: DifficultyName = Field(..., description="Difficulty level")
    cook_time: PositiveNumber = Field(..., description="Cooking time in minutes")
    prep_time: Optional[Number] = Field(None, description="Preparation time in minutes")
    servings: PositiveNumber = Field(..., description="Number of servings")
    image_url: Optional[UrlStr] = Field(None, description="Image URL")
    source_url: UrlStr = Field(..., description="Recipe source URL")
    status: Optional[StatusName] = Field(None, description="Dish status")
    ingredients: Optional[List[DishIngredient]] = Field(
        None, description="Array of ingredients for the dish"
    )
    tags: List[str] = Field(..., description="Array of tag IDs")


class DishIdParams(BaseModel):
    id: str = Field(..., description="ID of the dish")


class UpdateDishParams(BaseModel):
    id: str = Field(..., description="ID of the dish to update")
    name_vi: Optional[str] = Field(None, description="Vietnamese name of the dish")
    name_en: Optional[str] = Field(None, description="English name of the dish")
    description_vi: Optional[str] = Field(None, description="Vietnamese description of the dish")
    description_en: Optional[str] = Field(None, description="English description of the dish")
    instructions_vi: Optional[str] = Field(None, description="Vietnamese cooking instructions")
    instructions_en: Optional[str] = Field(None, description="English cooking instructions")
    difficulty: Optional[DifficultyName] = Field(None, description="Difficulty level")
    cook_time: Optional[PositiveNumber] = Field(None, description="Cooking time in minutes")
    prep_time: Optional[Number] = Field(None, description="Preparation time in minutes")
    servings: Optional[PositiveNumber] = Field(None, description="Number of servings")
    image_url: Optional[UrlStr] = Field(None, description="Image URL")
    source_url: Optional[UrlStr] = Field(None, description="Recipe source URL")
    status: Optional[StatusName] = Field(None, description="Dish status")
    ingredients: Optional[List[DishIngredient]] = Field(
        None, description="Array of ingredients for the dish"
    )
    tags: Optional[List[str]] = Field(None, description="Array of tag IDs")


class BatchDish(BaseModel):
    name_vi: str = Field(..., description="Vietnamese name of the dish")
    name_en: Optional[str] = Field(None, description="English name of the dish")
    description_vi: str = Field(..., description="Vietnamese description")
    description_en: Optional[str] = Field(None, description="English description")
    instructions_vi: str = Field(..., description="Vietnamese instructions")
    instructions_en: Optional[str] = Field(None, description="English instructions")
    difficulty: DifficultyName = Field(..., description="Difficulty level")
    cook_time: PositiveNumber = Field(..., description="Cooking time in minutes")
    prep_time: Optional[Number] = Field(None, description="Preparation time in minutes")
    servings: Optional[PositiveNumber] = Field(None, description="Number of servings")
    image_url: Optional[UrlStr] = Field(None, description="Image URL")
    source_url: Optional[UrlStr] = Field(None, description="Recipe source URL")
    status: Optional[StatusName] = Field(None, description="Dish status")


class BatchDishEntry(BaseModel):
    dish: BatchDish
    ingredients: Optional[List[DishIngredient]] = Field(None, description="Array of ingredients")
    tags: Optional[List[str]] = Field(None, description="Array of tag IDs")


class BatchDishesParams(BaseModel):
    dishes: List[BatchDishEntry] = Field(
        ..., max_length=20, description="Array of dishes to create (max 20)"
    )


async def get_dish_categories(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request(
        "GET", f"{API_PREFIX}/dishes/categories", query_params=pick(args, "type")
    )


async def list_dishes(client: ApiClient, args: Dict[str, Any]) -> Any:
    query = pick(
        args,
        "status",
        "difficulty",
        "max_cook_time",
        "tags",
        "search",
        "include_ingredients",
        "limit",
        "offset",
    )
    return await client.request("GET", f"{API_PREFIX}/dishes", query_params=query)


async def create_dish(client: ApiClient, args: Dict[str, Any]) -> Any:
    dish = pick(args, *DISH_FIELDS)
    dish["status"] = args.get("status") or DishStatus.ACTIVE
    body = {
        "dish": dish,
        "ingredients": args.get("ingredients") or [],
        "tags": args.get("tags") or [],
    }
    return await client.request("POST", f"{API_PREFIX}/dishes", body)


async def get_dish(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request("GET", f"{API_PREFIX}/dishes/{args['id']}")


async def update_dish(client: ApiClient, args: Dict[str, Any]) -> Any:
    body: Dict[str, Any] = {"dish": pick(args, *DISH_FIELDS)}
    body.update(pick(args, "ingredients", "tags"))
    return await client.request("PUT", f"{API_PREFIX}/dishes/{args['id']}", body)


async def delete_dish(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request("DELETE", f"{API_PREFIX}/dishes/{args['id']}")


async def batch_create_dishes(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request(
        "POST", f"{API_PREFIX}/dishes/batch", {"dishes": args["dishes"]}
    )


TOOLS = [
    StaticTool(
        "get_dish_categories",
        "Get all dish category options including difficulty levels, status options, and meal groups",
        GetDishCategoriesParams,
        get_dish_categories,
    ),
    StaticTool(
        "list_dishes",
        "List all dishes with optional filtering and pagination",
        ListDishesParams,
        list_dishes,
    ),
    StaticTool(
        "create_dish",
        "Create a new dish with ingredient associations and tags",
        CreateDishParams,
        create_dish,
    ),
    StaticTool(
        "get_dish",
        "Get a single dish with full details including ingredients and tags",
        DishIdParams,
        get_dish,
    ),
    StaticTool(
        "update_dish",
        "Update dish details with ingredient associations and tags",
        UpdateDishParams,
        update_dish,
    ),
    StaticTool(
        "delete_dish",
        "Delete a dish (requires admin permission)",
        DishIdParams,
        delete_dish,
    ),
    StaticTool(
        "batch_create_dishes",
        "Create up to 20 dishes in a single request",
        BatchDishesParams,
        batch_create_dishes,
    ),
]
