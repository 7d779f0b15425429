"""Ingredient tools: categories, units, CRUD and batch creation."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from exploro_mcp.constants import API_PREFIX
from exploro_mcp.http_client import ApiClient
from exploro_mcp.schema import EmptyParams, Number, PositiveNumber
from exploro_mcp.tools.registry import StaticTool, pick

IngredientCategoryName = Literal[
    "vegetables", "meat", "seafood", "spices", "dairy", "grains", "fruits", "sauces", "other"
]


class GetUnitsParams(BaseModel):
    category: Optional[Literal["mass", "volume", "count", "bundle", "cooking"]] = Field(
        None, description="Filter by unit category"
    )
    grouped: Optional[bool] = Field(None, description="Return units grouped by category")


class ListIngredientsParams(BaseModel):
    search: Optional[str] = Field(None, description="Search in Vietnamese and English names")
    category: Optional[IngredientCategoryName] = Field(
        None, description="Filter by ingredient category"
    )
    seasonal: Optional[bool] = Field(None, description="Filter seasonal ingredients")
    limit: Optional[Number] = Field(None, description="Number of results (default: 50, max: 200)")
    offset: Optional[Number] = Field(None, description="Number of results to skip")


class NewIngredient(BaseModel):
    name_vi: str = Field(..., description="Vietnamese name of the ingredient")
    name_en: Optional[str] = Field(None, description="English name of the ingredient")
    current_price: PositiveNumber = Field(..., description="Current price of the ingredient")
    unit_id: str = Field(..., description="REQUIRED - Foreign key to unit")
    category_id: Optional[str] = Field(None, description="Foreign key to ingredient category")
    category: Optional[IngredientCategoryName] = Field(
        None, description="Ingredient category (legacy - use category_id instead)"
    )
    default_unit: Optional[str] = Field(
        None, description="Default unit for the ingredient (legacy - use unit_id instead)"
    )
    density: Optional[Number] = Field(
        None, description="Density in g/ml for mass-volume conversion"
    )
    seasonal_flag: Optional[bool] = Field(None, description="Whether the ingredient is seasonal")


class IdParams(BaseModel):
    id: str = Field(..., description="ID of the ingredient")


class UpdateIngredientParams(BaseModel):
    id: str = Field(..., description="ID of the ingredient to update")
    name_vi: Optional[str] = Field(None, description="Vietnamese name of the ingredient")
    name_en: Optional[str] = Field(None, description="English name of the ingredient")
    category: Optional[IngredientCategoryName] = Field(None, description="Ingredient category")
    default_unit: Optional[str] = Field(None, description="Default unit for the ingredient")
    current_price: Optional[PositiveNumber] = Field(
        None, description="Current price of the ingredient"
    )
    seasonal_flag: Optional[bool] = Field(None, description="Whether the ingredient is seasonal")


class BatchIngredientsParams(BaseModel):
    ingredients: List[NewIngredient] = Field(
        ..., max_length=50, description="Array of ingredients to create (max 50)"
    )


def ingredient_payload(args: Dict[str, Any]) -> Dict[str, Any]:
    """Build the ingredient object for a create request.

    category_id wins over the legacy category; unit_id wins over the
    legacy default_unit, and one of the two is required.
    """
    ingredient = {
        "name_vi": args.get("name_vi"),
        "current_price": args.get("current_price"),
        "seasonal_flag": args.get("seasonal_flag") or False,
    }
    ingredient.update(pick(args, "name_en", "density"))

    if "category_id" in args:
        ingredient["category_id"] = args["category_id"]
    elif "category" in args:
        ingredient["category"] = args["category"]

    if "unit_id" in args:
        ingredient["unit_id"] = args["unit_id"]
    elif "default_unit" in args:
        ingredient["default_unit"] = args["default_unit"]
    else:
        raise ValueError("unit_id is required for ingredient creation")

    return ingredient


async def get_ingredient_categories(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request("GET", f"{API_PREFIX}/ingredients/categories")


async def get_ingredient_units(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request(
        "GET",
        f"{API_PREFIX}/ingredients/units",
        query_params=pick(args, "category", "grouped"),
    )


async def list_ingredients(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request(
        "GET",
        f"{API_PREFIX}/ingredients",
        query_params=pick(args, "search", "category", "seasonal", "limit", "offset"),
    )


async def create_ingredient(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request(
        "POST", f"{API_PREFIX}/ingredients", {"ingredient": ingredient_payload(args)}
    )


async def get_ingredient(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request("GET", f"{API_PREFIX}/ingredients/{args['id']}")


async def update_ingredient(client: ApiClient, args: Dict[str, Any]) -> Any:
    update = pick(
        args, "name_vi", "name_en", "category", "default_unit", "current_price", "seasonal_flag"
    )
    return await client.request(
        "PUT", f"{API_PREFIX}/ingredients/{args['id']}", {"ingredient": update}
    )


async def delete_ingredient(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request("DELETE", f"{API_PREFIX}/ingredients/{args['id']}")


async def batch_create_ingredients(client: ApiClient, args: Dict[str, Any]) -> Any:
    return await client.request(
        "POST", f"{API_PREFIX}/ingredients/batch", {"ingredients": args["ingredients"]}
    )


TOOLS = [
    StaticTool(
        "get_ingredient_categories",
        "Get all available ingredient categories for classification",
        EmptyParams,
        get_ingredient_categories,
    ),
    StaticTool(
        "get_ingredient_units",
        "Get all available units for ingredient measurements with conversion factors",
        GetUnitsParams,
        get_ingredient_units,
    ),
    StaticTool(
        "list_ingredients",
        "List all ingredients with optional filtering and pagination",
        ListIngredientsParams,
        list_ingredients,
    ),
    StaticTool(
        "create_ingredient",
        "Create a new ingredient with automatic duplicate detection",
        NewIngredient,
        create_ingredient,
    ),
    StaticTool(
        "get_ingredient",
        "Get a single ingredient with price history",
        IdParams,
        get_ingredient,
    ),
    StaticTool(
        "update_ingredient",
        "Update ingredient details with automatic price history tracking",
        UpdateIngredientParams,
        update_ingredient,
    ),
    StaticTool(
        "delete_ingredient",
        "Delete an ingredient (requires admin permission)",
        IdParams,
        delete_ingredient,
    ),
    StaticTool(
        "batch_create_ingredients",
        "Create up to 50 ingredients in a single request",
        BatchIngredientsParams,
        batch_create_ingredients,
    ),
]
