"""Exploro constants

Server identity, the API prefix, and default values sent to the API.
"""

SERVER_NAME = "exploro-mcp"

API_PREFIX = "/api/v1"

STATUS_RESOURCE_URI = "exploro://status"
STATUS_RESOURCE_NAME = "Server Status"
STATUS_TEXT = "Exploro MCP Server - Ready to manage your culinary data!"

# Header carrying the registry credential.
REGISTRY_KEY_HEADER = "x-api-key"


class DishStatus:
    """Dish status values."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Visibility:
    """Menu visibility values."""

    PRIVATE = "private"
    PUBLIC = "public"
