"""Exploro MCP - culinary management tools over the Model Context Protocol."""

__version__ = "1.0.1"
