"""Configuration settings for the Exploro MCP server."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables and a local .env file.

    Exploro API:
    - EXPLORO_BASE_URL: root of the REST API (defaults to a local dev server)
    - EXPLORO_API_KEY: bearer token attached to every API call

    External tool registry (both required to enable dynamic tools):
    - API_URL: endpoint returning the tool manifest
    - API_KEY: sent as the x-api-key header
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Exploro API
    exploro_base_url: str = "http://localhost:3000"
    exploro_api_key: Optional[str] = None

    # External tool registry
    api_url: Optional[str] = None
    api_key: Optional[str] = None

    # Logging
    log_level: str = Field(default="INFO", validation_alias="EXPLORO_LOG_LEVEL")
    log_dir: Optional[str] = Field(default=None, validation_alias="EXPLORO_LOG_DIR")

    def missing_credentials(self) -> List[str]:
        """Warnings for settings whose absence degrades the server."""
        warnings = []
        if not self.exploro_api_key:
            warnings.append(
                "EXPLORO_API_KEY not set. Exploro tools will not work properly."
            )
        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
