# product_api/config.py
# Settings are read from environment variables (and a .env file if present).
#
#   from product_api.config import settings
#   settings.PORT

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the product API."""

    PORT: int = Field(default=3000, ge=1, le=65535, description="Port the HTTP server listens on")
    HOST: str = Field(default="0.0.0.0", description="Address the HTTP server binds to")

    MAX_PRODUCTS: int = Field(default=50, ge=1, description="Maximum number of products the store holds")

    # comma-separated, "*" allows any origin
    CORS_ORIGINS: str = Field(default="*", description="Allowed CORS origins")

    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    DOCS_URL: str = Field(default="/api-docs", description="Path of the interactive API docs")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
