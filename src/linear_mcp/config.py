"""Configuration management for Linear MCP."""

import os
from functools import lru_cache

from pydantic import Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    model_config = ConfigDict(
        env_file=".env" if os.getenv("ENVIRONMENT") != "test" else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = "linear-mcp"
    app_version: str = "0.3.0"
    debug: bool = Field(default=False, env="DEBUG")
    environment: str = Field(default="development", env="ENVIRONMENT")
    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    # Linear API
    linear_api_key: str = Field(env="LINEAR_API_KEY")
    linear_api_url: str = Field(
        default="https://api.linear.app/graphql", env="LINEAR_API_URL"
    )

    # Upstream HTTP
    http_timeout: float = Field(default=30.0, env="HTTP_TIMEOUT")
    http_max_connections: int = Field(default=20, env="HTTP_MAX_CONNECTIONS")

    @field_validator("linear_api_key", mode="before")
    @classmethod
    def validate_linear_api_key(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("LINEAR_API_KEY environment variable is required")
        return str(v).strip()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
