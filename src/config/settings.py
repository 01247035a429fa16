"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field has a default, so the search service starts without any
    environment configured. LLM query parsing stays disabled until
    OPENAI_API_KEY (or QUERY_PARSER_ENDPOINT) is provided.

    Optional environment variables:
        - HOST: Server host (default: 0.0.0.0)
        - PORT: Server port (default: 8080)
        - CATALOG_PATH: JSON file with the resource catalog
        - OPENAI_API_KEY: Key for the in-process query parser
        - QUERY_PARSER_ENDPOINT: Remote parse-query URL (used instead of OpenAI)
        - ENVIRONMENT: Environment name (development, staging, production)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    # CORS Configuration
    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Catalog
    # ==========================================================================
    catalog_path: Path = Field(
        default=Path("data/resources.json"),
        description="JSON file holding the resource catalog"
    )

    @field_validator("catalog_path", mode="before")
    @classmethod
    def parse_catalog_path(cls, v):
        if isinstance(v, str):
            return Path(v)
        return v

    # ==========================================================================
    # Search Defaults
    # ==========================================================================
    search_min_results: int = Field(
        default=3,
        ge=0,
        description="Results below this count trigger the fallback path"
    )
    search_max_results: int = Field(
        default=50,
        ge=1,
        description="Maximum primary results returned per search"
    )

    # ==========================================================================
    # OpenAI (LLM Query Parser)
    # ==========================================================================
    openai_api_key: str = Field(default="", description="OpenAI API key for LLM query parsing")
    query_parser_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model for query parsing"
    )
    query_parser_enabled: bool = Field(
        default=True,
        description="Enable LLM query parsing (falls back to heuristics if disabled or fails)"
    )
    query_parser_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for one LLM parse attempt (seconds)"
    )
    query_parser_endpoint: Optional[str] = Field(
        default=None,
        description="Remote parse-query URL. When set, parsing goes over HTTP instead of OpenAI"
    )

    # ==========================================================================
    # Parse Endpoint Rate Limits
    # ==========================================================================
    parse_rate_limit_per_minute: int = Field(
        default=10,
        ge=1,
        description="Parse-query requests allowed per client per minute"
    )
    parse_rate_limit_per_day: int = Field(
        default=100,
        ge=1,
        description="Parse-query requests allowed per client per day"
    )

    @property
    def query_parser_configured(self) -> bool:
        return bool(self.openai_api_key or self.query_parser_endpoint)


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance
    """
    # Try to find .env file in project root
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))

    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "environment": "testing",
        "debug": True,
        "openai_api_key": "",
        "query_parser_endpoint": None,
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)
