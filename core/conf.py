#!/usr/bin/env python3
import os
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_PATH = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=f"{BASE_PATH}/.env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # Environment
    ENVIRONMENT: Literal["dev", "pro"] = "pro"  # "dev" serves /docs and /openapi.json
    PROJECT_NAME: str = "AI Overview Search"
    LOG_LEVEL: str = "INFO"
    PORT: int = 8080

    # SerpAPI
    SERPAPI_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SERPAPI_API_KEY", "api_key"),
    )
    SERPAPI_BASE_URL: str = "https://serpapi.com/search.json"
    SERPAPI_TIMEOUT_SECS: Optional[float] = None  # unset = no total timeout

    # Locale sent with the searches
    SEARCH_LOCATION: str = "Indonesia"
    SEARCH_GOOGLE_DOMAIN: str = "google.com"
    SEARCH_GL: str = "id"
    SEARCH_HL: str = "id"


def get_settings() -> Settings:
    """Load settings from the environment (and `.env`).

    Not cached: handlers call this per request so the API key is always the
    one currently in the environment.
    """
    return Settings()


# Snapshot used for application setup (title, client endpoint, locale)
settings = get_settings()
