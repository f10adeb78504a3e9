"""
Runtime configuration.

All values can be set through environment variables (upper case, e.g. PORT)
or a local .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SWAPI_BASE_URL = "https://swapi.online/api"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="HTTP listen address")
    port: int = Field(default=3000, ge=1, le=65535, description="HTTP listen port")

    swapi_base_url: str = Field(
        default=DEFAULT_SWAPI_BASE_URL,
        description="Base URL of the Star Wars API",
    )
    swapi_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Total timeout for one upstream request, in seconds. "
        "Unset means the HTTP client default.",
    )

    log_level: str = Field(default="INFO", description="Root log level")


@lru_cache
def get_settings() -> Settings:
    return Settings()
