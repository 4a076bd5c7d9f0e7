from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
    "https://www.figma.com",
    "https://figma.com",
]


class AppSettings(BaseSettings):
    name: str = "Portfolio API"
    version: str = "0.1.0"
    api_prefix: str = "/api"

    cors_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    # Figma plugin frames and any local dev server
    cors_origin_regex: Optional[str] = (
        r"^https?://((.+\.)?figma\.com|localhost(:\d+)?|127\.0\.0\.1(:\d+)?)$"
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",  # APP_NAME, APP_API_PREFIX, APP_CORS_ORIGINS='["https://..."]'
        extra="ignore",
    )


@lru_cache
def get_app_settings(**kwargs) -> AppSettings:
    # Only include kwargs that are not None, so defaults in AppSettings are used
    filtered_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return AppSettings(**filtered_kwargs)
