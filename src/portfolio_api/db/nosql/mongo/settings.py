from __future__ import annotations

from functools import lru_cache
from typing import Optional
from urllib.parse import quote_plus

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

LOCAL_MONGO_URL = "mongodb://localhost:27017"


class MongoSettings(BaseSettings):
    """
    MongoDB settings.

    Env support:
      - MONGO_URL, MONGO_DB, MONGO_MAX_POOL_SIZE, MONGO_*_TIMEOUT_MS, ...
      - MONGODB_USERNAME / MONGODB_PASSWORD (with MONGO_CLUSTER_HOST) build an
        Atlas SRV url and take precedence over MONGO_URL.
    """

    url: Optional[str] = Field(default=None)
    db: str = Field(default="fullstack-app")
    username: Optional[str] = Field(default=None, validation_alias="MONGODB_USERNAME")
    password: Optional[SecretStr] = Field(default=None, validation_alias="MONGODB_PASSWORD")
    cluster_host: str = Field(default="cluster0.tnwx56b.mongodb.net")
    app_name: str = Field(default="Cluster0")

    max_pool_size: int = Field(default=100)
    min_pool_size: int = Field(default=0)
    server_selection_timeout_ms: int = Field(default=5000)
    connect_timeout_ms: int = Field(default=20000)
    socket_timeout_ms: int = Field(default=20000)

    # Also match `_id` stored as a plain string on update/delete (old records)
    legacy_canonical_fallback: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="MONGO_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def resolved_url(self) -> str:
        if self.username and self.password:
            user = quote_plus(self.username)
            pwd = quote_plus(self.password.get_secret_value())
            return (
                f"mongodb+srv://{user}:{pwd}@{self.cluster_host}/"
                f"?retryWrites=true&w=majority&appName={self.app_name}"
            )
        return self.url or LOCAL_MONGO_URL

    def client_kwargs(self) -> dict[str, object]:
        return {
            "maxPoolSize": self.max_pool_size,
            "minPoolSize": self.min_pool_size,
            "serverSelectionTimeoutMS": self.server_selection_timeout_ms,
            "connectTimeoutMS": self.connect_timeout_ms,
            "socketTimeoutMS": self.socket_timeout_ms,
            "tz_aware": True,
        }


@lru_cache
def get_mongo_settings(**kwargs) -> MongoSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return MongoSettings(**filtered)
