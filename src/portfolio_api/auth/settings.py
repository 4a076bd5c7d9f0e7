from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """
    Identity provider settings.

      - FIREBASE_CREDENTIALS: service-account JSON (production)
      - FIREBASE_CREDENTIALS_FILE: path to the same JSON (development)
    """

    credentials: Optional[SecretStr] = Field(default=None)
    credentials_file: Path = Field(default=Path("credentials.json"))

    model_config = SettingsConfigDict(
        env_prefix="FIREBASE_",
        env_file=".env",
        extra="ignore",
    )

    def load_credentials(self) -> dict[str, Any]:
        if self.credentials is not None:
            return json.loads(self.credentials.get_secret_value())
        return json.loads(self.credentials_file.read_text(encoding="utf-8"))


@lru_cache
def get_auth_settings(**kwargs) -> AuthSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return AuthSettings(**filtered)
