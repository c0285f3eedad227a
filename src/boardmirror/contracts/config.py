"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

DEFAULT_BASE_URL = "https://api.trello.com/1"


class MirrorConfig(BaseModel):
    store_path: Path = Path("boards.json")
    auth: str = "env"
    api_key: str | None = None
    api_token: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=0, le=10)
    max_concurrent: int = Field(default=1, ge=1, le=10)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_auth_credentials(self) -> MirrorConfig:
        key = (self.api_key or "").strip()
        token = (self.api_token or "").strip()
        if self.auth == "token":
            if not key or not token:
                raise ValueError("token auth requires a non-empty api_key and api_token")
            return self
        if self.auth != "env":
            raise ValueError("auth must be one of: env, token")
        if key or token:
            raise ValueError("api_key/api_token must be unset when auth is 'env'")
        return self
