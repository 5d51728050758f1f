"""Client configuration via environment variables."""
from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_BASE_URL = "http://127.0.0.1:8080/api"


def _default_token_path() -> Path:
    return Path.home() / ".league_client" / "token"


class ClientSettings(BaseSettings):
    model_config = {"env_prefix": "LEAGUE_"}

    base_url: str = DEFAULT_BASE_URL
    token_path: Path = Field(default_factory=_default_token_path)
    log_level: str = "INFO"

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
