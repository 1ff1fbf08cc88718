from __future__ import annotations

from functools import lru_cache
import json
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    REQUIRE_AUTH: bool = True
    API_BEARER_TOKENS: List[str] = Field(default_factory=list)
    CORS_ALLOWED_ORIGINS: List[str] = Field(default_factory=list)
    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG|INFO|WARNING|ERROR
    MAX_REQUEST_BYTES: int = 256_000
    RATE_LIMIT_PER_MIN: int = 120
    RATE_LIMIT_BURST: int = 60
    SERVICE_NAME: str = "feedbacker"
    SERVICE_ENV: str = "dev"
    VERSION: str = "0.1.0"
    # Upper bound on responses accepted by /suggestions/aggregate in one call
    MAX_RESPONSES_PER_REQUEST: int = 2000

    @field_validator("API_BEARER_TOKENS", "CORS_ALLOWED_ORIGINS", mode="before")
    @classmethod
    def split_commas(cls, v: object) -> List[str]:
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                try:
                    parsed = json.loads(s)
                except (json.JSONDecodeError, TypeError, ValueError):
                    parsed = None
                if isinstance(parsed, list):
                    return [str(x).strip() for x in parsed]
            return [item.strip() for item in s.split(",") if item.strip()]
        if isinstance(v, list):
            return v
        return []


def get_settings() -> Settings:
    settings = _get_settings()
    settings.RATE_LIMIT_PER_MIN = max(1, int(settings.RATE_LIMIT_PER_MIN))
    settings.RATE_LIMIT_BURST = max(1, int(settings.RATE_LIMIT_BURST))
    settings.MAX_RESPONSES_PER_REQUEST = max(1, int(settings.MAX_RESPONSES_PER_REQUEST))
    return settings


@lru_cache
def _get_settings() -> Settings:
    return Settings()
