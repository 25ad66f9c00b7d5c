from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    # Shared secret with the auth service
    api_key: Optional[str] = Field(default=None, description="Samman API key")
    api_url: Optional[str] = Field(default=None, description="Auth service base URL")
    remote_url: Optional[str] = Field(default=None, description="This client's URL as registered with the service")

    # Tokens
    request_ttl: int = Field(default=30, ge=0, description="Lifetime of outbound request tokens (seconds)")

    # Logging
    log_level: str = Field(default="INFO")

    # Reproducibility (self-check harness)
    global_seed: int = Field(default=1337)

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env from the working directory if present
    load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        api_key=os.getenv("SAMMAN_API_KEY"),
        api_url=os.getenv("SAMMAN_API_URL"),
        remote_url=os.getenv("SAMMAN_REMOTE_URL"),
        request_ttl=int(os.getenv("SAMMAN_REQUEST_TTL", "30")),
        log_level=os.getenv("SAMMAN_LOG_LEVEL", "INFO"),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
    )
