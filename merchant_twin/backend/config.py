"""
backend/config.py

Engine, scanner, anomaly and API settings. Every field reads from an
environment variable of the same name (any case) or from .env, e.g.:
    API_PORT=8080
    STRICT_RULE_KEYS=true
    FLEET_SCAN_WORKERS=4
"""

from __future__ import annotations

import json
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Evaluator
    STRICT_RULE_KEYS: bool = False   # unknown rule key -> UNKNOWN_RULE failure instead of no-op
    SLOW_RULE_WARNING_MS: float = 50.0

    # Fleet scanner
    FLEET_SCAN_WORKERS: int = 1      # <= 1 scans serially
    FAILURE_TABLE_SIZE: int = 5

    # Anomaly detector
    ANOMALY_WINDOW_SIZE: int = 10
    ANOMALY_Z_THRESHOLD: float = 1.5
    ANOMALY_CRITICAL_Z: float = 2.5

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_origins(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                try:
                    return json.loads(v)
                except ValueError:
                    pass
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("ANOMALY_WINDOW_SIZE")
    @classmethod
    def window_size_positive(cls, v: int) -> int:
        if v < 2:
            raise ValueError("ANOMALY_WINDOW_SIZE must be at least 2")
        return v


settings = Settings()
