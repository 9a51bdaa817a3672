"""Centralised application settings loaded from environment / .env file."""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Persistence
    store_backend: Literal["sql", "redis"] = "sql"
    store_key: str = "carpool_vehicles"  # the single key-value slot
    database_url: str = "sqlite+aiosqlite:///./carpool.db"
    redis_url: str = "redis://localhost:6379/0"

    # Local API (single local actor)
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = {"env_file": ".env", "env_prefix": "CARPOOL_", "extra": "ignore"}


settings = Settings()
