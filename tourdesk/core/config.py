"""Application configuration via pydantic settings."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from typing import Annotated, Any

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = Field("Tour Desk API", alias="APP_NAME")
    api_v1_prefix: str = "/api/v1"
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    database_url: str = Field(
        "sqlite+aiosqlite:///./tourdesk.db", alias="DATABASE_URL"
    )
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")

    redis_url: str | None = Field(default=None, alias="REDIS_URL")
    run_lock_ttl_seconds: int = Field(30, alias="RUN_LOCK_TTL_SECONDS")
    run_lock_timeout_seconds: float = Field(5.0, alias="RUN_LOCK_TIMEOUT_SECONDS")

    default_seat_capacity: int = Field(6, ge=1, alias="DEFAULT_SEAT_CAPACITY")
    default_private_price: Decimal = Field(
        Decimal("350"), ge=0, alias="DEFAULT_PRIVATE_PRICE"
    )
    default_shared_price_per_person: Decimal = Field(
        Decimal("60"), ge=0, alias="DEFAULT_SHARED_PRICE_PER_PERSON"
    )
    currency: str = Field("EUR", alias="CURRENCY")

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:3000",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
