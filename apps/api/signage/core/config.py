"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    jwt_secret: str = Field(min_length=1)
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = Field(default=24, ge=1)

    model_config = SettingsConfigDict(env_prefix="SIGNAGE_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
