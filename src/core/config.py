"""Application settings, read from environment variables (prefix LUDO_) or a .env file."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LUDO_", env_file=".env", extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./ludo.db", description="SQLAlchemy database URL"
    )
    echo_sql: bool = Field(default=False, description="Log every SQL statement")
    lock_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Maximum wait for exclusive access to a game before giving up",
    )
    dice_seed: Optional[int] = Field(
        default=None, description="Seed for the dice generator (reproducible sessions)"
    )
    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING or ERROR")


@lru_cache
def get_settings() -> Settings:
    return Settings()
