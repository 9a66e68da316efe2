"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./coinshop.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # native: SELECT ... FOR UPDATE NOWAIT; registry: in-process row lock table
    lock_strategy: Literal["auto", "native", "registry"] = "auto"


class LedgerSettings(BaseModel):
    starting_balance: int = Field(default=1000, ge=0)
    # newest coin history entries reported per account; None reports all
    history_limit: Optional[int] = Field(default=None, ge=1)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Coin Shop"

    database: DatabaseSettings = DatabaseSettings()
    ledger: LedgerSettings = LedgerSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def starting_balance(self) -> int:
        return self.ledger.starting_balance


@lru_cache()
def get_settings() -> Settings:
    return Settings()
