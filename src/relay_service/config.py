from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    STORAGE_BACKEND: Literal["memory", "postgres"] = "memory"

    POSTGRES_USER: str = "relay"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "relay"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432

    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 300

    CORS_ORIGINS: list[str] = ["*"]

    BROADCAST_TARGET: str = "Todos"

    PRESENCE_SWEEP_INTERVAL: float = 15.0
    PRESENCE_TIMEOUT: float = 10.0

    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.POSTGRES_DB}"
        )

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
