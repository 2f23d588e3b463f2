from functools import lru_cache
from typing import Tuple

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Basic Info ---
    APP_NAME: str = "resource-loader"
    APP_VERSION: str = "0.1.0"

    # --- HTTP Client Configuration ---
    MAX_CONCURRENT_REQUESTS: int = 10
    HTTP_TIMEOUT_CONNECT: float = 10.0
    HTTP_TIMEOUT_READ: float = 30.0
    HTTP_TIMEOUT_WRITE: float = 10.0
    HTTP_TIMEOUT_POOL: float = 5.0
    FOLLOW_REDIRECTS: bool = True

    USER_AGENT: str = "resource-loader/0.1.0"
    ACCEPT: str = "application/json, text/plain;q=0.9, */*;q=0.8"

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    model_config = SettingsConfigDict(
        env_prefix="RESOURCE_LOADER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def timeout_pair(self) -> Tuple[float, float]:
        """(connect, read) в формате requests."""
        return (self.HTTP_TIMEOUT_CONNECT, self.HTTP_TIMEOUT_READ)


@lru_cache
def get_settings() -> Settings:
    return Settings()
