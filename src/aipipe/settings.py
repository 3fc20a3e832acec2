from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from aipipe import __version__

# ---- fixed response identifiers ----
ENGINE_ID = "aipipe:v1"
SERVICE_VERSION = __version__


class Settings(BaseSettings):

    # ---- app/runtime ----
    env: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    service_name: str = "ai-pipe-service"

    # ---- API server configuration ----
    api_host: str = "0.0.0.0"
    # Hosting platforms inject a bare PORT
    api_port: int = Field(
        default=10000,
        validation_alias=AliasChoices("APP_API_PORT", "PORT"),
    )
    api_reload: bool = False  # Auto-reload on code changes (dev only)
    api_workers: int = 1
    cors_origins: List[str] = ["*"]  # Allowed CORS origins (restrict in prod)

    # ---- request handling ----
    max_body_bytes: int = 1024 * 1024  # 1 MiB JSON body limit

    # ---- credential gate ----
    # Unset or empty disables the bearer check on /run
    aipipe_token: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("APP_AIPIPE_TOKEN", "AIPIPE_TOKEN"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",      # APP_ENV, APP_LOG_LEVEL, etc.
        env_nested_delimiter="__",
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def auth_enabled(self) -> bool:
        return bool(self.aipipe_token and self.aipipe_token.get_secret_value())

    @property
    def engine(self) -> str:
        return ENGINE_ID

    @property
    def version(self) -> str:
        return SERVICE_VERSION


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton accessor to avoid reparsing .env on every request."""
    return Settings()
