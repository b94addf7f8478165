"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./lumastack.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = 10
    max_overflow: Optional[int] = 0
    pool_timeout: float = Field(default=30.0, gt=0)
    pool_recycle: int = 600
    create_tables: bool = True


class SecuritySettings(BaseModel):
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


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
    project_name: str = "LumaStack API"
    description: str = "Platform for monitoring and managing Git repositories with Telegram integration"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def bcrypt_rounds(self) -> int:
        return self.security.bcrypt_rounds


@lru_cache()
def get_settings() -> Settings:
    return Settings()
