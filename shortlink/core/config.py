"""Application configuration settings."""

from functools import lru_cache
from typing import Literal, Optional
from urllib.parse import quote_plus

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_pass: str = ""
    db_name: str = "postgres"
    # TODO: switch the default to "require" once the deployment database has certificates
    db_sslmode: str = "disable"
    database_url: Optional[str] = Field(
        None, description="Full SQLAlchemy URL, overrides the DB_* fields"
    )
    store_backend: Literal["sql", "memory"] = "sql"

    # Startup
    connect_retries: int = Field(3, ge=1)
    connect_retry_delay: float = Field(3.0, ge=0)

    # Application
    app_title: str = "URL Shortener Service"
    app_version: str = "0.1.0"
    app_description: str = "Shortens URLs and redirects short slugs to them"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # URL Shortener
    base_url: str = "http://localhost:8080/"
    slug_strategy: Literal["hash", "random"] = "hash"
    slug_length: int = Field(6, ge=1, le=32)
    idempotent: bool = True
    max_slug_attempts: int = Field(5, ge=1)

    @property
    def sqlalchemy_url(self) -> str:
        """Get the SQLAlchemy connection URL."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}?sslmode={self.db_sslmode}"
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
