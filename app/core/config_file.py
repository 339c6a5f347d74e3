"""Service settings read from the environment and ``.env`` files."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic import ConfigDict, computed_field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime configuration; every field can be overridden by an env var of the same name."""

    ENV: str = "dev"
    DEBUG: bool = True

    # Report document store. DATABASE_URL wins over the POSTGRES_* parts.
    DATABASE_URL: str | None = None
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "devuser"
    POSTGRES_PASSWORD: str = "devpass"
    POSTGRES_DB: str = "reports_dev"

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        user, password, host, db = (
            quote_plus(str(part), safe="")
            for part in (self.POSTGRES_USER, self.POSTGRES_PASSWORD, self.POSTGRES_HOST, self.POSTGRES_DB)
        )
        return f"postgresql+psycopg2://{user}:{password}@{host}:{self.POSTGRES_PORT}/{db}"

    # Redis: query execution registry and event streams
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_PASSWORD: str = ""
    REDIS_STREAM_DOMAIN: str = "events:domain"
    REDIS_STREAM_TECHNICAL: str = "events:technical"

    # Query builder
    QUERY_EXECUTION_TTL_SECONDS: int = 14400  # 4 hours
    QUERY_BUILDER_PREVIEW_LIMIT: int = 1
    QUERY_BUILDER_RESULTS_LIMIT: int = 1000
    DATALAKE_V3_ACTIVE: bool = False

    # Tenant feature flags
    DATALAKE_V2_ACTIVE: bool = False
    REPORT_DOWNLOAD_PERMISSION_LINK: bool = False

    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "human"  # "human" or "json"

    model_config = ConfigDict(
        env_file=[".env", "../.env"],
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
