"""Application configuration from environment variables."""

from functools import lru_cache
from pathlib import Path
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Gym Tracker API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database: PostgreSQL when a host is set, local SQLite file otherwise
    database_host: str = ""
    database_port: int = 5432
    database_user: str = "postgres"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "gym_tracker"
    database_ssl_mode: str = "prefer"
    sqlite_path: str = "./gym_tracker.db"

    # Pool (ignored for SQLite)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    # Reference data
    catalog_path: Path = DATA_DIR / "machines.json"
    default_plans_path: Path = DATA_DIR / "default_plans.json"
    seed_default_plans: bool = True

    # Fallbacks when the user has not stored a preference
    default_weight_unit: str = "kg"
    default_rest_period: int = 60
    e1rm_formula: str = "brzycki"

    @property
    def uses_sqlite(self) -> bool:
        return not self.database_host

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=require") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        if self.uses_sqlite:
            return f"sqlite:///{self.sqlite_path}"
        return self._build_db_url(scheme="postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (aiosqlite locally, asyncpg against PostgreSQL)."""
        if self.uses_sqlite:
            return f"sqlite+aiosqlite:///{self.sqlite_path}"
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={self.database_ssl_mode}")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
