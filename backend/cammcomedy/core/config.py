"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Cammcomedy"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8101

    # Storage
    DATA_DIR: str = "data"
    STORE_BACKEND: str = "sql"  # sql, json
    DATABASE_URL: str = "sqlite+aiosqlite:///data/app.db"
    DATABASE_URL_SYNC: str = "sqlite:///data/app.db"
    JSON_DOCUMENT_PATH: str = "data/app.json"

    # Redis (roster cache)
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_CACHE_TTL: int = 300  # 5 minutes default TTL
    REDIS_ENABLED: bool = False

    # Rendering
    LINEUP_SLOT_CAPACITY: int = 6
    STATIC_DIR: str = str(PACKAGE_DIR / "static")
    TEMPLATES_DIR: str = str(PACKAGE_DIR / "templates")

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
