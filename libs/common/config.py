from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings."""

    # Application
    ENVIRONMENT: Literal["local", "development", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    # Catalog database (async engine)
    CATALOG_DATABASE_URL: str = "sqlite+aiosqlite:///catalog.sqlite3"
    DB_ECHO: bool = False

    # Session flag storage, kept apart from the catalog database
    SESSION_STORE_URL: str = "sqlite:///catalog_session.sqlite3"

    # Owner account seeded when the users table is first created
    OWNER_USERNAME: str = "VKM2009"
    OWNER_PASSWORD: str = "VKM1998"

    # Default business info seeded on init when none is stored
    BUSINESS_NAME: str = "VKM Associates"
    BUSINESS_OWNER: str = "Manorma Sharma"
    BUSINESS_ADDRESS: str = "Siwala Adalhat, Mirzapur, Uttar Pradesh"
    BUSINESS_LAT: float = 25.083
    BUSINESS_LNG: float = 82.777

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("CATALOG_DATABASE_URL")
    @classmethod
    def assemble_db_connection(cls, v: str) -> str:
        if v.startswith("sqlite:///"):
            return v.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Return the global settings instance, cached.
    """
    return Settings()
