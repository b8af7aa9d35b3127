import json
import os
from functools import lru_cache
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv(dotenv_path=".env.local", override=True)


class Settings(BaseSettings):
    """
    Application-wide configuration settings.
    Loaded from environment variables or the .env.local file.
    """

    # === General ===
    APP_NAME: str = "Roleboard API"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["development", "testing", "production"] = "development"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "info"
    DEBUG: bool = False
    DESCRIPTION: str = (
        "Admin panel API for managing user roles, per-page role access and blog posts."
    )

    # === Database ===
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_SCHEME: str = "postgresql"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "roleboard"
    # Full SQLAlchemy URL; wins over the POSTGRES_* parts when set
    DATABASE_URI: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        """Builds the SQLAlchemy-compatible database URL."""
        if self.DATABASE_URI:
            return self.DATABASE_URI
        return (
            f"{self.POSTGRES_SCHEME}+{self.POSTGRES_DRIVER}://{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # === CORS ===
    ALLOWED_ORIGINS: str = "http://localhost,http://localhost:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        try:
            parsed = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(parsed, list):
                return parsed
        except json.JSONDecodeError:
            pass
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    # === JWT ===
    JWT_ALGORITHM: str = "HS256"
    JWT_SECRET_KEY: str = os.getenv(
        "JWT_SECRET_KEY", "roleboard-development-secret-key-change-me"
    )
    JWT_ACCESS_TOKEN_EXPIRE_SECONDS: int = 3600
    JWT_ISSUER: str = "roleboard-auth"
    JWT_AUDIENCE: str = "roleboard-api"

    # === Meta Configuration for Pydantic ===
    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="allow",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings: Settings = get_settings()
