"""
Application configuration.
"""

from pathlib import Path
from typing import Any, Optional

from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """
    Application settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # Core Settings
    PROJECT_NAME: str = "Inventory Catalog"
    PROJECT_DESCRIPTION: str = "Server-rendered inventory of categories and items"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Web Settings
    CORS_ORIGINS_STR: str = "*"
    TEMPLATES_DIR: str = str(PACKAGE_DIR / "templates")

    # Database Settings
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "inventory"
    POSTGRES_PORT: str = "5432"
    DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)
    DB_CREATE_TABLES: bool = True

    @field_validator("DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> Any:
        if isinstance(v, str):
            return v

        data = info.data
        if not data:
            raise ValueError("Missing data for DATABASE_URI")

        return str(
            PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=data.get("POSTGRES_USER"),
                password=data.get("POSTGRES_PASSWORD"),
                host=data.get("POSTGRES_SERVER"),
                port=int(data.get("POSTGRES_PORT", 5432)),
                path=f"{data.get('POSTGRES_DB') or ''}",
            )
        )

    # Sentry Settings
    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    # Prometheus Metrics
    ENABLE_METRICS: bool = True

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True


settings = Settings()
