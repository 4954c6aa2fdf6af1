"""
Application configuration.

Settings are read from environment variables (or a local .env file).
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment."""

    # Application
    app_name: str = "Price List Manager"
    app_version: str = "1.0.0"
    debug: bool = False
    ENVIRONMENT: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./pricelist.db"
    auto_create_tables: bool = True

    # JWT
    JWT_SECRET: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24

    # Logging
    LOG_LEVEL: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True

    # Public catalog
    SHOP_NAME: str = "مركز الحمدان للإتصالات - فرع شين"
    SHOP_PHONE: str = "0945 555 647"
    SHOP_LOCATION: str = "شين"
    SHOP_WORKING_HOURS: str = "من 9 صباحاً حتى 8 مساءً"
    PUBLIC_CACHE_MAX_AGE: int = 60
    PUBLIC_STALE_WHILE_REVALIDATE: int = 300

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def public_cache_control(self) -> str:
        return (
            f"s-maxage={self.PUBLIC_CACHE_MAX_AGE}, "
            f"stale-while-revalidate={self.PUBLIC_STALE_WHILE_REVALIDATE}"
        )


settings = Settings()
