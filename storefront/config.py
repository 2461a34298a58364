from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """
    Settings shared by both services.

    A settings object is built once at startup and handed to the app
    factory, which passes it down to the engine, repositories and services.
    """
    DATABASE_URL: str = "sqlite:///./storefront.db"
    BASE_PATH: str = ""
    SERVICE_NAME: str = "storefront"
    VERSION: str = "NO_VERSION"
    BUILD_DATE: str = "NO_BUILD_DATE"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class CatalogSettings(ServiceSettings):
    """Settings for the product catalog service (``CATALOG_`` env prefix)."""
    DATABASE_URL: str = "sqlite:///./catalog.db"
    SERVICE_NAME: str = "api-product-catalog"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CATALOG_",
        extra="ignore",
    )


class AuthSettings(ServiceSettings):
    """Settings for the auth service (``AUTH_`` env prefix)."""
    DATABASE_URL: str = "sqlite:///./auth.db"
    SERVICE_NAME: str = "api-auth"
    SECRET_KEY: str = "change-this-secret"
    TOKEN_ISSUER: str = "test_app"
    # bcrypt cost factor
    PASSWORD_HASH_ROUNDS: int = 12

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        extra="ignore",
    )
