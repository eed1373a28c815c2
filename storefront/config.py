from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def _project_root() -> Path:
    # storefront/config.py -> storefront -> <project root>
    return Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    APP_TITLE: str = "iPhone Resale Store"

    # Catalog persistence (one durable slot per key)
    DATA_DIR: Path = _project_root() / "data"
    STORAGE_KEY: str = "iphone-store-products"

    # Image uploads
    UPLOAD_DIR: Path = _project_root() / "public" / "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024  # 10 MB

    # Logging
    LOG_DIR: Path = Path("logs")

    # Demo admin credentials (not a real auth system)
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "password123"
    ADMIN_COOKIE: str = "isAdminLoggedIn"


@lru_cache
def get_settings() -> Settings:
    return Settings()
