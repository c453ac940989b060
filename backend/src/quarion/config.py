from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database: unset means the in-memory transaction store is used
    database_url: str | None = None

    # App
    environment: str = "development"
    debug: bool = False
    app_name: str = "Quarion"
    app_version: str = "0.1.0"

    # Storage
    storage_path: Path = Path("./storage")

    # CORS: use JSON array in .env: CORS_ORIGINS=["http://localhost:3000"]
    cors_origins: list[str] = ["http://localhost:3000"]

    # OCR
    ocr_languages: list[str] = ["th", "en"]
    ocr_gpu: bool = False
    max_upload_bytes: int = 10 * 1024 * 1024

    # Quick slip (mobile shortcut) bearer token; endpoint disabled when unset
    quick_slip_token: str | None = None

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def uses_database(self) -> bool:
        return bool(self.database_url)


@lru_cache
def get_settings() -> Settings:
    return Settings()
