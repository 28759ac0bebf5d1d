"""Конфигурация приложения."""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Настройки приложения."""

    # Database
    DATABASE_URL: str = "postgresql://postgres:postgres@db:5432/houses_db"

    # JWT
    SECRET_KEY: str = "secret-key"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Uploads
    FILE_UPLOAD_PATH: str = "./public/uploads"
    MAX_FILE_UPLOAD: int = 1000000  # Максимальный размер фото в байтах

    # Pagination
    DEFAULT_PAGE_LIMIT: int = 25
    MAX_PAGE_LIMIT: int = 100

    # API
    API_V1_PREFIX: str = "/api/v1"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Получить настройки приложения (singleton)."""
    return Settings()
