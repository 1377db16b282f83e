"""
Централизованная конфигурация клиента
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from profile_client.constants import DEFAULT_API_TIMEOUT


class Settings(BaseSettings):
    """Настройки клиента с валидацией через Pydantic"""

    # Backend API
    api_url: str = "http://localhost:8000"
    api_timeout: int = DEFAULT_API_TIMEOUT

    # Media host (unsigned upload)
    media_host_url: str = "https://api.cloudinary.com/v1_1/demo/image/upload"
    media_upload_preset: str = "profile_pictures"

    # Хранилище токенов: без пути используется хранилище в памяти
    credentials_path: Optional[str] = None

    # Логирование
    log_level: str = "INFO"
    json_logs: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    """Возвращает синглтон настроек"""
    return Settings()
