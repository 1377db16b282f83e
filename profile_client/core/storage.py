"""
Хранилище пары токенов (access/refresh)
"""

import asyncio
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from profile_client.config import Settings, get_settings
from profile_client.constants import STORAGE_ACCESS_TOKEN_KEY, STORAGE_REFRESH_TOKEN_KEY
from profile_client.core.exceptions import CredentialStoreError
from profile_client.models import Credential

logger = logging.getLogger(__name__)


def _credential_from_entries(entries: Dict[str, str]) -> Optional[Credential]:
    """Пара считается сохранённой, только если есть оба токена"""
    access_token = entries.get(STORAGE_ACCESS_TOKEN_KEY)
    refresh_token = entries.get(STORAGE_REFRESH_TOKEN_KEY)
    if not access_token or not refresh_token:
        return None
    return Credential(access_token=access_token, refresh_token=refresh_token)


def _entries_from_credential(credential: Credential) -> Dict[str, str]:
    return {
        STORAGE_ACCESS_TOKEN_KEY: credential.access_token,
        STORAGE_REFRESH_TOKEN_KEY: credential.refresh_token,
    }


class CredentialStore(ABC):
    """
    Асинхронное key-value хранилище токенов.

    Отсутствие токенов не ошибка: get() возвращает None.
    """

    @abstractmethod
    async def put(self, credential: Credential) -> None:
        """Сохраняет пару токенов целиком"""

    @abstractmethod
    async def get(self) -> Optional[Credential]:
        """Возвращает пару токенов или None"""

    @abstractmethod
    async def clear(self) -> None:
        """Удаляет оба токена одной операцией"""

    async def get_access_token(self) -> Optional[str]:
        credential = await self.get()
        return credential.access_token if credential else None


class InMemoryCredentialStore(CredentialStore):
    """Хранилище в памяти процесса"""

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    async def put(self, credential: Credential) -> None:
        self._entries = _entries_from_credential(credential)
        logger.info("Credentials saved to memory store")

    async def get(self) -> Optional[Credential]:
        return _credential_from_entries(self._entries)

    async def clear(self) -> None:
        self._entries = {}
        logger.info("Credentials removed from memory store")


class FileCredentialStore(CredentialStore):
    """
    Хранилище в JSON файле.

    Запись идёт во временный файл и заменяет основной через os.replace,
    поэтому читатель видит либо старую пару, либо новую, но не половину.
    """

    def __init__(self, path: str | Path) -> None:
        """
        Args:
            path: Путь к JSON файлу с токенами
        """
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.error(f"Failed to read credentials file {self.path}: {e}")
            return {}

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Credentials file {self.path} is corrupted, treating as empty: {e}")
            return {}

        if not isinstance(data, dict):
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def _write(self, entries: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                json.dump(entries, tmp_file)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    async def _save(self, entries: Dict[str, str]) -> None:
        try:
            await asyncio.to_thread(self._write, entries)
        except OSError as e:
            logger.error(f"Failed to write credentials file {self.path}: {e}")
            raise CredentialStoreError(
                "Failed to save credentials",
                details={"path": str(self.path), "error": str(e)},
            ) from e

    async def put(self, credential: Credential) -> None:
        await self._save(_entries_from_credential(credential))
        logger.info(f"Credentials saved to {self.path}")

    async def get(self) -> Optional[Credential]:
        entries = await asyncio.to_thread(self._read)
        return _credential_from_entries(entries)

    async def clear(self) -> None:
        await self._save({})
        logger.info(f"Credentials removed from {self.path}")


def get_credential_store(settings: Optional[Settings] = None) -> CredentialStore:
    """
    Создаёт хранилище токенов по настройкам.

    Args:
        settings: Настройки (по умолчанию get_settings())

    Returns:
        FileCredentialStore если задан credentials_path, иначе хранилище в памяти
    """
    settings = settings or get_settings()
    if settings.credentials_path:
        return FileCredentialStore(settings.credentials_path)
    logger.info("credentials_path is not set, using in-memory credential store")
    return InMemoryCredentialStore()
