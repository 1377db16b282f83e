"""
Core модуль: хранилище токенов, исключения и логирование.

Сессия и авторизация зависят от APIClient и импортируются
напрямую из core.session и core.auth.
"""

from .exceptions import (
    APIError,
    CredentialStoreError,
    AppException,
    FieldValidationError,
    MalformedResponseError,
    MediaUploadError,
    MissingTokenError,
    NetworkError,
    NotAuthenticatedError,
    UploadInProgressError,
)
from .logging_config import setup_logging
from .storage import CredentialStore, FileCredentialStore, InMemoryCredentialStore, get_credential_store

__all__ = [
    # Storage
    "CredentialStore",
    "FileCredentialStore",
    "InMemoryCredentialStore",
    "get_credential_store",
    # Logging
    "setup_logging",
    # Exceptions
    "AppException",
    "APIError",
    "CredentialStoreError",
    "NetworkError",
    "MalformedResponseError",
    "MediaUploadError",
    "FieldValidationError",
    "MissingTokenError",
    "NotAuthenticatedError",
    "UploadInProgressError",
]
