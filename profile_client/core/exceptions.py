"""
Исключения клиента
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """Базовое исключение клиента с кодом ошибки и деталями"""

    status_code: Optional[int] = None
    error_code: str = "CLIENT_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.details = details or {}
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация исключения в словарь (для логов и отладки)"""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


# Validation exceptions
class FieldValidationError(AppException):
    """Локальная ошибка валидации полей формы, запрос не отправлялся"""

    error_code = "VALIDATION_ERROR"

    def __init__(self, field_errors: Dict[str, str]):
        self.field_errors = dict(field_errors)
        super().__init__(
            message=f"Invalid fields: {', '.join(sorted(self.field_errors))}",
            details={"fields": self.field_errors},
        )


# HTTP exceptions
class APIError(AppException):
    """Ошибка ответа backend или media host"""

    error_code = "API_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details, status_code=status_code)
        self.server_message = server_message

    def user_message(self, fallback: str) -> str:
        """Сообщение для пользователя: текст backend или общий fallback"""
        return self.server_message or fallback


class NetworkError(APIError):
    """Сервер недоступен (таймаут, обрыв соединения)"""

    error_code = "NETWORK_ERROR"


class MalformedResponseError(APIError):
    """Тело ответа не является ожидаемым JSON"""

    error_code = "MALFORMED_RESPONSE"


class MediaUploadError(APIError):
    """Ошибка загрузки файла на media host"""

    error_code = "MEDIA_UPLOAD_ERROR"


# Auth exceptions
class MissingTokenError(AppException):
    """Успешный ответ без обязательных токенов"""

    error_code = "TOKEN_MISSING"


class NotAuthenticatedError(AppException):
    """В хранилище нет сохранённых токенов"""

    status_code = 401
    error_code = "NOT_AUTHENTICATED"


# Upload pipeline
class UploadInProgressError(AppException):
    """Загрузка фото уже выполняется"""

    error_code = "UPLOAD_IN_PROGRESS"


# Credential store
class CredentialStoreError(AppException):
    """Не удалось записать токены в хранилище"""

    error_code = "CREDENTIAL_STORE_ERROR"
