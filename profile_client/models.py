"""
Модели данных клиента
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Credential(BaseModel):
    """Пара токенов, выданная backend. Заменяется только целиком."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., min_length=1)
    refresh_token: str = Field(..., min_length=1)


class UserProfile(BaseModel):
    """Профиль текущего пользователя из GET /api/users/me/"""

    model_config = ConfigDict(extra="ignore")

    username: str = ""
    first_name: str = ""
    last_name: str = ""
    profile_image: Optional[str] = None

    @field_validator("username", "first_name", "last_name", mode="before")
    @classmethod
    def none_as_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    @field_validator("profile_image", mode="before")
    @classmethod
    def blank_image_as_none(cls, v: Optional[str]) -> Optional[str]:
        """Пустая строка в profile_image означает отсутствие фото"""
        return v or None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class UploadResult(BaseModel):
    """Ответ media host: постоянный URL загруженного файла"""

    remote_url: str


class AuthResult(BaseModel):
    """Результат успешного входа или регистрации"""

    access_token: str
    credential: Optional[Credential] = None

    @property
    def session_stored(self) -> bool:
        return self.credential is not None


class PickedImage(BaseModel):
    """Фото, выбранное пользователем в локальном picker"""

    uri: str
    file_name: str
    mime_type: str
    data: bytes = Field(repr=False)


class PickerResult(BaseModel):
    """
    Результат работы picker: отмена, ошибка или выбранное фото.

    Создаётся через cancelled(), failed() или selected().
    """

    did_cancel: bool = False
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    asset: Optional[PickedImage] = None

    @classmethod
    def cancelled(cls) -> "PickerResult":
        return cls(did_cancel=True)

    @classmethod
    def failed(cls, error_code: str, error_message: str = "") -> "PickerResult":
        return cls(error_code=error_code, error_message=error_message)

    @classmethod
    def selected(cls, asset: PickedImage) -> "PickerResult":
        return cls(asset=asset)


class SessionStatus(str, Enum):
    """Статус проверки сессии при старте"""

    CHECKING = "checking"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class UploadPhase(str, Enum):
    """Фаза загрузки фото профиля"""

    IDLE = "idle"
    PICKING = "picking"
    UPLOADING = "uploading"
    PERSISTING = "persisting"
    SETTLED = "settled"


class UploadFailure(str, Enum):
    """Причина неуспешного завершения загрузки"""

    UPLOAD = "upload"
    PERSIST = "persist"
    UNAUTHENTICATED = "unauthenticated"


class UploadState(BaseModel):
    """Состояние загрузки фото профиля"""

    model_config = ConfigDict(frozen=True)

    phase: UploadPhase = UploadPhase.IDLE
    display_image: Optional[str] = None
    remote_url: Optional[str] = None
    failure: Optional[UploadFailure] = None
    message: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self.phase in (UploadPhase.PICKING, UploadPhase.UPLOADING, UploadPhase.PERSISTING)

    @property
    def succeeded(self) -> bool:
        return self.phase == UploadPhase.SETTLED and self.failure is None

    @property
    def failed(self) -> bool:
        return self.phase == UploadPhase.SETTLED and self.failure is not None
