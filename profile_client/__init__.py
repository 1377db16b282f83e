"""Клиент сессии и фото профиля."""

from .api_client import APIClient
from .app import ClientApp
from .config import Settings, get_settings
from .media_client import MediaHostClient
from .models import (
    AuthResult,
    Credential,
    PickedImage,
    PickerResult,
    SessionStatus,
    UploadFailure,
    UploadPhase,
    UploadResult,
    UploadState,
    UserProfile,
)
from .core.auth import AuthGateway
from .core.session import SessionValidator
from .profile import AvatarPresenter, ProfileFetcher, ProfileScreen
from .screens import LoginScreen, SignupScreen
from .ui import ImagePicker, LocalFileImagePicker, Surface
from .upload import UploadPipeline

__all__ = [
    "APIClient",
    "AuthGateway",
    "AuthResult",
    "AvatarPresenter",
    "ClientApp",
    "Credential",
    "ImagePicker",
    "LocalFileImagePicker",
    "LoginScreen",
    "MediaHostClient",
    "PickedImage",
    "PickerResult",
    "ProfileFetcher",
    "ProfileScreen",
    "SessionStatus",
    "SessionValidator",
    "Settings",
    "SignupScreen",
    "Surface",
    "UploadFailure",
    "UploadPhase",
    "UploadPipeline",
    "UploadResult",
    "UploadState",
    "UserProfile",
    "get_settings",
]
