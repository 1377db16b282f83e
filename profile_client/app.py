"""Сборка компонентов клиента и стартовая маршрутизация."""

import logging
from dataclasses import dataclass
from typing import Optional

from profile_client.api_client import APIClient
from profile_client.config import Settings, get_settings
from profile_client.core.auth import AuthGateway
from profile_client.core.logging_config import setup_logging
from profile_client.core.session import SessionValidator
from profile_client.core.storage import CredentialStore, get_credential_store
from profile_client.media_client import MediaHostClient
from profile_client.profile import AvatarPresenter, ProfileFetcher, ProfileScreen
from profile_client.screens import LoginScreen, SignupScreen
from profile_client.ui import ImagePicker, Surface
from profile_client.upload import UploadPipeline

logger = logging.getLogger(__name__)


@dataclass
class ClientApp:
    """Все компоненты клиента, собранные вокруг одного хранилища токенов"""

    settings: Settings
    surface: Surface
    store: CredentialStore
    api_client: APIClient
    media_client: MediaHostClient
    validator: SessionValidator
    gateway: AuthGateway
    fetcher: ProfileFetcher
    pipeline: UploadPipeline

    @classmethod
    def create(
        cls,
        surface: Surface,
        picker: ImagePicker,
        settings: Optional[Settings] = None,
        store: Optional[CredentialStore] = None,
        configure_logging: bool = False,
    ) -> "ClientApp":
        """
        Создаёт клиент по настройкам.

        Args:
            surface: Экран для сообщений и переходов
            picker: Локальный выбор фото
            settings: Настройки (по умолчанию get_settings())
            store: Хранилище токенов (по умолчанию по credentials_path)
            configure_logging: Вызвать setup_logging по настройкам
        """
        settings = settings or get_settings()
        if configure_logging:
            setup_logging(level=settings.log_level, json_logs=settings.json_logs)

        if store is None:
            store = get_credential_store(settings)

        api_client = APIClient(base_url=settings.api_url, timeout=settings.api_timeout)
        media_client = MediaHostClient(
            upload_url=settings.media_host_url,
            upload_preset=settings.media_upload_preset,
            timeout=settings.api_timeout,
        )
        logger.info(f"Client configured for {api_client.base_url}")
        return cls(
            settings=settings,
            surface=surface,
            store=store,
            api_client=api_client,
            media_client=media_client,
            validator=SessionValidator(store, api_client),
            gateway=AuthGateway(api_client, store),
            fetcher=ProfileFetcher(store, api_client),
            pipeline=UploadPipeline(picker, media_client, api_client, store),
        )

    async def start(self) -> str:
        """Проверка сессии и переход на стартовый экран"""
        route = await self.validator.initial_route()
        self.surface.navigate(route)
        return route

    def login_screen(self) -> LoginScreen:
        return LoginScreen(self.gateway, self.validator, self.surface)

    def signup_screen(self) -> SignupScreen:
        return SignupScreen(self.gateway, self.surface)

    def profile_screen(self) -> ProfileScreen:
        return ProfileScreen(self.fetcher, self.pipeline, self.gateway, self.surface)

    def avatar(self) -> AvatarPresenter:
        return AvatarPresenter(self.fetcher)
