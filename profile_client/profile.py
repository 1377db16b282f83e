"""
Профиль пользователя: аватар, экран профиля и выход
"""

import logging
from typing import Optional

from profile_client.api_client import APIClient
from profile_client.constants import (
    ALERT_TITLE_ERROR,
    DEFAULT_PROFILE_IMAGE,
    MSG_LOGOUT_FAILED,
    MSG_NOT_AUTHENTICATED,
    MSG_PROFILE_LOAD_FAILED,
    MSG_UPLOAD_FAILED,
    ROUTE_LOGIN,
)
from profile_client.core.exceptions import AppException, NotAuthenticatedError
from profile_client.core.auth import AuthGateway
from profile_client.core.storage import CredentialStore
from profile_client.models import UploadFailure, UploadState, UserProfile
from profile_client.ui import Surface
from profile_client.upload import UploadPipeline

logger = logging.getLogger(__name__)


class ProfileFetcher:
    """Единая загрузка профиля текущего пользователя"""

    def __init__(self, store: CredentialStore, api_client: APIClient) -> None:
        self.store = store
        self.api_client = api_client

    async def fetch(self) -> UserProfile:
        """
        Raises:
            NotAuthenticatedError: В хранилище нет токена
            APIError: Ошибка backend или сети
        """
        token = await self.store.get_access_token()
        if not token:
            raise NotAuthenticatedError(MSG_NOT_AUTHENTICATED)
        return await self.api_client.get_current_user(token)


class AvatarPresenter:
    """
    Компактный аватар.

    Никаких сообщений и переходов: при любой проблеме
    показывается изображение по умолчанию.
    """

    def __init__(self, fetcher: ProfileFetcher, default_image: str = DEFAULT_PROFILE_IMAGE) -> None:
        self.fetcher = fetcher
        self.default_image = default_image
        self.image = default_image
        self.loading = True

    async def load(self) -> str:
        self.loading = True
        try:
            profile = await self.fetcher.fetch()
            self.image = profile.profile_image or self.default_image
        except NotAuthenticatedError:
            self.image = self.default_image
        except AppException as e:
            logger.error(f"Error fetching profile image: {e.to_dict()}")
            self.image = self.default_image
        finally:
            self.loading = False
        return self.image


class ProfileScreen:
    """
    Полный экран профиля.

    Ошибки показываются пользователю, без токена выполняется
    переход на экран входа. После unmount() результаты незавершённых
    операций отбрасываются: без обновления экрана, сообщений и переходов.
    """

    def __init__(
        self,
        fetcher: ProfileFetcher,
        pipeline: UploadPipeline,
        gateway: AuthGateway,
        surface: Surface,
        default_image: str = DEFAULT_PROFILE_IMAGE,
    ) -> None:
        self.fetcher = fetcher
        self.pipeline = pipeline
        self.gateway = gateway
        self.surface = surface
        self.profile_image = default_image
        self.first_name = ""
        self.last_name = ""
        self.username = ""
        self.loading = False
        self.mounted = False

    def _alert(self, message: str) -> None:
        if self.mounted:
            self.surface.alert(ALERT_TITLE_ERROR, message)

    def _navigate(self, route: str) -> None:
        if self.mounted:
            self.surface.navigate(route)

    def _display(self, uri: str) -> None:
        if self.mounted:
            self.profile_image = uri

    async def mount(self) -> Optional[UserProfile]:
        """Показ экрана: загрузка имени, username и фото"""
        self.mounted = True
        try:
            profile = await self.fetcher.fetch()
        except NotAuthenticatedError:
            self._alert(MSG_NOT_AUTHENTICATED)
            self._navigate(ROUTE_LOGIN)
            return None
        except AppException as e:
            logger.error(f"Error fetching profile data: {e.to_dict()}")
            self._alert(MSG_PROFILE_LOAD_FAILED)
            return None

        if self.mounted:
            self.first_name = profile.first_name
            self.last_name = profile.last_name
            self.username = profile.username
            if profile.profile_image:
                self.profile_image = profile.profile_image
        return profile

    def unmount(self) -> None:
        self.mounted = False

    async def choose_photo(self) -> UploadState:
        """Выбор и загрузка нового фото профиля"""
        if self.pipeline.state.busy:
            logger.warning("Photo upload already in progress, ignoring")
            return self.pipeline.state

        self.loading = True
        try:
            state = await self.pipeline.run(on_display=self._display)
        finally:
            self.loading = False

        if state.failure == UploadFailure.UNAUTHENTICATED:
            self._alert(state.message or MSG_NOT_AUTHENTICATED)
            self._navigate(ROUTE_LOGIN)
        elif state.failed:
            self._alert(state.message or MSG_UPLOAD_FAILED)
        return state

    async def logout(self) -> None:
        """Удаляет оба токена и переходит на экран входа, без запроса к backend"""
        try:
            await self.gateway.logout()
        except AppException as e:
            logger.error(f"Error during logout: {e.to_dict()}")
            self._alert(MSG_LOGOUT_FAILED)
            return
        self.surface.navigate(ROUTE_LOGIN)
