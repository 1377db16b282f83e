"""Проверка сохранённой сессии при старте приложения."""

import logging

from profile_client.api_client import APIClient
from profile_client.constants import ROUTE_LOGIN, ROUTE_TAB
from profile_client.core.exceptions import AppException
from profile_client.core.storage import CredentialStore
from profile_client.models import SessionStatus

logger = logging.getLogger(__name__)


class SessionValidator:
    """
    Проверяет, что сохранённый access токен ещё принимается backend.

    Любая ошибка (401, 5xx, сеть) считается отсутствием сессии:
    повторов и обновления токена нет.
    """

    def __init__(self, store: CredentialStore, api_client: APIClient) -> None:
        self.store = store
        self.api_client = api_client
        self.status = SessionStatus.CHECKING

    @property
    def checking(self) -> bool:
        return self.status == SessionStatus.CHECKING

    async def check(self) -> SessionStatus:
        """
        Проверить токен из хранилища.

        Returns:
            AUTHENTICATED или UNAUTHENTICATED
        """
        self.status = SessionStatus.CHECKING
        credential = await self.store.get()

        if credential is None:
            logger.info("[CHECK_TOKEN] No stored token, skipping backend check")
            self.status = SessionStatus.UNAUTHENTICATED
            return self.status

        try:
            await self.api_client.get_current_user(credential.access_token)
        except AppException as e:
            logger.warning(f"[CHECK_TOKEN] Stored token rejected or backend unreachable: {e.to_dict()}")
            self.status = SessionStatus.UNAUTHENTICATED
            return self.status

        logger.info("[CHECK_TOKEN] Stored token is valid")
        self.status = SessionStatus.AUTHENTICATED
        return self.status

    async def initial_route(self) -> str:
        """Маршрут, с которого начинается приложение"""
        status = await self.check()
        return ROUTE_TAB if status == SessionStatus.AUTHENTICATED else ROUTE_LOGIN
