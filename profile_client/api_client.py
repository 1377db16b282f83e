"""Централизованный API клиент для взаимодействия с backend."""

import asyncio
import logging
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from profile_client.config import get_settings
from profile_client.constants import (
    ENDPOINT_PROFILE_PICTURE,
    ENDPOINT_USERS_LOGIN,
    ENDPOINT_USERS_ME,
    ENDPOINT_USERS_SIGNUP,
    MSG_REQUEST_FAILED,
)
from profile_client.core.exceptions import APIError, MalformedResponseError, NetworkError
from profile_client.models import UserProfile

logger = logging.getLogger(__name__)


def extract_server_message(response: requests.Response) -> Optional[str]:
    """Текст ошибки из тела ответа backend, если он есть"""
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    for key in ("error", "detail"):
        message = data.get(key)
        if isinstance(message, str) and message:
            return message
    return None


class APIClient:
    """
    Клиент для взаимодействия с backend пользователей.

    Блокирующие вызовы requests выполняются в asyncio.to_thread,
    поэтому все публичные методы асинхронные.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Инициализация API клиента.

        Args:
            base_url: Базовый URL API (по умолчанию из конфигурации)
            timeout: Таймаут запросов в секундах
            session: HTTP сессия (по умолчанию новая requests.Session)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout or settings.api_timeout
        self.session = session or requests.Session()

    def _get_headers(self, token: Optional[str] = None) -> Dict[str, str]:
        """Получить заголовки для запроса"""
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _handle_response(self, response: requests.Response) -> Dict[str, Any]:
        """
        Обработка ответа от сервера.

        Args:
            response: Ответ от сервера

        Returns:
            JSON данные (пустой словарь для ответа без тела)

        Raises:
            APIError: Статус ответа не 2xx
            MalformedResponseError: Тело успешного ответа не JSON объект
        """
        if not 200 <= response.status_code < 300:
            server_message = extract_server_message(response)
            logger.error(
                f"API request failed with status {response.status_code}: "
                f"{response.text[:200]}"
            )
            raise APIError(
                server_message or MSG_REQUEST_FAILED,
                status_code=response.status_code,
                server_message=server_message,
            )

        if not response.content:
            return {}

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse JSON response: {e}")
            raise MalformedResponseError(
                "Response body is not valid JSON",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                "Response body is not a JSON object",
                status_code=response.status_code,
            )
        return data

    def _send(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                json=payload,
                headers=self._get_headers(token),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise NetworkError(f"{method} {path} failed: {e}") from e
        return self._handle_response(response)

    async def _request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await asyncio.to_thread(self._send, method, path, token, payload)

    async def get_current_user(self, token: str) -> UserProfile:
        """
        Получение профиля текущего пользователя.

        Args:
            token: Access токен

        Returns:
            Профиль пользователя
        """
        data = await self._request("GET", ENDPOINT_USERS_ME, token=token)
        try:
            return UserProfile.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected user payload: {e}")
            raise MalformedResponseError("User payload does not match the profile schema") from e

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        """
        Вход пользователя.

        Returns:
            Тело ответа, ожидаются поля access и refresh
        """
        return await self._request(
            "POST",
            ENDPOINT_USERS_LOGIN,
            payload={"username": username, "password": password},
        )

    async def signup(
        self,
        username: str,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> Dict[str, Any]:
        """
        Регистрация нового пользователя.

        Returns:
            Тело ответа, ожидается как минимум поле access
        """
        return await self._request(
            "POST",
            ENDPOINT_USERS_SIGNUP,
            payload={
                "username": username,
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "password": password,
            },
        )

    async def update_profile_picture(self, token: str, image_url: str) -> Dict[str, Any]:
        """
        Сохранение URL фото профиля в backend.

        Args:
            token: Access токен
            image_url: URL, полученный от media host
        """
        return await self._request(
            "PATCH",
            ENDPOINT_PROFILE_PICTURE,
            token=token,
            payload={"profile_image": image_url},
        )
