"""
Вход, регистрация и выход пользователя
"""

import logging
import re
from typing import Any, Dict, Optional

from profile_client.api_client import APIClient
from profile_client.constants import (
    EMAIL_PATTERN,
    MIN_PASSWORD_LENGTH,
    MIN_USERNAME_LENGTH,
    MSG_ACCESS_TOKEN_MISSING,
    MSG_FIRST_NAME_MISSING,
    MSG_INVALID_EMAIL,
    MSG_LAST_NAME_MISSING,
    MSG_LOGIN_FAILED,
    MSG_PASSWORD_NOT_PROVIDED,
    MSG_PASSWORD_TOO_SHORT,
    MSG_PASSWORDS_MISMATCH,
    MSG_SIGNUP_FAILED,
    MSG_TOKEN_MISSING,
    MSG_USERNAME_NOT_PROVIDED,
    MSG_USERNAME_TOO_SHORT,
)
from profile_client.core.exceptions import APIError, FieldValidationError, MissingTokenError
from profile_client.core.storage import CredentialStore
from profile_client.models import AuthResult, Credential

logger = logging.getLogger(__name__)

_email_re = re.compile(EMAIL_PATTERN)


def is_valid_email(email: str) -> bool:
    """Синтаксическая проверка вида local@domain.tld, не RFC"""
    return bool(_email_re.search(email or ""))


def validate_login(username: str, password: str) -> Dict[str, str]:
    """
    Проверка полей входа.

    Returns:
        Словарь поле -> сообщение об ошибке (пустой если всё ок)
    """
    errors: Dict[str, str] = {}
    if not username:
        errors["username"] = MSG_USERNAME_NOT_PROVIDED
    if not password:
        errors["password"] = MSG_PASSWORD_NOT_PROVIDED
    return errors


def validate_signup(
    username: str,
    first_name: str,
    last_name: str,
    email: str,
    password1: str,
    password2: str,
) -> Dict[str, str]:
    """
    Проверка полей регистрации.

    Все проверки выполняются независимо, чтобы пользователь
    сразу увидел все ошибки, а не только первую.

    Returns:
        Словарь поле -> сообщение об ошибке (пустой если всё ок)
    """
    errors: Dict[str, str] = {}
    if not username or len(username) < MIN_USERNAME_LENGTH:
        errors["username"] = MSG_USERNAME_TOO_SHORT
    if not first_name:
        errors["first_name"] = MSG_FIRST_NAME_MISSING
    if not last_name:
        errors["last_name"] = MSG_LAST_NAME_MISSING
    if not email or not is_valid_email(email):
        errors["email"] = MSG_INVALID_EMAIL
    if not password1 or len(password1) < MIN_PASSWORD_LENGTH:
        errors["password1"] = MSG_PASSWORD_TOO_SHORT
    if password1 != password2:
        errors["password2"] = MSG_PASSWORDS_MISMATCH
    return errors


def _token(data: Dict[str, Any], key: str) -> Optional[str]:
    """Токен из ответа; не строка считается отсутствующим"""
    value = data.get(key)
    return value if isinstance(value, str) and value else None


def _with_fallback(error: APIError, fallback: str) -> APIError:
    """Та же ошибка, но с сообщением для пользователя"""
    return type(error)(
        error.user_message(fallback),
        status_code=error.status_code,
        server_message=error.server_message,
        details=error.details,
    )


class AuthGateway:
    """
    Обмен учётных данных на токены.

    Поля проверяются локально до любого сетевого запроса.
    Токены записываются в хранилище до того, как вызывающий
    узнает об успехе.
    """

    def __init__(self, api_client: APIClient, store: CredentialStore) -> None:
        self.api_client = api_client
        self.store = store

    async def login(self, username: str, password: str) -> AuthResult:
        """
        Вход пользователя.

        Raises:
            FieldValidationError: Пустое имя пользователя или пароль
            MissingTokenError: В ответе нет access или refresh
            APIError: Ошибка backend или сети
            CredentialStoreError: Не удалось сохранить токены
        """
        errors = validate_login(username, password)
        if errors:
            raise FieldValidationError(errors)

        try:
            data = await self.api_client.login(username, password)
        except APIError as e:
            logger.error(f"Error during login: {e.to_dict()}")
            raise _with_fallback(e, MSG_LOGIN_FAILED) from e

        access_token = _token(data, "access")
        refresh_token = _token(data, "refresh")
        if not access_token or not refresh_token:
            logger.error(f"Login response without tokens, keys: {sorted(data)}")
            raise MissingTokenError(MSG_TOKEN_MISSING, details={"keys": sorted(data)})

        credential = Credential(access_token=access_token, refresh_token=refresh_token)
        await self.store.put(credential)
        logger.info(f"User logged in: {username}")
        return AuthResult(access_token=access_token, credential=credential)

    async def signup(
        self,
        username: str,
        first_name: str,
        last_name: str,
        email: str,
        password1: str,
        password2: str,
    ) -> AuthResult:
        """
        Регистрация нового пользователя.

        Для успеха достаточно access токена. Пара сохраняется, только если
        backend вернул и refresh; иначе AuthResult.credential будет None.

        Raises:
            FieldValidationError: Хотя бы одно поле не прошло проверку
            MissingTokenError: В ответе нет access
            APIError: Ошибка backend или сети
            CredentialStoreError: Не удалось сохранить токены
        """
        errors = validate_signup(username, first_name, last_name, email, password1, password2)
        if errors:
            raise FieldValidationError(errors)

        try:
            data: Dict[str, Any] = await self.api_client.signup(
                username=username,
                first_name=first_name,
                last_name=last_name,
                email=email,
                password=password1,
            )
        except APIError as e:
            logger.error(f"Error during sign up: {e.to_dict()}")
            raise _with_fallback(e, MSG_SIGNUP_FAILED) from e

        access_token = _token(data, "access")
        if not access_token:
            logger.error(f"Signup response without access token, keys: {sorted(data)}")
            raise MissingTokenError(MSG_ACCESS_TOKEN_MISSING, details={"keys": sorted(data)})

        credential: Optional[Credential] = None
        refresh_token = _token(data, "refresh")
        if refresh_token:
            credential = Credential(access_token=access_token, refresh_token=refresh_token)
            await self.store.put(credential)
        else:
            logger.warning("Signup response has no refresh token, session is not stored")

        logger.info(f"User signed up: {username}")
        return AuthResult(access_token=access_token, credential=credential)

    async def logout(self) -> None:
        """Выход: удаляет оба токена, без запроса к backend"""
        await self.store.clear()
        logger.info("User logged out")
