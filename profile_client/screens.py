"""Контроллеры экранов входа и регистрации."""

import logging
from typing import Dict, Optional

from profile_client.constants import (
    ALERT_TITLE_ERROR,
    ALERT_TITLE_SUCCESS,
    MSG_LOGIN_FAILED,
    MSG_LOGIN_SUCCESS,
    MSG_SIGNUP_FAILED,
    MSG_SIGNUP_SUCCESS,
    ROUTE_LOGIN,
    ROUTE_SIGNUP,
    ROUTE_TAB,
)
from profile_client.core.auth import AuthGateway
from profile_client.core.exceptions import APIError, AppException, FieldValidationError, MissingTokenError
from profile_client.core.session import SessionValidator
from profile_client.models import AuthResult, SessionStatus
from profile_client.ui import Surface

logger = logging.getLogger(__name__)


class LoginScreen:
    """
    Экран входа.

    При показе проверяет сохранённый токен; пока проверка идёт,
    checking_token=True и форма не показывается.
    """

    def __init__(self, gateway: AuthGateway, validator: SessionValidator, surface: Surface) -> None:
        self.gateway = gateway
        self.validator = validator
        self.surface = surface
        self.field_errors: Dict[str, str] = {}
        self.loading = False
        self.checking_token = True

    async def mount(self) -> SessionStatus:
        self.checking_token = True
        try:
            status = await self.validator.check()
        finally:
            self.checking_token = False
        if status == SessionStatus.AUTHENTICATED:
            self.surface.navigate(ROUTE_TAB)
        return status

    async def submit(self, username: str, password: str) -> Optional[AuthResult]:
        """Отправка формы. Ошибки уходят в field_errors или в alert."""
        self.field_errors = {}
        self.loading = True
        try:
            result = await self.gateway.login(username, password)
        except FieldValidationError as e:
            self.field_errors = e.field_errors
            return None
        except MissingTokenError as e:
            self.surface.alert(ALERT_TITLE_ERROR, e.message)
            return None
        except APIError as e:
            self.surface.alert(ALERT_TITLE_ERROR, e.user_message(MSG_LOGIN_FAILED))
            return None
        except AppException as e:
            logger.error(f"Login failed: {e.to_dict()}")
            self.surface.alert(ALERT_TITLE_ERROR, MSG_LOGIN_FAILED)
            return None
        finally:
            self.loading = False

        self.surface.alert(ALERT_TITLE_SUCCESS, MSG_LOGIN_SUCCESS)
        self.surface.navigate(ROUTE_TAB)
        return result

    def go_to_signup(self) -> None:
        self.surface.navigate(ROUTE_SIGNUP)


class SignupScreen:
    """Экран регистрации"""

    def __init__(self, gateway: AuthGateway, surface: Surface) -> None:
        self.gateway = gateway
        self.surface = surface
        self.field_errors: Dict[str, str] = {}
        self.loading = False

    async def submit(
        self,
        username: str,
        first_name: str,
        last_name: str,
        email: str,
        password1: str,
        password2: str,
    ) -> Optional[AuthResult]:
        self.field_errors = {}
        self.loading = True
        try:
            result = await self.gateway.signup(
                username, first_name, last_name, email, password1, password2
            )
        except FieldValidationError as e:
            self.field_errors = e.field_errors
            return None
        except MissingTokenError as e:
            self.surface.alert(ALERT_TITLE_ERROR, e.message)
            return None
        except APIError as e:
            self.surface.alert(ALERT_TITLE_ERROR, e.user_message(MSG_SIGNUP_FAILED))
            return None
        except AppException as e:
            logger.error(f"Sign up failed: {e.to_dict()}")
            self.surface.alert(ALERT_TITLE_ERROR, MSG_SIGNUP_FAILED)
            return None
        finally:
            self.loading = False

        self.surface.alert(ALERT_TITLE_SUCCESS, MSG_SIGNUP_SUCCESS)
        if result.session_stored:
            self.surface.navigate(ROUTE_TAB)
        else:
            logger.info("Signup session not stored, sending user to login")
            self.surface.navigate(ROUTE_LOGIN)
        return result

    def go_to_login(self) -> None:
        self.surface.navigate(ROUTE_LOGIN)
