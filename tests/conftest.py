"""Общие фикстуры и заглушки для тестов клиента."""

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest
import requests

from profile_client.core.exceptions import APIError, MediaUploadError
from profile_client.core.storage import InMemoryCredentialStore
from profile_client.models import Credential, PickedImage, PickerResult, UploadResult, UserProfile


# ==================== HTTP helpers ====================

def make_response(status_code: int = 200, body: Any = None, raw: Optional[bytes] = None) -> requests.Response:
    """Настоящий requests.Response с заданным статусом и телом"""
    response = requests.Response()
    response.status_code = status_code
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    return response


class FakeSession:
    """Заглушка requests.Session: отдаёт ответы из очереди и запоминает запросы"""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []

    def _next(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append((method, url, kwargs))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        return self._next(method, url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> requests.Response:
        return self._next("POST", url, **kwargs)


# ==================== Component fakes ====================

class FakeSurface:
    """Экран, который запоминает сообщения и переходы"""

    def __init__(self) -> None:
        self.alerts: List[Tuple[str, str]] = []
        self.routes: List[str] = []

    def alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))

    def navigate(self, route: str) -> None:
        self.routes.append(route)


class FakePicker:
    def __init__(self, result: Optional[PickerResult] = None, error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.calls = 0

    async def pick(self) -> PickerResult:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


class FakeAPIClient:
    """
    Заглушка APIClient.

    Значения в responses: dict/UserProfile возвращается, исключение выбрасывается.
    """

    def __init__(self, **responses: Any) -> None:
        self.responses = responses
        self.calls: List[Tuple[str, tuple]] = []

    def _reply(self, name: str, *args: Any) -> Any:
        self.calls.append((name, args))
        value = self.responses.get(name, {})
        if isinstance(value, Exception):
            raise value
        return value

    def calls_to(self, name: str) -> List[tuple]:
        return [args for call_name, args in self.calls if call_name == name]

    async def get_current_user(self, token: str) -> UserProfile:
        value = self._reply("get_current_user", token)
        return value if isinstance(value, UserProfile) else UserProfile.model_validate(value)

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        return self._reply("login", username, password)

    async def signup(self, username, first_name, last_name, email, password) -> Dict[str, Any]:
        return self._reply("signup", username, first_name, last_name, email, password)

    async def update_profile_picture(self, token: str, image_url: str) -> Dict[str, Any]:
        return self._reply("update_profile_picture", token, image_url)


class FakeMediaClient:
    def __init__(self, remote_url: Optional[str] = None, error: Optional[Exception] = None) -> None:
        self.remote_url = remote_url
        self.error = error
        self.uploads: List[PickedImage] = []

    async def upload(self, image: PickedImage) -> UploadResult:
        self.uploads.append(image)
        if self.error is not None:
            raise self.error
        return UploadResult(remote_url=self.remote_url)


# ==================== Fixtures ====================

@pytest.fixture
def store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def credential() -> Credential:
    return Credential(access_token="A1", refresh_token="R1")


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def picked_image() -> PickedImage:
    return PickedImage(
        uri="file:///tmp/avatar.jpg",
        file_name="avatar.jpg",
        mime_type="image/jpeg",
        data=b"\xff\xd8\xff\xe0fake-jpeg",
    )


@pytest.fixture
def unauthorized() -> APIError:
    return APIError("Unauthorized", status_code=401, server_message="Token is invalid")


@pytest.fixture
def upload_error() -> MediaUploadError:
    return MediaUploadError("Media host responded with status 500", status_code=500)
