"""Тесты аватара и экрана профиля."""

import asyncio

import pytest

from conftest import FakeAPIClient, FakeMediaClient, FakePicker, FakeSession, make_response
from profile_client.constants import (
    ALERT_TITLE_ERROR,
    DEFAULT_PROFILE_IMAGE,
    MSG_LOGOUT_FAILED,
    MSG_NOT_AUTHENTICATED,
    MSG_PROFILE_LOAD_FAILED,
    MSG_UPLOAD_FAILED,
    ROUTE_LOGIN,
)
from profile_client.core.auth import AuthGateway
from profile_client.core.exceptions import NetworkError, NotAuthenticatedError
from profile_client.core.storage import FileCredentialStore
from profile_client.media_client import MediaHostClient
from profile_client.models import PickerResult, UploadPhase, UserProfile
from profile_client.profile import AvatarPresenter, ProfileFetcher, ProfileScreen
from profile_client.upload import UploadPipeline

REMOTE_URL = "https://media.test/image/upload/v1/avatar.jpg"
ALICE = UserProfile(
    username="alice",
    first_name="Alice",
    last_name="Liddell",
    profile_image="https://media.test/old.jpg",
)


def make_screen(store, surface, api, picker=None, media=None) -> ProfileScreen:
    pipeline = UploadPipeline(
        picker=picker or FakePicker(PickerResult.cancelled()),
        media_client=media or FakeMediaClient(remote_url=REMOTE_URL),
        api_client=api,
        store=store,
    )
    return ProfileScreen(ProfileFetcher(store, api), pipeline, AuthGateway(api, store), surface)


# ==================== ProfileFetcher ====================

@pytest.mark.asyncio
async def test_fetcher_requires_token(store):
    api = FakeAPIClient()
    with pytest.raises(NotAuthenticatedError):
        await ProfileFetcher(store, api).fetch()
    assert api.calls == []


# ==================== AvatarPresenter ====================

@pytest.mark.asyncio
async def test_avatar_shows_profile_image(store, credential):
    await store.put(credential)
    avatar = AvatarPresenter(ProfileFetcher(store, FakeAPIClient(get_current_user=ALICE)))
    assert avatar.loading

    assert await avatar.load() == ALICE.profile_image
    assert not avatar.loading


@pytest.mark.asyncio
async def test_avatar_falls_back_silently(store, credential):
    # Нет токена
    no_token = AvatarPresenter(ProfileFetcher(store, FakeAPIClient()))
    assert await no_token.load() == DEFAULT_PROFILE_IMAGE

    # Ошибка сети
    await store.put(credential)
    failing = AvatarPresenter(ProfileFetcher(store, FakeAPIClient(get_current_user=NetworkError("down"))))
    assert await failing.load() == DEFAULT_PROFILE_IMAGE

    # Профиль без фото
    no_image = AvatarPresenter(ProfileFetcher(store, FakeAPIClient(get_current_user=UserProfile(username="bob"))))
    assert await no_image.load() == DEFAULT_PROFILE_IMAGE


# ==================== ProfileScreen ====================

@pytest.mark.asyncio
async def test_mount_populates_fields(store, credential, surface):
    await store.put(credential)
    screen = make_screen(store, surface, FakeAPIClient(get_current_user=ALICE))

    await screen.mount()

    assert (screen.first_name, screen.last_name, screen.username) == ("Alice", "Liddell", "alice")
    assert screen.profile_image == ALICE.profile_image
    assert surface.alerts == []


@pytest.mark.asyncio
async def test_mount_without_token_alerts_and_redirects(store, surface):
    screen = make_screen(store, surface, FakeAPIClient())

    assert await screen.mount() is None

    assert surface.alerts == [(ALERT_TITLE_ERROR, MSG_NOT_AUTHENTICATED)]
    assert surface.routes == [ROUTE_LOGIN]


@pytest.mark.asyncio
async def test_mount_network_failure_alerts(store, credential, surface):
    await store.put(credential)
    screen = make_screen(store, surface, FakeAPIClient(get_current_user=NetworkError("down")))

    await screen.mount()

    assert surface.alerts == [(ALERT_TITLE_ERROR, MSG_PROFILE_LOAD_FAILED)]
    assert surface.routes == []
    assert screen.profile_image == DEFAULT_PROFILE_IMAGE


@pytest.mark.asyncio
async def test_choose_photo_success_updates_display(store, credential, surface, picked_image):
    await store.put(credential)
    api = FakeAPIClient(get_current_user=ALICE)
    screen = make_screen(store, surface, api, picker=FakePicker(PickerResult.selected(picked_image)))
    await screen.mount()

    state = await screen.choose_photo()

    assert state.succeeded
    assert screen.profile_image == REMOTE_URL
    assert not screen.loading
    assert surface.alerts == []


@pytest.mark.asyncio
async def test_choose_photo_upload_failure_alerts(store, credential, surface, picked_image, upload_error):
    await store.put(credential)
    screen = make_screen(
        store,
        surface,
        FakeAPIClient(get_current_user=ALICE),
        picker=FakePicker(PickerResult.selected(picked_image)),
        media=FakeMediaClient(error=upload_error),
    )
    await screen.mount()

    await screen.choose_photo()

    assert surface.alerts == [(ALERT_TITLE_ERROR, MSG_UPLOAD_FAILED)]
    assert screen.profile_image == picked_image.uri


@pytest.mark.asyncio
async def test_choose_photo_token_lost_redirects(store, credential, surface, picked_image):
    await store.put(credential)
    screen = make_screen(
        store,
        surface,
        FakeAPIClient(get_current_user=ALICE),
        picker=FakePicker(PickerResult.selected(picked_image)),
    )
    await screen.mount()
    await store.clear()

    await screen.choose_photo()

    assert surface.alerts == [(ALERT_TITLE_ERROR, MSG_NOT_AUTHENTICATED)]
    assert surface.routes == [ROUTE_LOGIN]


@pytest.mark.asyncio
async def test_results_after_unmount_are_discarded(store, credential, surface, picked_image, upload_error):
    await store.put(credential)
    release = asyncio.Event()

    class SlowPicker:
        async def pick(self):
            await release.wait()
            return PickerResult.selected(picked_image)

    screen = make_screen(
        store,
        surface,
        FakeAPIClient(get_current_user=ALICE),
        picker=SlowPicker(),
        media=FakeMediaClient(error=upload_error),
    )
    await screen.mount()
    task = asyncio.create_task(screen.choose_photo())
    await asyncio.sleep(0)

    screen.unmount()
    release.set()
    state = await task

    assert state.failed
    assert surface.alerts == []
    assert screen.profile_image == ALICE.profile_image


@pytest.mark.asyncio
async def test_choose_photo_while_busy_is_ignored(store, credential, surface, picked_image):
    await store.put(credential)
    release = asyncio.Event()

    class SlowPicker:
        async def pick(self):
            await release.wait()
            return PickerResult.selected(picked_image)

    screen = make_screen(store, surface, FakeAPIClient(get_current_user=ALICE), picker=SlowPicker())
    await screen.mount()
    first = asyncio.create_task(screen.choose_photo())
    await asyncio.sleep(0)

    busy_state = await screen.choose_photo()
    assert busy_state.phase == UploadPhase.PICKING
    assert screen.loading

    release.set()
    assert (await first).succeeded


@pytest.mark.asyncio
async def test_logout_clears_tokens_without_network(store, credential, surface):
    await store.put(credential)
    api = FakeAPIClient()
    screen = make_screen(store, surface, api)

    await screen.logout()

    assert await store.get() is None
    assert surface.routes == [ROUTE_LOGIN]
    assert api.calls == []


@pytest.mark.asyncio
async def test_logout_store_failure_alerts_and_stays(tmp_path, surface):
    path = tmp_path / "credentials.json"
    path.mkdir()
    screen = make_screen(FileCredentialStore(path), surface, FakeAPIClient())
    screen.mounted = True

    await screen.logout()

    assert surface.alerts == [(ALERT_TITLE_ERROR, MSG_LOGOUT_FAILED)]
    assert surface.routes == []


@pytest.mark.asyncio
async def test_malformed_media_reply_alerts_on_every_attempt(store, credential, surface, picked_image):
    await store.put(credential)
    session = FakeSession(
        make_response(200, {"secure_url": 123}),
        make_response(200, {"secure_url": 123}),
    )
    media = MediaHostClient(upload_url="https://media.test/upload", upload_preset="preset-1", timeout=5, session=session)
    screen = make_screen(
        store,
        surface,
        FakeAPIClient(get_current_user=ALICE),
        picker=FakePicker(PickerResult.selected(picked_image)),
        media=media,
    )
    await screen.mount()

    first = await screen.choose_photo()
    second = await screen.choose_photo()

    assert first.phase == second.phase == UploadPhase.SETTLED
    assert len(session.calls) == 2
    assert surface.alerts == [(ALERT_TITLE_ERROR, MSG_UPLOAD_FAILED)] * 2
    assert not screen.loading
