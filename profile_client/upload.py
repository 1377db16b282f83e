"""
Загрузка фото профиля: picker -> media host -> backend
"""

import logging
from typing import Callable, Dict, FrozenSet, Optional

from profile_client.api_client import APIClient
from profile_client.constants import MSG_NOT_AUTHENTICATED, MSG_UPLOAD_FAILED
from profile_client.core.exceptions import AppException, UploadInProgressError
from profile_client.core.storage import CredentialStore
from profile_client.media_client import MediaHostClient
from profile_client.models import UploadFailure, UploadPhase, UploadState
from profile_client.ui import ImagePicker

logger = logging.getLogger(__name__)

DisplayCallback = Callable[[str], None]

_TRANSITIONS: Dict[UploadPhase, FrozenSet[UploadPhase]] = {
    UploadPhase.IDLE: frozenset({UploadPhase.PICKING}),
    UploadPhase.PICKING: frozenset({UploadPhase.IDLE, UploadPhase.UPLOADING}),
    UploadPhase.UPLOADING: frozenset({UploadPhase.PERSISTING, UploadPhase.SETTLED}),
    UploadPhase.PERSISTING: frozenset({UploadPhase.SETTLED}),
    UploadPhase.SETTLED: frozenset({UploadPhase.PICKING, UploadPhase.IDLE}),
}


class UploadPipeline:
    """
    Конечный автомат загрузки фото профиля.

    Фазы: idle -> picking -> uploading -> persisting -> settled.
    Выбранное фото показывается сразу (оптимистично), затем заменяется
    URL от media host. При ошибке показанное фото не откатывается.
    Одновременно выполняется только одна загрузка, повторный run()
    во время работы отклоняется.
    """

    def __init__(
        self,
        picker: ImagePicker,
        media_client: MediaHostClient,
        api_client: APIClient,
        store: CredentialStore,
    ) -> None:
        self.picker = picker
        self.media_client = media_client
        self.api_client = api_client
        self.store = store
        self._state = UploadState()

    @property
    def state(self) -> UploadState:
        return self._state

    def _transition(self, phase: UploadPhase, **changes) -> UploadState:
        current = self._state.phase
        if phase not in _TRANSITIONS[current]:
            raise RuntimeError(f"Invalid upload transition {current.value} -> {phase.value}")
        self._state = self._state.model_copy(update={"phase": phase, **changes})
        logger.debug(f"Upload phase {current.value} -> {phase.value}")
        return self._state

    def _settle(self, failure: Optional[UploadFailure] = None, message: Optional[str] = None) -> UploadState:
        return self._transition(UploadPhase.SETTLED, failure=failure, message=message)

    def reset(self) -> UploadState:
        """Вернуть завершённую загрузку в idle"""
        if self._state.phase == UploadPhase.SETTLED:
            self._transition(UploadPhase.IDLE, failure=None, message=None)
        return self._state

    async def run(self, on_display: Optional[DisplayCallback] = None) -> UploadState:
        """
        Выбрать фото и сохранить его как фото профиля.

        Args:
            on_display: Вызывается при каждой смене показанного изображения

        Returns:
            Итоговое состояние (idle после отмены или ошибки picker, иначе settled)

        Raises:
            UploadInProgressError: Предыдущая загрузка ещё не завершена
        """
        if self._state.busy:
            logger.warning(f"Upload rejected, pipeline is {self._state.phase.value}")
            raise UploadInProgressError(
                "Profile picture upload is already in progress",
                details={"phase": self._state.phase.value},
            )

        def show(uri: str) -> None:
            if on_display is not None:
                on_display(uri)

        self._transition(UploadPhase.PICKING, remote_url=None, failure=None, message=None)

        try:
            result = await self.picker.pick()
        except Exception as e:
            logger.error(f"ImagePicker Error: {e}", exc_info=True)
            return self._transition(UploadPhase.IDLE)

        if result.did_cancel:
            logger.info("User cancelled image picker")
            return self._transition(UploadPhase.IDLE)
        if result.error_code or result.asset is None:
            logger.warning(f"ImagePicker Error: {result.error_code} {result.error_message or ''}".rstrip())
            return self._transition(UploadPhase.IDLE)

        asset = result.asset
        self._transition(UploadPhase.UPLOADING, display_image=asset.uri)
        show(asset.uri)

        try:
            upload = await self.media_client.upload(asset)
        except AppException as e:
            logger.error(f"Error uploading image: {e.to_dict()}")
            return self._settle(UploadFailure.UPLOAD, MSG_UPLOAD_FAILED)
        except Exception as e:
            logger.error(f"Unexpected error uploading image: {e}", exc_info=True)
            return self._settle(UploadFailure.UPLOAD, MSG_UPLOAD_FAILED)

        logger.info(f"Image uploaded to media host: {upload.remote_url}")
        self._transition(
            UploadPhase.PERSISTING,
            display_image=upload.remote_url,
            remote_url=upload.remote_url,
        )
        show(upload.remote_url)

        try:
            token = await self.store.get_access_token()
            if not token:
                # Файл на media host остаётся без владельца
                logger.warning("No stored token while saving profile picture")
                return self._settle(UploadFailure.UNAUTHENTICATED, MSG_NOT_AUTHENTICATED)
            await self.api_client.update_profile_picture(token, upload.remote_url)
        except AppException as e:
            logger.error(f"Error saving image URL in backend: {e.to_dict()}")
            return self._settle(UploadFailure.PERSIST, MSG_UPLOAD_FAILED)
        except Exception as e:
            logger.error(f"Unexpected error saving image URL: {e}", exc_info=True)
            return self._settle(UploadFailure.PERSIST, MSG_UPLOAD_FAILED)

        logger.info("Image URL saved in backend")
        return self._settle()
