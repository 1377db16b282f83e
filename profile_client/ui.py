"""Интерфейсы слоя представления, которые вызывает клиент."""

import asyncio
import logging
import mimetypes
from pathlib import Path
from typing import Callable, Optional, Protocol

from profile_client.models import PickedImage, PickerResult

logger = logging.getLogger(__name__)


class Surface(Protocol):
    """Экран: показывает сообщения и переключает маршруты"""

    def alert(self, title: str, message: str) -> None:
        ...

    def navigate(self, route: str) -> None:
        ...


class ImagePicker(Protocol):
    """Локальный выбор фото"""

    async def pick(self) -> PickerResult:
        ...


class LocalFileImagePicker:
    """
    Picker поверх локальной файловой системы.

    chooser возвращает путь к выбранному файлу или None, если
    пользователь отменил выбор. Разрешены только изображения.
    """

    def __init__(self, chooser: Callable[[], Optional[str]]) -> None:
        self.chooser = chooser

    def _load(self, path: Path) -> PickerResult:
        mime_type, _ = mimetypes.guess_type(path.name)
        if not mime_type or not mime_type.startswith("image/"):
            return PickerResult.failed("unsupported_type", f"{path.name} is not a photo")

        try:
            data = path.read_bytes()
        except OSError as e:
            return PickerResult.failed("read_error", str(e))

        return PickerResult.selected(
            PickedImage(
                uri=path.resolve().as_uri(),
                file_name=path.name,
                mime_type=mime_type,
                data=data,
            )
        )

    async def pick(self) -> PickerResult:
        chosen = self.chooser()
        if not chosen:
            logger.debug("No file chosen")
            return PickerResult.cancelled()
        return await asyncio.to_thread(self._load, Path(chosen))
