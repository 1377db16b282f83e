"""
Клиент внешнего media host (unsigned upload с upload preset)
"""

import asyncio
import logging
from typing import Optional

import requests

from profile_client.api_client import extract_server_message
from profile_client.config import get_settings
from profile_client.core.exceptions import MediaUploadError
from profile_client.models import PickedImage, UploadResult

logger = logging.getLogger(__name__)


class MediaHostClient:
    """
    Загрузка изображений на media host.

    Файл отправляется как multipart/form-data вместе с идентификатором
    upload preset, в ответ приходит постоянный secure_url.
    """

    # Максимальный размер файла: 10MB
    MAX_FILE_SIZE = 10 * 1024 * 1024

    def __init__(
        self,
        upload_url: Optional[str] = None,
        upload_preset: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Args:
            upload_url: URL загрузки media host
            upload_preset: Идентификатор upload preset
            timeout: Таймаут запроса в секундах
            session: HTTP сессия
        """
        settings = get_settings()
        self.upload_url = upload_url or settings.media_host_url
        self.upload_preset = upload_preset or settings.media_upload_preset
        self.timeout = timeout or settings.api_timeout
        self.session = session or requests.Session()

    def _upload(self, image: PickedImage) -> UploadResult:
        if len(image.data) > self.MAX_FILE_SIZE:
            raise MediaUploadError(
                f"File size ({len(image.data)} bytes) exceeds maximum allowed size ({self.MAX_FILE_SIZE} bytes)",
                details={"size": len(image.data), "max_size": self.MAX_FILE_SIZE},
            )

        try:
            response = self.session.post(
                self.upload_url,
                files={"file": (image.file_name, image.data, image.mime_type)},
                data={"upload_preset": self.upload_preset},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(
                "Media upload request failed",
                extra={"file_name": image.file_name, "error": str(e)},
            )
            raise MediaUploadError(f"Failed to upload file: {e}") from e

        if not 200 <= response.status_code < 300:
            server_message = extract_server_message(response)
            logger.error(
                "Media host rejected upload",
                extra={"status": response.status_code, "file_name": image.file_name},
            )
            raise MediaUploadError(
                f"Media host responded with status {response.status_code}",
                status_code=response.status_code,
                server_message=server_message,
            )

        try:
            secure_url = response.json().get("secure_url")
        except (ValueError, AttributeError) as e:
            raise MediaUploadError("Media host returned an unreadable body") from e

        if not isinstance(secure_url, str) or not secure_url:
            raise MediaUploadError(
                "secure_url is missing in the media host response",
                details={"secure_url_type": type(secure_url).__name__},
            )

        logger.info(
            "File uploaded successfully",
            extra={"file_name": image.file_name, "size": len(image.data)},
        )
        return UploadResult(remote_url=secure_url)

    async def upload(self, image: PickedImage) -> UploadResult:
        """
        Загружает изображение на media host.

        Args:
            image: Выбранное фото

        Returns:
            UploadResult с постоянным URL

        Raises:
            MediaUploadError: При сетевой ошибке, ошибочном статусе или ответе без secure_url
        """
        return await asyncio.to_thread(self._upload, image)
