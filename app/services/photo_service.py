"""
Photo Asset Service.

Checks, previews, uploads and removes registration photos.

The public form holds the picked photo in memory (``PhotoFile``) until
submission.  On submit the photo is uploaded to the public storage bucket
under a generated, collision-resistant name, and the resulting public URL
is written into the registration row.  Deleting a registration removes
the object again, with the object path recovered from the stored URL.
"""

from __future__ import annotations

import io
import secrets
import time
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import httpx
from PIL import Image, ImageOps

from app.config import AppConfig
from app.logger import StructuredLogger
from app.models.photo_models import PhotoFile
from app.repositories.photo_repository import PhotoRepository
from app.services.base_service import BaseService

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

PHOTO_REQUIRED = "Please upload a photo"
PHOTO_BAD_TYPE = "Only JPG and PNG files are allowed"
PHOTO_TOO_LARGE = "File size must be less than 2MB"
PHOTO_UPLOAD_FAILED = "Failed to upload photo"


class PhotoUploadError(Exception):
    """Raised when the storage bucket rejects or fails an upload."""


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


class PhotoService(BaseService):
    """Photo selection, preview and storage operations.

    Parameters
    ----------
    repo:
        Storage repository bound to the photo bucket.
    config:
        Application settings (size limit, accepted types, path prefix,
        preview size, download timeout).
    logger:
        Structured JSON logger.
    """

    def __init__(
        self,
        repo: PhotoRepository,
        config: AppConfig,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(logger)
        self._repo = repo
        self._config = config

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @staticmethod
    def load(path: Union[str, Path]) -> PhotoFile:
        """Read a local file into a ``PhotoFile``.  Raises ``OSError``."""
        return PhotoFile.from_path(Path(path))

    def check(self, photo: Optional[PhotoFile]) -> Optional[str]:
        """Return the error message for *photo*, or ``None`` when acceptable.

        The size limit is inclusive: a file of exactly ``MAX_PHOTO_BYTES``
        passes.
        """
        if photo is None:
            return PHOTO_REQUIRED
        if photo.content_type.lower() not in self._config.ACCEPTED_PHOTO_TYPES:
            return PHOTO_BAD_TYPE
        if photo.size > self._config.MAX_PHOTO_BYTES:
            return PHOTO_TOO_LARGE
        return None

    # ------------------------------------------------------------------
    # Previews
    # ------------------------------------------------------------------

    def build_preview(self, photo: PhotoFile) -> Image.Image:
        """Decode *photo* into an upright thumbnail for display."""
        return self._thumbnail(photo.data)

    def fetch_remote_preview(self, url: str) -> Image.Image:
        """Download a stored photo and return a thumbnail.

        Raises ``httpx.HTTPError`` on transport or status failures and
        ``PIL.UnidentifiedImageError`` when the body is not an image.
        """
        with httpx.Client(
            timeout=self._config.PHOTO_FETCH_TIMEOUT_S,
            follow_redirects=True,
        ) as client:
            response = client.get(url)
            response.raise_for_status()
        return self._thumbnail(response.content)

    def _thumbnail(self, data: bytes) -> Image.Image:
        bound = self._config.PREVIEW_MAX_PX
        with Image.open(io.BytesIO(data)) as img:
            upright = ImageOps.exif_transpose(img)
            upright.thumbnail((bound, bound))
            return upright.convert("RGB")

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def generate_object_path(self, photo: PhotoFile) -> str:
        """``<prefix>/<epoch-millis>-<base36 suffix>.<extension>``."""
        millis = int(time.time() * 1000)
        suffix = _base36(secrets.randbits(52))[:11]
        return f"{self._config.PHOTO_PATH_PREFIX}/{millis}-{suffix}.{photo.extension}"

    def upload(self, photo: PhotoFile) -> tuple[str, str]:
        """Upload *photo* and return ``(object_path, public_url)``.

        Raises
        ------
        PhotoUploadError
            On any storage or connectivity failure.
        """
        path = self.generate_object_path(photo)
        try:
            self._repo.upload(path, photo.data, photo.content_type)
            url = self._repo.public_url(path)
        except Exception as exc:
            self._logger.error(
                "Photo upload failed for %s: %s", path, exc,
                extra={"event": "PHOTO_UPLOAD_FAILED"},
            )
            raise PhotoUploadError(PHOTO_UPLOAD_FAILED) from exc
        return path, url.rstrip("?")

    @staticmethod
    def object_path_from_url(url: str) -> str:
        """Recover ``<folder>/<file>`` from a public object URL."""
        segments = [s for s in urlparse(url).path.split("/") if s]
        return "/".join(segments[-2:])

    def remove(self, path: str) -> None:
        """Delete one object.  Storage errors propagate to the caller."""
        self._repo.remove(path)
