"""
Photo Storage Repository.

Wraps the Supabase Storage bucket that holds registration photos.  The
bucket is public-read; uploads are open to anonymous sessions and
deletes are restricted to admins by the bucket policies.
"""

from __future__ import annotations

from typing import Optional

from app.database import DatabaseManager
from app.logger import StructuredLogger
from app.repositories.base_repository import BaseRepository


class PhotoRepository(BaseRepository):
    """Object access for one storage bucket.

    ``BUCKET`` plays the role ``TABLE`` plays for table repositories.
    """

    BUCKET: str = "registration-photos"

    def __init__(
        self,
        db: DatabaseManager,
        logger: StructuredLogger,
        bucket: Optional[str] = None,
    ) -> None:
        super().__init__(db, logger)
        if bucket:
            self.BUCKET = bucket

    def _bucket(self):
        return self.supabase.storage.from_(self.BUCKET)

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        """Write *data* under *path*.  Raises on any storage error."""
        self._bucket().upload(
            path=path,
            file=data,
            file_options={"content-type": content_type, "upsert": "false"},
        )
        self._logger.info("Photo uploaded: %s/%s", self.BUCKET, path)

    def public_url(self, path: str) -> str:
        """Publicly fetchable URL of the object at *path*."""
        return self._bucket().get_public_url(path)

    def remove(self, path: str) -> None:
        """Delete the object at *path*."""
        self._bucket().remove([path])
        self._logger.info("Photo removed: %s/%s", self.BUCKET, path)
