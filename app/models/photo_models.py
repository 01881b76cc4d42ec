"""
Photo Models.

``PhotoFile`` is the raw image the user picked, held in memory until the
form is submitted.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path

from pydantic import BaseModel


class PhotoFile(BaseModel):
    """A client-selected image file.

    ``content_type`` is the declared media type (derived from the file
    name, like a browser does), not a sniffed one.
    """

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        """Text after the last dot, or the whole name when there is none."""
        return self.filename.rsplit(".", 1)[-1]

    @classmethod
    def from_path(cls, path: Path) -> "PhotoFile":
        """Read *path* into memory."""
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content_type=content_type or "application/octet-stream",
            data=path.read_bytes(),
        )
