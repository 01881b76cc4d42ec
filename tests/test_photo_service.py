import io
import re

import pytest
from PIL import Image

from app.models.photo_models import PhotoFile
from app.services.photo_service import (
    PHOTO_BAD_TYPE,
    PHOTO_REQUIRED,
    PHOTO_TOO_LARGE,
    PhotoService,
    PhotoUploadError,
)


def _png_bytes(width: int, height: int) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_check_requires_a_photo(photo_service):
    assert photo_service.check(None) == PHOTO_REQUIRED


@pytest.mark.parametrize("content_type", ["image/gif", "image/webp", "application/pdf"])
def test_check_rejects_other_types(photo_service, content_type):
    photo = PhotoFile(filename="a.gif", content_type=content_type, data=b"x")

    assert photo_service.check(photo) == PHOTO_BAD_TYPE


def test_size_limit_is_inclusive(photo_service, config):
    at_limit = PhotoFile(filename="a.jpg", content_type="image/jpeg", data=b"0" * config.MAX_PHOTO_BYTES)
    over = PhotoFile(filename="a.jpg", content_type="image/jpeg", data=b"0" * (config.MAX_PHOTO_BYTES + 1))

    assert photo_service.check(at_limit) is None
    assert photo_service.check(over) == PHOTO_TOO_LARGE


def test_generated_path_shape(photo_service):
    photo = PhotoFile(filename="holiday.photo.JPG", content_type="image/jpeg", data=b"x")

    path = photo_service.generate_object_path(photo)

    assert re.fullmatch(r"registrations/\d+-[0-9a-z]{1,11}\.JPG", path)


def test_generated_paths_do_not_collide(photo_service, png_photo):
    paths = {photo_service.generate_object_path(png_photo) for _ in range(200)}

    assert len(paths) == 200


def test_upload_stores_object_and_returns_public_url(photo_service, bucket, png_photo):
    path, url = photo_service.upload(png_photo)

    assert bucket.objects[path] == png_photo.data
    assert url.endswith(f"/registration-photos/{path}")
    assert not url.endswith("?")


def test_upload_failure_is_wrapped(photo_service, bucket, png_photo):
    bucket.fail_upload = ConnectionError("bucket offline")

    with pytest.raises(PhotoUploadError, match="Failed to upload photo"):
        photo_service.upload(png_photo)


def test_object_path_round_trips_through_url(photo_service, bucket, png_photo):
    path, url = photo_service.upload(png_photo)

    assert PhotoService.object_path_from_url(url) == path


def test_remove_deletes_object(photo_service, bucket, png_photo):
    path, _ = photo_service.upload(png_photo)

    photo_service.remove(path)

    assert path not in bucket.objects
    assert bucket.removed == [path]


def test_preview_is_bounded(photo_service, config):
    photo = PhotoFile(filename="big.png", content_type="image/png", data=_png_bytes(800, 400))

    preview = photo_service.build_preview(photo)

    assert max(preview.size) <= config.PREVIEW_MAX_PX
    assert preview.mode == "RGB"


def test_load_reads_local_file(tmp_path):
    target = tmp_path / "portrait.png"
    target.write_bytes(_png_bytes(4, 4))

    photo = PhotoService.load(target)

    assert photo.filename == "portrait.png"
    assert photo.content_type == "image/png"
    assert photo.extension == "png"
