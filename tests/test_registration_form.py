from app.models.enums import FormState
from app.models.photo_models import PhotoFile
from app.services.photo_service import PHOTO_BAD_TYPE, PHOTO_REQUIRED
from app.services.registration_form import SUBMIT_FAILED, SUBMIT_IN_PROGRESS


def test_submit_uploads_photo_and_inserts_row(workflow, valid_values, png_photo, bucket, registrations_table):
    assert workflow.select_photo(png_photo) is None

    result = workflow.submit(valid_values)

    assert result.success
    assert result.state is FormState.SUCCESS
    assert workflow.state is FormState.SUCCESS
    assert workflow.photo is None

    row = registrations_table.rows[0]
    assert row["full_name"] == "Jane Doe"
    assert row["gender"] == "female"
    stored_path = next(iter(bucket.objects))
    assert row["photo_url"].endswith(stored_path)
    assert result.registration.id == row["id"]


def test_reset_returns_to_editing(workflow, valid_values, png_photo):
    workflow.select_photo(png_photo)
    workflow.submit(valid_values)

    workflow.reset()

    assert workflow.state is FormState.EDITING
    assert workflow.photo is None


def test_missing_photo_is_a_field_error(workflow, valid_values, bucket, registrations_table):
    result = workflow.submit(valid_values)

    assert not result.success
    assert result.state is FormState.EDITING
    assert result.errors == {"photo": PHOTO_REQUIRED}
    assert bucket.objects == {}
    assert registrations_table.calls == []


def test_field_errors_are_reported_with_photo_error(workflow, valid_values):
    result = workflow.submit(dict(valid_values, mobile_number="123"))

    assert set(result.errors) == {"mobile_number", "photo"}
    assert result.values["mobile_number"] == "123"
    assert workflow.state is FormState.EDITING


def test_rejected_photo_is_not_held(workflow, png_photo):
    workflow.select_photo(png_photo)
    gif = PhotoFile(filename="a.gif", content_type="image/gif", data=b"GIF89a")

    assert workflow.select_photo(gif) == PHOTO_BAD_TYPE
    assert workflow.photo is None


def test_upload_failure_skips_insert(workflow, valid_values, png_photo, bucket, registrations_table):
    bucket.fail_upload = ConnectionError("network down")
    workflow.select_photo(png_photo)

    result = workflow.submit(valid_values)

    assert result.error == "Failed to upload photo"
    assert result.state is FormState.EDITING
    assert registrations_table.rows == []
    assert workflow.photo is png_photo


def test_insert_failure_removes_uploaded_photo(workflow, valid_values, png_photo, bucket, registrations_table):
    registrations_table.fail_on["insert"] = RuntimeError("permission denied")
    workflow.select_photo(png_photo)

    result = workflow.submit(valid_values)

    assert result.error == SUBMIT_FAILED
    assert result.values == valid_values
    assert bucket.objects == {}
    assert len(bucket.removed) == 1


def test_orphan_cleanup_failure_does_not_mask_result(workflow, valid_values, png_photo, bucket, registrations_table):
    registrations_table.fail_on["insert"] = RuntimeError("permission denied")
    bucket.fail_remove = ConnectionError("still down")
    workflow.select_photo(png_photo)

    result = workflow.submit(valid_values)

    assert result.error == SUBMIT_FAILED
    assert workflow.state is FormState.EDITING


def test_second_submit_is_refused_until_reset(workflow, valid_values, png_photo, registrations_table):
    workflow.select_photo(png_photo)
    workflow.submit(valid_values)

    again = workflow.submit(valid_values)

    assert not again.success
    assert again.error == SUBMIT_IN_PROGRESS
    assert len(registrations_table.rows) == 1
