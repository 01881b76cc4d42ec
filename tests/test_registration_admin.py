import pytest

from app.auth_guard import AuthorizationError
from app.models.photo_models import PhotoFile
from app.models.user import AdminUser
from app.services.registration_admin import (
    DELETE_FAILED,
    LOAD_FAILED,
    NO_PENDING_DELETE,
    NOT_FOUND,
    UPDATE_FAILED,
)


@pytest.fixture()
def seeded(workflow, valid_values, admin_service):
    """Submit two registrations through the public form, then load them."""
    for name in ("Jane Doe", "John Roe"):
        workflow.select_photo(_png())
        workflow.submit(dict(valid_values, full_name=name))
        workflow.reset()
    admin_service.fetch_all()
    return admin_service


def _png() -> PhotoFile:
    return PhotoFile(filename="me.png", content_type="image/png", data=b"\x89PNG" + b"1" * 32)


def test_fetch_all_orders_newest_first(seeded):
    names = [r.full_name for r in seeded.browser.records]

    assert names == ["John Roe", "Jane Doe"]


def test_fetch_failure_keeps_previous_cache(seeded, registrations_table):
    registrations_table.fail_on["select"] = ConnectionError("offline")

    result = seeded.fetch_all()

    assert not result.success
    assert result.error == LOAD_FAILED
    assert len(seeded.browser.records) == 2


def test_view_formats_timestamp(seeded):
    record = seeded.browser.records[0]

    detail = seeded.view(record.id).data

    assert detail.registration.id == record.id
    assert " at " in detail.registered_on


def test_view_unknown_id(seeded):
    assert seeded.view("missing").error == NOT_FOUND


def test_edit_round_trip_updates_cache(seeded, registrations_table):
    record = seeded.browser.records[0]
    values = seeded.edit_form(record.id).data
    values["address"] = "  99 New Road, Shelbyville  "

    result = seeded.save_edit(record.id, values)

    assert result.success
    assert result.data.address == "99 New Road, Shelbyville"
    assert result.data.photo_url == record.photo_url
    assert result.data.updated_at > record.updated_at
    assert seeded.browser.get(record.id).address == "99 New Road, Shelbyville"


def test_invalid_edit_makes_no_store_call(seeded, registrations_table):
    record = seeded.browser.records[0]
    calls_before = list(registrations_table.calls)

    result = seeded.save_edit(record.id, dict(record.form_values(), email="nope"))

    assert result.errors == {"email": "Please enter a valid email address"}
    assert registrations_table.calls == calls_before


def test_update_failure_leaves_cache(seeded, registrations_table):
    record = seeded.browser.records[0]
    registrations_table.fail_on["update"] = ConnectionError("offline")

    result = seeded.save_edit(record.id, dict(record.form_values(), full_name="Changed"))

    assert result.error == UPDATE_FAILED
    assert seeded.browser.get(record.id).full_name == record.full_name


def test_confirm_delete_removes_row_photo_and_cache(seeded, bucket, registrations_table):
    record = seeded.browser.records[0]
    photo_path = seeded._photos.object_path_from_url(record.photo_url)
    assert photo_path in bucket.objects

    assert seeded.request_delete(record.id).success
    assert seeded.pending_delete == record.id

    result = seeded.confirm_delete()

    assert result.success
    assert seeded.pending_delete is None
    assert photo_path not in bucket.objects
    assert seeded.browser.get(record.id) is None
    assert all(row["id"] != record.id for row in registrations_table.rows)


def test_delete_of_vanished_row_keeps_photo_and_cache(seeded, bucket, registrations_table):
    record = seeded.browser.records[0]
    registrations_table.rows = [r for r in registrations_table.rows if r["id"] != record.id]
    seeded.request_delete(record.id)

    result = seeded.confirm_delete()

    assert result.error == DELETE_FAILED
    assert seeded.browser.get(record.id) is not None
    assert bucket.removed == []


def test_photo_removal_failure_still_deletes(seeded, bucket):
    record = seeded.browser.records[0]
    bucket.fail_remove = ConnectionError("storage down")
    seeded.request_delete(record.id)

    assert seeded.confirm_delete().success
    assert seeded.browser.get(record.id) is None


def test_cancel_delete(seeded, registrations_table):
    record = seeded.browser.records[0]
    seeded.request_delete(record.id)

    seeded.cancel_delete()

    assert seeded.confirm_delete().error == NO_PENDING_DELETE
    assert len(registrations_table.rows) == 2


def test_non_admin_session_is_refused(seeded, admin_session):
    admin_session.complete_resolution(AdminUser(id="u-2", email="user@example.com"), is_admin=False)

    with pytest.raises(AuthorizationError):
        seeded.fetch_all()
    with pytest.raises(AuthorizationError):
        seeded.request_delete("reg-1")


def test_signed_out_session_is_refused(seeded, admin_session):
    admin_session.clear()

    with pytest.raises(AuthorizationError):
        seeded.view("reg-1")
