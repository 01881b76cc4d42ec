from datetime import date, datetime, timezone

import pytest
from openpyxl import load_workbook

from app.auth_guard import AuthorizationError
from app.models.registration import Registration
from app.services.export_service import EXPORT_HEADERS, RegistrationExportService, export_row
from app.services.validation import validate_registration


def _registration(name: str, created_at: datetime) -> Registration:
    return Registration(
        id=f"id-{name}",
        full_name=name,
        mobile_number="9876543210",
        email=f"{name.lower()}@example.com",
        gender="male",
        department="Finance",
        address="7 Quay Road, Harbour Town",
        photo_url="https://demo.supabase.co/storage/v1/object/public/registration-photos/registrations/a.png",
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.fixture()
def export_service(admin_session, logger) -> RegistrationExportService:
    return RegistrationExportService(session=admin_session, logger=logger)


def test_export_row_order_and_date_format():
    record = _registration("Sam", datetime(2025, 1, 5, 15, 45, tzinfo=timezone.utc))

    row = export_row(record, tz=timezone.utc)

    assert row == [
        "Sam", "9876543210", "sam@example.com", "male", "Finance",
        "7 Quay Road, Harbour Town", "01/05/2025",
    ]


def test_workbook_has_header_then_rows_in_order(export_service):
    records = [
        _registration("Zed", datetime(2025, 2, 1, tzinfo=timezone.utc)),
        _registration("Amy", datetime(2025, 1, 1, tzinfo=timezone.utc)),
    ]

    sheet = export_service.build_workbook(records, tz=timezone.utc).active

    rows = list(sheet.iter_rows(values_only=True))
    assert sheet.title == "Registrations"
    assert rows[0] == EXPORT_HEADERS
    assert [r[0] for r in rows[1:]] == ["Zed", "Amy"]


def test_formula_like_text_is_exported_as_text(export_service, tmp_path, valid_values):
    submitted = validate_registration(dict(
        valid_values,
        full_name="=1+1",
        address='=HYPERLINK("http://x","click")',
    ))
    assert submitted.is_valid
    record = Registration(
        id="id-formula",
        photo_url="https://demo.supabase.co/storage/v1/object/public/registration-photos/registrations/f.png",
        created_at=datetime(2025, 1, 5, tzinfo=timezone.utc),
        updated_at=datetime(2025, 1, 5, tzinfo=timezone.utc),
        **submitted.value.to_row(),
    )
    target = tmp_path / "out.xlsx"

    export_service.export([record], target)

    sheet = load_workbook(target).active
    name_cell, address_cell = sheet["A2"], sheet["F2"]
    assert (name_cell.data_type, name_cell.value) == ("s", "=1+1")
    assert (address_cell.data_type, address_cell.value) == ("s", '=HYPERLINK("http://x","click")')


def test_export_of_empty_set_writes_header_only(export_service, tmp_path):
    target = tmp_path / "out.xlsx"

    result = export_service.export([], target)

    assert result.success and result.data == target
    rows = list(load_workbook(target).active.iter_rows(values_only=True))
    assert rows == [EXPORT_HEADERS]


def test_export_to_unwritable_location_fails(export_service, tmp_path):
    result = export_service.export([], tmp_path / "missing-dir" / "out.xlsx")

    assert not result.success
    assert result.error == "Failed to export registrations"


def test_default_filename():
    assert RegistrationExportService.default_filename(date(2025, 3, 9)) == "registrations-2025-03-09.xlsx"


def test_export_requires_admin(session, logger, tmp_path):
    service = RegistrationExportService(session=session, logger=logger)

    with pytest.raises(AuthorizationError):
        service.export([], tmp_path / "out.xlsx")
