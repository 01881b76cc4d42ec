"""
Registration Export Service.

Writes the full cached record set to a single-sheet ``.xlsx`` workbook
with openpyxl.  Filters and pagination do not apply: the export always
covers every fetched record, in fetch order.
"""

from __future__ import annotations

from datetime import date, tzinfo
from pathlib import Path
from typing import Iterable, Optional, Union

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from app.auth import SessionManager
from app.auth_guard import admin_only
from app.logger import StructuredLogger
from app.models.registration import Registration
from app.models.service_models import ServiceResult
from app.services.base_service import BaseService
from app.utils.formatting import format_export_date

EXPORT_HEADERS: tuple[str, ...] = (
    "Name",
    "Mobile",
    "Email",
    "Gender",
    "Department",
    "Address",
    "Registered Date",
)

EXPORT_OK = "Export completed"
EXPORT_FAILED = "Failed to export registrations"


def export_row(record: Registration, tz: Optional[tzinfo] = None) -> list[str]:
    """One sheet row for *record*, in ``EXPORT_HEADERS`` order."""
    return [
        record.full_name,
        record.mobile_number,
        record.email,
        str(record.gender),
        record.department,
        record.address,
        format_export_date(record.created_at, tz),
    ]


def _append_text_row(sheet: Worksheet, values: Iterable[str]) -> None:
    # openpyxl infers a formula from a leading "="; pin the type to string.
    sheet.append(list(values))
    for cell in sheet[sheet.max_row]:
        if isinstance(cell.value, str):
            cell.data_type = "s"


class RegistrationExportService(BaseService):
    """Builds and saves the registrations workbook."""

    def __init__(
        self,
        session: SessionManager,
        logger: StructuredLogger,
        sheet_name: str = "Registrations",
    ) -> None:
        super().__init__(logger)
        self._session = session
        self._sheet_name = sheet_name

    def build_workbook(
        self,
        records: Iterable[Registration],
        tz: Optional[tzinfo] = None,
    ) -> Workbook:
        """Header row first, then one row per record.

        Every cell is stored as literal text, so submitted values such as
        ``=HYPERLINK(...)`` never become formulas.
        """
        workbook = Workbook()
        sheet: Worksheet = workbook.active
        sheet.title = self._sheet_name
        _append_text_row(sheet, EXPORT_HEADERS)
        for record in records:
            _append_text_row(sheet, export_row(record, tz))
        return workbook

    @staticmethod
    def default_filename(today: Optional[date] = None) -> str:
        """``registrations-YYYY-MM-DD.xlsx`` for *today* (local date)."""
        today = today or date.today()
        return f"registrations-{today.isoformat()}.xlsx"

    @admin_only
    def export(
        self,
        records: Iterable[Registration],
        destination: Union[str, Path],
    ) -> ServiceResult[Path]:
        """Write the workbook to *destination*."""
        records = list(records)
        path = Path(destination)
        try:
            self.build_workbook(records).save(path)
        except Exception as exc:
            self._logger.error(
                "Export to %s failed: %s", path, exc,
                extra={"event": "EXPORT_FAILED"},
            )
            return ServiceResult(success=False, error=EXPORT_FAILED)

        self._logger.info(
            "Exported %d registrations to %s", len(records), path,
            extra={"event": "REGISTRATIONS_EXPORTED"},
        )
        return ServiceResult(success=True, data=path)
