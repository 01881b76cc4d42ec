"""
Registration Administration Service.

Fetch, view, edit and delete workflows behind the admin dashboard.
Every public method requires an admin session and returns a
``ServiceResult`` envelope; transport failures are logged here and
surfaced to the view as a short human-readable message.

Mutations patch the shared ``RegistrationBrowser`` cache rather than
re-fetching the whole table.
"""

from __future__ import annotations

import threading
from typing import Mapping, Optional

from app.auth import SessionManager
from app.auth_guard import admin_only
from app.logger import StructuredLogger
from app.models.registration import Registration
from app.models.service_models import RegistrationDetail, ServiceResult
from app.repositories.registration_repository import RegistrationRepository
from app.services.base_service import BaseService
from app.services.photo_service import PhotoService
from app.services.registration_browser import RegistrationBrowser
from app.services.validation import validate_registration
from app.utils.formatting import format_detail_timestamp

LOAD_FAILED = "Failed to load registrations"
UPDATE_OK = "Registration updated successfully"
UPDATE_FAILED = "Failed to update registration"
DELETE_OK = "Registration deleted successfully"
DELETE_FAILED = "Failed to delete registration"
NOT_FOUND = "Registration not found"
NO_PENDING_DELETE = "No deletion is pending"


class RegistrationAdminService(BaseService):
    """Admin workflows over the registration table.

    Parameters
    ----------
    repo:
        Registration table repository.
    photos:
        Photo service, used to remove the stored object on delete.
    browser:
        Shared cache of fetched records.
    session:
        Session holder; every method requires ``session.is_admin``.
    logger:
        Structured JSON logger.
    """

    def __init__(
        self,
        repo: RegistrationRepository,
        photos: PhotoService,
        browser: RegistrationBrowser,
        session: SessionManager,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(logger)
        self._repo = repo
        self._photos = photos
        self._browser = browser
        self._session = session
        self._lock = threading.Lock()
        self._pending_delete: Optional[str] = None

    @property
    def browser(self) -> RegistrationBrowser:
        return self._browser

    @property
    def pending_delete(self) -> Optional[str]:
        with self._lock:
            return self._pending_delete

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    @admin_only
    def fetch_all(self) -> ServiceResult[list[Registration]]:
        """Reload the cache from the table, newest first.

        On failure the previous cache is kept.
        """
        try:
            records = self._repo.list_all()
        except Exception as exc:
            self._logger.error(
                "Failed to load registrations: %s", exc,
                extra={"event": "REGISTRATIONS_LOAD_FAILED"},
            )
            return ServiceResult(success=False, error=LOAD_FAILED)

        self._browser.set_records(records)
        self._logger.info(
            "Loaded %d registrations", len(records),
            extra={"event": "REGISTRATIONS_LOADED"},
        )
        return ServiceResult(success=True, data=records)

    # ------------------------------------------------------------------
    # View / edit
    # ------------------------------------------------------------------

    @admin_only
    def view(self, record_id: str) -> ServiceResult[RegistrationDetail]:
        record = self._browser.get(record_id)
        if record is None:
            return ServiceResult(success=False, error=NOT_FOUND)
        return ServiceResult(
            success=True,
            data=RegistrationDetail(
                registration=record,
                registered_on=format_detail_timestamp(record.created_at),
            ),
        )

    @admin_only
    def edit_form(self, record_id: str) -> ServiceResult[dict[str, str]]:
        """Form values pre-populated from the cached record."""
        record = self._browser.get(record_id)
        if record is None:
            return ServiceResult(success=False, error=NOT_FOUND)
        return ServiceResult(success=True, data=record.form_values())

    @admin_only
    def save_edit(
        self,
        record_id: str,
        values: Mapping[str, Optional[str]],
    ) -> ServiceResult[Registration]:
        """Validate and persist an edit of the six editable fields.

        Returns field-scoped ``errors`` when validation fails, without
        any store call.  A missing row or transport failure leaves the
        cache unchanged.
        """
        validation = validate_registration(values)
        if not validation.is_valid or validation.value is None:
            return ServiceResult(success=False, errors=validation.errors)

        try:
            updated = self._repo.update(record_id, validation.value)
        except Exception as exc:
            self._logger.error(
                "Registration update failed for %s: %s", record_id, exc,
                extra={"event": "REGISTRATION_UPDATE_FAILED", "registration_id": record_id},
            )
            return ServiceResult(success=False, error=UPDATE_FAILED)

        if updated is None:
            return ServiceResult(success=False, error=UPDATE_FAILED)

        self._browser.replace(updated)
        self._logger.info(
            "Registration updated: %s", record_id,
            extra={"event": "REGISTRATION_UPDATED", "registration_id": record_id},
        )
        return ServiceResult(success=True, data=updated)

    # ------------------------------------------------------------------
    # Delete (two-step)
    # ------------------------------------------------------------------

    @admin_only
    def request_delete(self, record_id: str) -> ServiceResult[Registration]:
        """Mark *record_id* for deletion.  Nothing is mutated yet."""
        record = self._browser.get(record_id)
        if record is None:
            return ServiceResult(success=False, error=NOT_FOUND)
        with self._lock:
            self._pending_delete = record_id
        return ServiceResult(success=True, data=record)

    def cancel_delete(self) -> None:
        with self._lock:
            self._pending_delete = None

    @admin_only
    def confirm_delete(self) -> ServiceResult[str]:
        """Delete the pending record: row first, then its photo.

        If the row delete fails or matches nothing, neither the photo nor
        the cache is touched.  Photo removal after a successful row
        delete is best effort.
        """
        with self._lock:
            record_id = self._pending_delete
            self._pending_delete = None
        if record_id is None:
            return ServiceResult(success=False, error=NO_PENDING_DELETE)

        record = self._browser.get(record_id)

        try:
            deleted = self._repo.delete(record_id)
        except Exception as exc:
            self._logger.error(
                "Registration delete failed for %s: %s", record_id, exc,
                extra={"event": "REGISTRATION_DELETE_FAILED", "registration_id": record_id},
            )
            return ServiceResult(success=False, error=DELETE_FAILED)

        if not deleted:
            return ServiceResult(success=False, error=DELETE_FAILED)

        if record is not None and record.photo_url:
            object_path = self._photos.object_path_from_url(record.photo_url)
            try:
                self._photos.remove(object_path)
            except Exception as exc:
                self._logger.warning(
                    "Photo removal failed for %s: %s", object_path, exc,
                    extra={"event": "PHOTO_REMOVE_FAILED", "registration_id": record_id},
                )

        self._browser.remove(record_id)
        self._logger.info(
            "Registration deleted: %s", record_id,
            extra={"event": "REGISTRATION_DELETED", "registration_id": record_id},
        )
        return ServiceResult(success=True, data=record_id)
