"""
Public Registration Workflow.

Owns the state machine behind the public registration form:

    EDITING --submit()--> SUBMITTING --+--> SUCCESS --reset()--> EDITING
                                       +--> EDITING (with error)

Submission order is fixed: validate fields and photo, upload the photo,
then insert the row referencing the uploaded object.  When the insert
fails after a successful upload, the uploaded object is removed again so
the bucket does not collect unreferenced photos.
"""

from __future__ import annotations

import threading
from typing import Mapping, Optional

from app.logger import StructuredLogger
from app.models.enums import FormState
from app.models.photo_models import PhotoFile
from app.models.service_models import SubmissionResult
from app.repositories.registration_repository import RegistrationRepository
from app.services.base_service import BaseService
from app.services.photo_service import PhotoService, PhotoUploadError
from app.services.validation import validate_registration

SUBMIT_IN_PROGRESS = "A submission is already in progress."
SUBMIT_SUCCESS = "Registration submitted successfully!"
SUBMIT_FAILED = "Failed to submit registration"


class RegistrationFormWorkflow(BaseService):
    """State holder and submit pipeline for the public form.

    Thread-safe: the view calls ``submit`` on a worker thread, and a
    second call while one is running is refused rather than queued.

    Parameters
    ----------
    repo:
        Registration table repository (anonymous insert).
    photos:
        Photo check / upload service.
    logger:
        Structured JSON logger.
    reset_delay:
        Seconds the view waits on ``SUCCESS`` before calling ``reset``.
    """

    def __init__(
        self,
        repo: RegistrationRepository,
        photos: PhotoService,
        logger: StructuredLogger,
        reset_delay: float = 3.0,
    ) -> None:
        super().__init__(logger)
        self._repo = repo
        self._photos = photos
        self._reset_delay = reset_delay
        self._lock = threading.Lock()
        self._state: FormState = FormState.EDITING
        self._photo: Optional[PhotoFile] = None

    @property
    def state(self) -> FormState:
        with self._lock:
            return self._state

    @property
    def photo(self) -> Optional[PhotoFile]:
        with self._lock:
            return self._photo

    @property
    def reset_delay(self) -> float:
        return self._reset_delay

    # ------------------------------------------------------------------
    # Photo selection
    # ------------------------------------------------------------------

    def select_photo(self, photo: PhotoFile) -> Optional[str]:
        """Hold *photo* for submission.

        Returns the rejection message when the photo fails its checks; a
        rejected photo is not held and any previous selection is dropped.
        """
        error = self._photos.check(photo)
        with self._lock:
            self._photo = None if error else photo
        if error:
            self._logger.info(
                "Photo rejected: %s (%s)", photo.filename, error,
                extra={"event": "PHOTO_REJECTED"},
            )
        return error

    def clear_photo(self) -> None:
        with self._lock:
            self._photo = None

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self, values: Mapping[str, Optional[str]]) -> SubmissionResult:
        """Validate, upload and insert one registration.

        Parameters
        ----------
        values:
            Raw form field strings keyed by column name.

        Returns
        -------
        SubmissionResult
            ``state`` is ``SUCCESS`` with the created registration, or
            ``EDITING`` with ``errors`` (field-scoped, photo under the
            ``photo`` key) or ``error`` (transport failure).  ``values``
            always echoes the input so nothing the user typed is lost.
        """
        echoed = {k: (v or "") for k, v in values.items()}

        with self._lock:
            if self._state is not FormState.EDITING:
                return SubmissionResult(
                    success=False,
                    state=self._state,
                    error=SUBMIT_IN_PROGRESS,
                    values=echoed,
                )
            self._state = FormState.SUBMITTING
            photo = self._photo

        validation = validate_registration(values)
        errors = dict(validation.errors)
        photo_error = self._photos.check(photo)
        if photo_error:
            errors["photo"] = photo_error

        if errors or validation.value is None or photo is None:
            return self._back_to_editing(errors=errors, values=echoed)

        try:
            object_path, photo_url = self._photos.upload(photo)
        except PhotoUploadError as exc:
            return self._back_to_editing(error=str(exc), values=echoed)

        try:
            created = self._repo.insert(validation.value, photo_url)
        except Exception as exc:
            self._logger.error(
                "Registration insert failed: %s", exc,
                extra={"event": "REGISTRATION_SUBMIT_FAILED"},
            )
            self._discard_orphan(object_path)
            return self._back_to_editing(error=SUBMIT_FAILED, values=echoed)

        with self._lock:
            self._state = FormState.SUCCESS
            self._photo = None

        self._logger.info(
            "Registration submitted: %s", created.id,
            extra={
                "event": "REGISTRATION_SUBMITTED",
                "registration_id": created.id,
                "department": created.department,
            },
        )
        return SubmissionResult(
            success=True,
            state=FormState.SUCCESS,
            registration=created,
            values=echoed,
        )

    def reset(self) -> None:
        """Clear the held photo and return to ``EDITING``."""
        with self._lock:
            self._photo = None
            self._state = FormState.EDITING

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _back_to_editing(
        self,
        values: dict[str, str],
        errors: Optional[dict[str, str]] = None,
        error: Optional[str] = None,
    ) -> SubmissionResult:
        with self._lock:
            self._state = FormState.EDITING
        return SubmissionResult(
            success=False,
            state=FormState.EDITING,
            errors=errors or {},
            error=error,
            values=values,
        )

    def _discard_orphan(self, object_path: str) -> None:
        try:
            self._photos.remove(object_path)
        except Exception as exc:
            self._logger.warning(
                "Could not remove orphaned photo %s: %s", object_path, exc,
                extra={"event": "PHOTO_ORPHANED"},
            )
