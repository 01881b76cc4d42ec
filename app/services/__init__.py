"""
Business Logic Services Package.

Services depend on the Repository layer for data access and the Auth
module for session context.

The ``create_services()`` factory wires every repository and service together,
returning a typed dict that the application layer (views) can consume
without knowing the internal dependency graph.
"""

from __future__ import annotations

from typing import TypedDict

from app.auth import SessionManager
from app.config import AppConfig
from app.database import DatabaseManager
from app.logger import get_logger
from app.repositories.photo_repository import PhotoRepository
from app.repositories.registration_repository import RegistrationRepository
from app.repositories.role_repository import RoleRepository
from app.services.auth_service import AuthService
from app.services.export_service import RegistrationExportService
from app.services.photo_service import PhotoService
from app.services.registration_admin import RegistrationAdminService
from app.services.registration_browser import RegistrationBrowser
from app.services.registration_form import RegistrationFormWorkflow


class ServiceContainer(TypedDict):
    """Typed container for all application services."""

    auth_service: AuthService
    photo_service: PhotoService
    registration_form: RegistrationFormWorkflow
    registration_admin: RegistrationAdminService
    export_service: RegistrationExportService


def create_services(
    db: DatabaseManager,
    config: AppConfig,
    session: SessionManager,
) -> ServiceContainer:
    """
    Wire all repositories and services together.

    This is the single composition root for the service layer.  The
    application entry-point calls this once at startup and passes the
    returned dict to views as needed.

    Args:
        db: DatabaseManager holding the Supabase client.
        config: Application configuration (injected into services that need it).
        session: The process-wide session holder.

    Returns:
        ServiceContainer mapping service names to fully-wired instances.
    """
    logger = get_logger("services")

    # ------------------------------------------------------------------
    # 1. Repositories (data-access layer)
    # ------------------------------------------------------------------
    registration_repo = RegistrationRepository(
        db=db, logger=logger, table=config.REGISTRATIONS_TABLE,
    )
    role_repo = RoleRepository(db=db, logger=logger, table=config.USER_ROLES_TABLE)
    photo_repo = PhotoRepository(db=db, logger=logger, bucket=config.PHOTO_BUCKET)

    # ------------------------------------------------------------------
    # 2. Leaf services
    # ------------------------------------------------------------------
    photo_service = PhotoService(repo=photo_repo, config=config, logger=logger)
    auth_service = AuthService(
        db=db,
        session=session,
        roles=role_repo,
        logger=logger,
    )
    export_service = RegistrationExportService(
        session=session,
        logger=logger,
        sheet_name=config.EXPORT_SHEET_NAME,
    )

    # ------------------------------------------------------------------
    # 3. Workflow services
    # ------------------------------------------------------------------
    registration_form = RegistrationFormWorkflow(
        repo=registration_repo,
        photos=photo_service,
        logger=logger,
        reset_delay=config.SUCCESS_RESET_DELAY_S,
    )
    registration_admin = RegistrationAdminService(
        repo=registration_repo,
        photos=photo_service,
        browser=RegistrationBrowser(page_size=config.PAGE_SIZE),
        session=session,
        logger=logger,
    )

    return ServiceContainer(
        auth_service=auth_service,
        photo_service=photo_service,
        registration_form=registration_form,
        registration_admin=registration_admin,
        export_service=export_service,
    )
