"""
Authentication Service.

Single orchestrator for every admin authentication concern: login,
admin sign-up, logout, admin-role resolution and error classification.

Sits between the UI layer and Supabase Auth so that ``LoginView``
remains a thin form handler.  All methods return typed ``AuthResult``
models or a ``GateState``; the UI never inspects raw exceptions.
"""

from __future__ import annotations

from typing import Any, Optional

from app.auth import SessionManager
from app.database import DatabaseManager
from app.logger import StructuredLogger
from app.models.auth_models import AuthErrorCode, AuthResult, SUPABASE_ERROR_MAP
from app.models.enums import AppRole, GateState
from app.models.user import AdminUser
from app.repositories.role_repository import RoleRepository
from app.services.validation import validate_credentials

SIGNUP_SUCCESS = "Admin account created successfully!"
ROLE_GRANT_FAILED = "Account created but failed to assign admin role"
NOT_AN_ADMIN = "This account does not have admin access."
OFFLINE_MESSAGE = "Cannot reach the server. Check your internet connection."


class AuthService:
    """Centralised authentication service.

    Receives all infrastructure dependencies via ``__init__`` and
    exposes pure request → result methods for every auth flow.

    Parameters
    ----------
    db:
        Database manager holding the Supabase client.
    session:
        Injectable session holder for the signed-in identity.
    roles:
        Repository for ``user_roles`` grants.
    logger:
        Structured JSON logger.
    """

    def __init__(
        self,
        db: DatabaseManager,
        session: SessionManager,
        roles: RoleRepository,
        logger: StructuredLogger,
    ) -> None:
        self._db: DatabaseManager = db
        self._session: SessionManager = session
        self._roles: RoleRepository = roles
        self._logger: StructuredLogger = logger

    # ==================================================================
    # Login
    # ==================================================================

    def login(self, email: str, password: str) -> AuthResult:
        """Authenticate via Supabase and resolve the admin role.

        A valid identity without the admin grant still signs in; the
        result carries ``is_admin=False`` and the dashboard gate will
        redirect back to the login view.

        Parameters
        ----------
        email:
            The raw email entered by the user.
        password:
            The raw password entered by the user.

        Returns
        -------
        AuthResult
            ``success=True`` on authentication, or a structured error
            with ``error_code`` and ``error_message`` on failure.
        """
        credentials = validate_credentials(email, password)
        if not credentials.is_valid:
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.VALIDATION_ERROR,
                error_message=next(iter(credentials.errors.values())),
                field_errors=credentials.errors,
            )

        self._session.begin_resolution()
        try:
            response = self._db.supabase.auth.sign_in_with_password({
                "email": credentials.email,
                "password": credentials.password,
            })
            user = self._to_admin_user(response.user, credentials.email or "")
            self._store_tokens(response.session)
        except RuntimeError:
            self._session.complete_resolution(None, False)
            return self._offline_result()
        except Exception as exc:
            self._session.complete_resolution(None, False)
            return self._classify_error(exc, "LOGIN_FAILED")

        try:
            is_admin = self._lookup_admin(user.id)
        except Exception as exc:
            self._logger.warning(
                "Role lookup failed for %s: %s", user.email, exc,
                extra={"event": "LOGIN_FAILED", "user_id": user.id},
            )
            # The client already holds the provider session; drop it too.
            self._discard_client_session(user.email)
            self._session.clear()
            if isinstance(exc, RuntimeError):
                return self._offline_result()
            return self._classify_error(exc, "LOGIN_FAILED")

        self._session.complete_resolution(user, is_admin)
        self._logger.info(
            "User authenticated: %s (admin: %s)",
            user.email,
            is_admin,
            extra={"event": "LOGIN", "email": user.email, "user_id": user.id},
        )

        if not is_admin:
            return AuthResult(
                success=True,
                error_code=AuthErrorCode.NOT_AN_ADMIN,
                error_message=NOT_AN_ADMIN,
                user_id=user.id,
                email=user.email,
            )
        return AuthResult(
            success=True,
            user_id=user.id,
            email=user.email,
            is_admin=True,
        )

    # ==================================================================
    # Admin sign-up
    # ==================================================================

    def signup_admin(self, email: str, password: str) -> AuthResult:
        """Create an account and grant it the admin role.

        Two steps: ``auth.sign_up`` then one ``user_roles`` insert.  When
        the account is created but the grant fails, the result is a
        failure with ``ROLE_GRANT_FAILED``; the account is left in place.

        When the provider requires email confirmation it returns no
        session; the result then has ``requires_confirmation=True`` and
        the session stays signed out.
        """
        credentials = validate_credentials(email, password)
        if not credentials.is_valid:
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.VALIDATION_ERROR,
                error_message=next(iter(credentials.errors.values())),
                field_errors=credentials.errors,
            )

        try:
            response = self._db.supabase.auth.sign_up({
                "email": credentials.email,
                "password": credentials.password,
            })
        except RuntimeError:
            return self._offline_result()
        except Exception as exc:
            return self._classify_error(exc, "ADMIN_SIGNUP_FAILED")

        if response.user is None:
            self._logger.warning(
                "Sign-up returned no user for %s", credentials.email,
                extra={"event": "ADMIN_SIGNUP_FAILED"},
            )
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.UNKNOWN_ERROR,
                error_message="Registration could not be completed. Please try again later.",
            )

        user = self._to_admin_user(response.user, credentials.email or "")

        # Supabase obfuscates duplicate sign-ups as a user with no identities.
        if getattr(response.user, "identities", None) == []:
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.EMAIL_ALREADY_EXISTS,
                error_message=SUPABASE_ERROR_MAP["already registered"][1],
            )

        try:
            self._roles.grant(user.id, AppRole.ADMIN)
        except Exception as exc:
            self._logger.error(
                "Role grant failed for %s: %s", user.email, exc,
                extra={"event": "ROLE_GRANT_FAILED", "user_id": user.id},
            )
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.ROLE_GRANT_FAILED,
                error_message=ROLE_GRANT_FAILED,
                user_id=user.id,
                email=user.email,
            )

        requires_confirmation = response.session is None
        if not requires_confirmation:
            self._store_tokens(response.session)
            self._session.complete_resolution(user, True)

        self._logger.info(
            "Admin account created: %s", user.email,
            extra={"event": "ADMIN_SIGNUP", "email": user.email, "user_id": user.id},
        )
        return AuthResult(
            success=True,
            user_id=user.id,
            email=user.email,
            is_admin=True,
            requires_confirmation=requires_confirmation,
        )

    # ==================================================================
    # Gate resolution
    # ==================================================================

    def resolve_admin_access(self) -> GateState:
        """Re-derive the session identity and admin flag.

        Reads the client's current session; when one exists, looks up the
        admin grant.  Any lookup failure resolves to ``REDIRECT``.
        """
        self._session.begin_resolution()
        try:
            current = self._db.supabase.auth.get_session()
            if current is None or current.user is None:
                self._session.complete_resolution(None, False)
            else:
                user = self._to_admin_user(current.user, current.user.email or "")
                self._session.complete_resolution(user, self._lookup_admin(user.id))
        except Exception as exc:
            self._logger.warning(
                "Admin access resolution failed: %s", exc,
                extra={"event": "GATE_RESOLUTION_FAILED"},
            )
            self._session.complete_resolution(None, False)

        state = self._session.gate_state
        self._logger.debug("Admin gate resolved: %s", state)
        return state

    # ==================================================================
    # Logout
    # ==================================================================

    def logout(self) -> None:
        """Server-side sign-out, then clear the local session.

        The server call is wrapped so a failed revocation still signs the
        desktop session out.
        """
        user = self._session.current_user
        user_email = user.email if user else "unknown"

        self._discard_client_session(user_email)
        self._session.clear()
        self._logger.info(
            "User logged out: %s",
            user_email,
            extra={"event": "LOGOUT", "email": user_email},
        )

    # ==================================================================
    # Helpers
    # ==================================================================

    def _discard_client_session(self, user_email: str) -> None:
        """Server-side sign-out; failures are logged, never raised."""
        try:
            self._db.supabase.auth.sign_out()
        except RuntimeError:
            self._logger.debug(
                "Offline, skipping server-side sign_out for %s.", user_email,
            )
        except Exception as exc:
            self._logger.warning(
                "Server-side sign_out failed for %s: %s", user_email, exc,
            )

    def _lookup_admin(self, user_id: str) -> bool:
        return self._roles.has_role(user_id, AppRole.ADMIN)

    def _store_tokens(self, session_data: Any) -> None:
        if session_data is None:
            return
        self._session.set_tokens(
            access_token=session_data.access_token,
            refresh_token=session_data.refresh_token,
            expires_at=getattr(session_data, "expires_at", None),
        )

    @staticmethod
    def _to_admin_user(user_data: Any, fallback_email: str) -> AdminUser:
        metadata = getattr(user_data, "user_metadata", None) or {}
        display_name: Optional[str] = metadata.get("full_name")
        return AdminUser(
            id=str(user_data.id),
            email=user_data.email or fallback_email,
            display_name=display_name,
        )

    @staticmethod
    def _offline_result() -> AuthResult:
        return AuthResult(
            success=False,
            error_code=AuthErrorCode.NETWORK_ERROR,
            error_message=OFFLINE_MESSAGE,
        )

    def _classify_error(self, exc: Exception, event: str) -> AuthResult:
        """Map a Supabase or network exception to a structured
        ``AuthResult`` with a human-readable error message.

        Parameters
        ----------
        exc:
            The exception raised by the auth call.
        event:
            Log event name for the failure.

        Returns
        -------
        AuthResult
        """
        if isinstance(exc, (ConnectionError, TimeoutError)):
            self._logger.warning(
                "Network error during auth: %s", exc,
                extra={"event": event, "error_code": "network"},
            )
            return self._offline_result()

        error_str = str(exc).lower()
        code_attr = str(getattr(exc, "code", "") or "").lower()

        for code_key, (error_code, human_message) in SUPABASE_ERROR_MAP.items():
            if code_key in error_str or code_key == code_attr:
                self._logger.warning(
                    "Auth error (%s): %s", code_key, exc,
                    extra={"event": event, "error_code": code_key},
                )
                return AuthResult(
                    success=False,
                    error_code=error_code,
                    error_message=human_message,
                )

        self._logger.warning(
            "Unknown auth error: %s", exc,
            extra={"event": event, "error_code": "unknown"},
        )
        return AuthResult(
            success=False,
            error_code=AuthErrorCode.UNKNOWN_ERROR,
            error_message="An unexpected error occurred. Please try again later.",
        )
