import pytest

from app.database import DatabaseManager
from app.models.auth_models import AuthErrorCode
from app.models.enums import GateState
from app.services.auth_service import (
    NOT_AN_ADMIN,
    OFFLINE_MESSAGE,
    ROLE_GRANT_FAILED,
    AuthService,
)


@pytest.fixture()
def auth_service(db, session, role_repo, logger) -> AuthService:
    return AuthService(db=db, session=session, roles=role_repo, logger=logger)


@pytest.fixture()
def admin_account(fake_supabase):
    user = fake_supabase.auth.add_account("admin-1", "admin@example.com", "hunter22")
    fake_supabase.tables["user_roles"].rows.append({"user_id": "admin-1", "role": "admin"})
    return user


def test_admin_login(auth_service, admin_account, session):
    result = auth_service.login(" admin@example.com ", "hunter22")

    assert result.success and result.is_admin
    assert result.error_code is None
    assert session.is_admin
    assert session.access_token == "access-admin-1"
    assert session.gate_state is GateState.ALLOW


def test_login_without_admin_grant(auth_service, fake_supabase, session):
    fake_supabase.auth.add_account("u-2", "user@example.com", "password1")

    result = auth_service.login("user@example.com", "password1")

    assert result.success
    assert not result.is_admin
    assert result.error_code is AuthErrorCode.NOT_AN_ADMIN
    assert result.error_message == NOT_AN_ADMIN
    assert session.is_authenticated and not session.is_admin
    assert session.gate_state is GateState.REDIRECT


def test_wrong_password_is_classified(auth_service, admin_account, session):
    result = auth_service.login("admin@example.com", "wrong-password")

    assert not result.success
    assert result.error_code is AuthErrorCode.INVALID_CREDENTIALS
    assert result.error_message == "Invalid email or password."
    assert not session.is_authenticated


def test_invalid_credentials_never_reach_the_provider(auth_service, fake_supabase):
    fake_supabase.auth.fail_with = AssertionError("provider must not be called")

    result = auth_service.login("bad", "123")

    assert result.error_code is AuthErrorCode.VALIDATION_ERROR
    assert set(result.field_errors) == {"email", "password"}


def test_network_failure_is_reported_as_offline(auth_service, fake_supabase):
    fake_supabase.auth.fail_with = ConnectionError("unreachable")

    result = auth_service.login("admin@example.com", "hunter22")

    assert result.error_code is AuthErrorCode.NETWORK_ERROR
    assert result.error_message == OFFLINE_MESSAGE


def test_unconfigured_client_is_reported_as_offline(session, role_repo, logger):
    offline_db = DatabaseManager(supabase_url="", supabase_key="", logger=logger)
    service = AuthService(db=offline_db, session=session, roles=role_repo, logger=logger)

    assert service.login("admin@example.com", "hunter22").error_code is AuthErrorCode.NETWORK_ERROR


def test_role_lookup_failure_signs_the_client_out(auth_service, admin_account, fake_supabase, session):
    fake_supabase.tables["user_roles"].fail_on["select"] = ConnectionError("offline")

    result = auth_service.login("admin@example.com", "hunter22")

    assert not result.success
    assert result.error_code is AuthErrorCode.NETWORK_ERROR
    assert fake_supabase.auth.signed_out == 1
    assert fake_supabase.auth.get_session() is None
    assert not session.is_authenticated
    assert session.access_token is None


def test_unrecognised_error_is_unknown(auth_service, fake_supabase):
    fake_supabase.auth.fail_with = Exception("teapot")

    assert auth_service.login("admin@example.com", "hunter22").error_code is AuthErrorCode.UNKNOWN_ERROR


def test_signup_grants_admin_and_signs_in(auth_service, fake_supabase, session):
    result = auth_service.signup_admin("new@example.com", "secret1")

    assert result.success and result.is_admin
    assert not result.requires_confirmation
    assert {"user_id": result.user_id, "role": "admin"} in fake_supabase.tables["user_roles"].rows
    assert session.is_admin


def test_signup_requiring_confirmation_stays_signed_out(auth_service, fake_supabase, session):
    fake_supabase.auth.confirm_required = True

    result = auth_service.signup_admin("new@example.com", "secret1")

    assert result.success
    assert result.requires_confirmation
    assert not session.is_authenticated
    assert len(fake_supabase.tables["user_roles"].rows) == 1


def test_signup_with_existing_email(auth_service, admin_account):
    result = auth_service.signup_admin("admin@example.com", "another1")

    assert result.error_code is AuthErrorCode.EMAIL_ALREADY_EXISTS


def test_role_grant_failure_is_reported(auth_service, fake_supabase, session):
    fake_supabase.tables["user_roles"].fail_on["insert"] = Exception("violates row-level security")

    result = auth_service.signup_admin("new@example.com", "secret1")

    assert not result.success
    assert result.error_code is AuthErrorCode.ROLE_GRANT_FAILED
    assert result.error_message == ROLE_GRANT_FAILED
    assert "new@example.com" in fake_supabase.auth.accounts
    assert not session.is_admin


def test_gate_allows_admin_session(auth_service, admin_account, fake_supabase):
    auth_service.login("admin@example.com", "hunter22")

    assert auth_service.resolve_admin_access() is GateState.ALLOW


def test_gate_redirects_without_session(auth_service):
    assert auth_service.resolve_admin_access() is GateState.REDIRECT


def test_gate_redirects_when_role_lookup_fails(auth_service, admin_account, fake_supabase, session):
    auth_service.login("admin@example.com", "hunter22")
    fake_supabase.tables["user_roles"].fail_on["select"] = ConnectionError("offline")

    assert auth_service.resolve_admin_access() is GateState.REDIRECT
    assert not session.is_authenticated


def test_logout_clears_session_even_if_server_fails(auth_service, admin_account, fake_supabase, session):
    auth_service.login("admin@example.com", "hunter22")

    def broken_sign_out():
        raise Exception("token already revoked")

    fake_supabase.auth.sign_out = broken_sign_out
    auth_service.logout()

    assert not session.is_authenticated
    assert session.access_token is None
