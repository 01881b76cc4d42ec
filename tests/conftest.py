import itertools
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Optional

import pytest

from app.auth import SessionManager
from app.config import AppConfig
from app.database import DatabaseManager
from app.logger import StructuredLogger
from app.models.photo_models import PhotoFile
from app.models.user import AdminUser
from app.repositories.photo_repository import PhotoRepository
from app.repositories.registration_repository import RegistrationRepository
from app.repositories.role_repository import RoleRepository
from app.services.photo_service import PhotoService
from app.services.registration_admin import RegistrationAdminService
from app.services.registration_browser import RegistrationBrowser
from app.services.registration_form import RegistrationFormWorkflow

BASE_TIME = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)
PUBLIC_BASE = "https://demo.supabase.co/storage/v1/object/public"


# ---------------------------------------------------------------------------
# In-memory Supabase stand-in
# ---------------------------------------------------------------------------

class FakeQuery:
    """Chainable query builder mimicking the PostgREST client surface."""

    def __init__(self, table: "FakeTable") -> None:
        self._table = table
        self._op = "select"
        self._payload: Any = None
        self._filters: list[tuple[str, Any]] = []
        self._order: Optional[tuple[str, bool]] = None
        self._limit: Optional[int] = None

    def select(self, _columns: str = "*") -> "FakeQuery":
        self._op = "select"
        return self

    def insert(self, payload: dict) -> "FakeQuery":
        self._op, self._payload = "insert", payload
        return self

    def update(self, payload: dict) -> "FakeQuery":
        self._op, self._payload = "update", payload
        return self

    def delete(self) -> "FakeQuery":
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    def _matches(self, row: dict) -> bool:
        return all(row.get(col) == val for col, val in self._filters)

    def execute(self) -> SimpleNamespace:
        self._table.calls.append(self._op)
        failure = self._table.fail_on.get(self._op)
        if failure is not None:
            raise failure
        return SimpleNamespace(data=getattr(self, f"_run_{self._op}")())

    def _run_select(self) -> list[dict]:
        rows = [dict(r) for r in self._table.rows if self._matches(r)]
        if self._order:
            column, desc = self._order
            rows.sort(key=lambda r: r[column], reverse=desc)
        if self._limit is not None:
            rows = rows[: self._limit]
        return rows

    def _run_insert(self) -> list[dict]:
        row = dict(self._payload)
        if self._table.stamps:
            stamp = (BASE_TIME + timedelta(minutes=next(self._table.clock))).isoformat()
            row.setdefault("id", f"reg-{next(self._table.ids)}")
            row.setdefault("created_at", stamp)
            row.setdefault("updated_at", stamp)
        self._table.rows.append(row)
        return [dict(row)]

    def _run_update(self) -> list[dict]:
        updated = []
        for row in self._table.rows:
            if self._matches(row):
                row.update(self._payload)
                if self._table.stamps:
                    row["updated_at"] = (BASE_TIME + timedelta(days=1)).isoformat()
                updated.append(dict(row))
        return updated

    def _run_delete(self) -> list[dict]:
        removed = [r for r in self._table.rows if self._matches(r)]
        self._table.rows = [r for r in self._table.rows if not self._matches(r)]
        return removed


class FakeTable:
    def __init__(self, stamps: bool = True) -> None:
        self.rows: list[dict] = []
        self.calls: list[str] = []
        self.fail_on: dict[str, Exception] = {}
        self.stamps = stamps
        self.ids = itertools.count(1)
        self.clock = itertools.count(0)


class FakeBucket:
    def __init__(self, name: str) -> None:
        self.name = name
        self.objects: dict[str, bytes] = {}
        self.removed: list[str] = []
        self.fail_upload: Optional[Exception] = None
        self.fail_remove: Optional[Exception] = None

    def upload(self, path: str, file: bytes, file_options: Optional[dict] = None) -> SimpleNamespace:
        if self.fail_upload is not None:
            raise self.fail_upload
        self.objects[path] = file
        return SimpleNamespace(path=path)

    def get_public_url(self, path: str) -> str:
        return f"{PUBLIC_BASE}/{self.name}/{path}?"

    def remove(self, paths: list[str]) -> list[dict]:
        if self.fail_remove is not None:
            raise self.fail_remove
        for path in paths:
            self.objects.pop(path, None)
            self.removed.append(path)
        return [{"name": p} for p in paths]


class FakeStorage:
    def __init__(self) -> None:
        self.buckets: dict[str, FakeBucket] = {}

    def from_(self, bucket: str) -> FakeBucket:
        return self.buckets.setdefault(bucket, FakeBucket(bucket))


class FakeAuth:
    """Password auth over a dict of ``email -> (password, user)``."""

    def __init__(self) -> None:
        self.accounts: dict[str, tuple[str, SimpleNamespace]] = {}
        self.current: Optional[SimpleNamespace] = None
        self.confirm_required = False
        self.fail_with: Optional[Exception] = None
        self.signed_out = 0

    def add_account(self, user_id: str, email: str, password: str) -> SimpleNamespace:
        user = SimpleNamespace(id=user_id, email=email, user_metadata={}, identities=[{"id": user_id}])
        self.accounts[email] = (password, user)
        return user

    def _session(self, user: SimpleNamespace) -> SimpleNamespace:
        return SimpleNamespace(
            user=user,
            access_token=f"access-{user.id}",
            refresh_token=f"refresh-{user.id}",
            expires_at=int(BASE_TIME.timestamp()) + 3600,
        )

    def sign_in_with_password(self, credentials: dict) -> SimpleNamespace:
        if self.fail_with is not None:
            raise self.fail_with
        entry = self.accounts.get(credentials["email"])
        if entry is None or entry[0] != credentials["password"]:
            raise Exception("Invalid login credentials")
        self.current = self._session(entry[1])
        return SimpleNamespace(user=entry[1], session=self.current)

    def sign_up(self, credentials: dict) -> SimpleNamespace:
        if self.fail_with is not None:
            raise self.fail_with
        if credentials["email"] in self.accounts:
            raise Exception("User already registered")
        user = self.add_account(
            f"user-{len(self.accounts) + 1}", credentials["email"], credentials["password"],
        )
        session = None if self.confirm_required else self._session(user)
        self.current = session
        return SimpleNamespace(user=user, session=session)

    def sign_out(self) -> None:
        self.signed_out += 1
        self.current = None

    def get_session(self) -> Optional[SimpleNamespace]:
        return self.current


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: dict[str, FakeTable] = {
            "registrations": FakeTable(),
            "user_roles": FakeTable(stamps=False),
        }
        self.storage = FakeStorage()
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, FakeTable()))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def config(tmp_path) -> AppConfig:
    return AppConfig(
        SUPABASE_URL="https://demo.supabase.co",
        SUPABASE_ANON_KEY="anon-key",
        LOG_FILE=str(tmp_path / "test.log"),
    )


@pytest.fixture()
def logger(tmp_path) -> StructuredLogger:
    return StructuredLogger(name="registration_desk.tests", log_file=str(tmp_path / "test.log"))


@pytest.fixture()
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture()
def db(fake_supabase, logger) -> DatabaseManager:
    return DatabaseManager(
        supabase_url="https://demo.supabase.co",
        supabase_key="anon-key",
        logger=logger,
        client=fake_supabase,
    )


@pytest.fixture()
def bucket(fake_supabase) -> FakeBucket:
    return fake_supabase.storage.from_("registration-photos")


@pytest.fixture()
def registrations_table(fake_supabase) -> FakeTable:
    return fake_supabase.tables["registrations"]


@pytest.fixture()
def registration_repo(db, logger) -> RegistrationRepository:
    return RegistrationRepository(db=db, logger=logger)


@pytest.fixture()
def role_repo(db, logger) -> RoleRepository:
    return RoleRepository(db=db, logger=logger)


@pytest.fixture()
def photo_service(db, config, logger) -> PhotoService:
    return PhotoService(repo=PhotoRepository(db=db, logger=logger), config=config, logger=logger)


@pytest.fixture()
def workflow(registration_repo, photo_service, logger) -> RegistrationFormWorkflow:
    return RegistrationFormWorkflow(
        repo=registration_repo, photos=photo_service, logger=logger, reset_delay=0.0,
    )


@pytest.fixture()
def session() -> SessionManager:
    return SessionManager()


@pytest.fixture()
def admin_session(session) -> SessionManager:
    session.complete_resolution(AdminUser(id="admin-1", email="admin@example.com"), is_admin=True)
    return session


@pytest.fixture()
def admin_service(registration_repo, photo_service, admin_session, logger) -> RegistrationAdminService:
    return RegistrationAdminService(
        repo=registration_repo,
        photos=photo_service,
        browser=RegistrationBrowser(page_size=10),
        session=admin_session,
        logger=logger,
    )


@pytest.fixture()
def valid_values() -> dict[str, str]:
    return {
        "full_name": "  Jane Doe  ",
        "mobile_number": "9876543210",
        "email": "jane@example.com",
        "gender": "female",
        "department": "Engineering",
        "address": "42 Long Street, Springfield",
    }


@pytest.fixture()
def png_photo() -> PhotoFile:
    return PhotoFile(filename="me.png", content_type="image/png", data=b"\x89PNG" + b"0" * 64)
