"""
Registration Listing, Filtering and Pagination.

The dashboard fetches the full record set once and derives every view
client-side.  The pure helpers below do the derivation; the
``RegistrationBrowser`` class holds the cache plus the current search
text, department filter and page number.
"""

from __future__ import annotations

import math
import threading
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional, Sequence

from app.models.enums import ALL_DEPARTMENTS
from app.models.registration import Registration
from app.models.service_models import DashboardStats, Page

DEFAULT_PAGE_SIZE = 10


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def filter_registrations(
    records: Iterable[Registration],
    search: str = "",
    department: str = ALL_DEPARTMENTS,
) -> list[Registration]:
    """Records matching both the search text and the department.

    The search is a case-insensitive substring test against name, mobile
    number and email; an empty search matches everything.  ``"all"`` as
    the department disables the department constraint.  Input order is
    preserved.
    """
    needle = (search or "").lower()

    def matches(record: Registration) -> bool:
        if department != ALL_DEPARTMENTS and record.department != department:
            return False
        if not needle:
            return True
        return (
            needle in record.full_name.lower()
            or needle in record.mobile_number.lower()
            or needle in record.email.lower()
        )

    return [r for r in records if matches(r)]


def total_pages_for(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def paginate(
    records: Sequence[Registration],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page:
    """Slice one page out of *records*; *page* is clamped into range."""
    total_pages = total_pages_for(len(records), page_size)
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(records[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total_items=len(records),
    )


def compute_stats(
    records: Iterable[Registration],
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> DashboardStats:
    """Stat tiles for the full record set.

    Parameters
    ----------
    records:
        Every cached registration, unfiltered.
    today:
        The local calendar day counted by the "today" tile; defaults to
        the current date in *tz*.
    tz:
        Zone used to convert ``created_at`` before comparing days; the
        machine's local zone when ``None``.
    """
    records = list(records)
    if today is None:
        today = datetime.now(tz).date() if tz else date.today()

    def local_day(value: datetime) -> date:
        return value.astimezone(tz).date() if value.tzinfo else value.date()

    return DashboardStats(
        total=len(records),
        today=sum(1 for r in records if local_day(r.created_at) == today),
        departments=len({r.department for r in records}),
    )


# ---------------------------------------------------------------------------
# Stateful browser
# ---------------------------------------------------------------------------

class RegistrationBrowser:
    """In-memory cache of registrations plus the dashboard's view state.

    Mutations elsewhere (edit, delete) patch this cache instead of
    re-fetching.  Changing the search text or department resets the page
    to 1; ``go_to_page`` clamps to the valid range.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self._lock = threading.RLock()
        self._records: list[Registration] = []
        self._search: str = ""
        self._department: str = ALL_DEPARTMENTS
        self._page: int = 1
        self._page_size = page_size

    # --- cache ---------------------------------------------------------

    @property
    def records(self) -> list[Registration]:
        with self._lock:
            return list(self._records)

    def set_records(self, records: Iterable[Registration]) -> None:
        with self._lock:
            self._records = list(records)
            self._page = self._clamped(self._page)

    def get(self, record_id: str) -> Optional[Registration]:
        with self._lock:
            return next((r for r in self._records if r.id == record_id), None)

    def replace(self, record: Registration) -> bool:
        """Swap the cached record with the same id.  ``False`` if absent."""
        with self._lock:
            for index, existing in enumerate(self._records):
                if existing.id == record.id:
                    self._records[index] = record
                    return True
            return False

    def remove(self, record_id: str) -> bool:
        with self._lock:
            before = len(self._records)
            self._records = [r for r in self._records if r.id != record_id]
            removed = len(self._records) != before
            self._page = self._clamped(self._page)
            return removed

    # --- view state ----------------------------------------------------

    @property
    def search(self) -> str:
        return self._search

    @property
    def department(self) -> str:
        return self._department

    @property
    def page(self) -> int:
        return self._page

    def set_search(self, text: str) -> None:
        with self._lock:
            self._search = text or ""
            self._page = 1

    def set_department(self, department: str) -> None:
        with self._lock:
            self._department = department or ALL_DEPARTMENTS
            self._page = 1

    def go_to_page(self, page: int) -> Page:
        with self._lock:
            self._page = self._clamped(page)
            return self.current_page()

    # --- derived views -------------------------------------------------

    def filtered(self) -> list[Registration]:
        with self._lock:
            return filter_registrations(self._records, self._search, self._department)

    def current_page(self) -> Page:
        with self._lock:
            return paginate(self.filtered(), self._page, self._page_size)

    def stats(self, today: Optional[date] = None, tz: Optional[tzinfo] = None) -> DashboardStats:
        with self._lock:
            return compute_stats(self._records, today, tz)

    def _clamped(self, page: int) -> int:
        total = total_pages_for(len(self.filtered()), self._page_size)
        return min(max(1, page), total)
