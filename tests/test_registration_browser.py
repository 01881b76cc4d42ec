from datetime import date, datetime, timedelta, timezone

import pytest

from app.models.registration import Registration
from app.services.registration_browser import (
    RegistrationBrowser,
    compute_stats,
    filter_registrations,
    paginate,
)

UTC = timezone.utc


def make_registration(index: int, **overrides) -> Registration:
    created = datetime(2025, 3, 10, 9, 0, tzinfo=UTC) - timedelta(hours=index)
    fields = {
        "id": f"reg-{index}",
        "full_name": f"Person {index}",
        "mobile_number": f"98765{index:05d}",
        "email": f"person{index}@example.com",
        "gender": "other",
        "department": "Engineering",
        "address": "1 Main Street, Springfield",
        "photo_url": f"https://demo.supabase.co/storage/v1/object/public/registration-photos/registrations/{index}.png",
        "created_at": created,
        "updated_at": created,
    }
    fields.update(overrides)
    return Registration(**fields)


@pytest.fixture()
def records() -> list[Registration]:
    return [
        make_registration(1, full_name="Alice Smith", department="Sales"),
        make_registration(2, full_name="Bob Jones", email="BOB@Corp.io"),
        make_registration(3, full_name="Carol Lee", mobile_number="5550001111", department="Sales"),
    ]


def test_search_matches_name_mobile_and_email_case_insensitively(records):
    assert [r.id for r in filter_registrations(records, "alice")] == ["reg-1"]
    assert [r.id for r in filter_registrations(records, "corp.IO")] == ["reg-2"]
    assert [r.id for r in filter_registrations(records, "555000")] == ["reg-3"]


def test_search_does_not_match_address(records):
    assert filter_registrations(records, "springfield") == []


def test_department_and_search_combine(records):
    assert [r.id for r in filter_registrations(records, department="Sales")] == ["reg-1", "reg-3"]
    assert [r.id for r in filter_registrations(records, "carol", "Sales")] == ["reg-3"]
    assert filter_registrations(records, "bob", "Sales") == []


def test_empty_search_and_all_departments_keep_everything(records):
    assert filter_registrations(records, "", "all") == records


def test_paginate_last_page():
    items = [make_registration(i) for i in range(25)]

    page = paginate(items, page=3, page_size=10)

    assert [r.id for r in page.items] == [f"reg-{i}" for i in range(20, 25)]
    assert (page.start_index, page.end_index) == (21, 25)
    assert page.total_pages == 3
    assert page.has_previous and not page.has_next


def test_paginate_clamps_out_of_range_pages():
    items = [make_registration(i) for i in range(5)]

    assert paginate(items, page=9, page_size=10).page == 1
    assert paginate(items, page=0, page_size=10).page == 1


def test_empty_set_has_one_empty_page():
    page = paginate([], page=1, page_size=10)

    assert page.total_pages == 1
    assert page.items == []
    assert (page.start_index, page.end_index) == (0, 0)


def test_stats_count_today_in_given_zone():
    tz = timezone(timedelta(hours=5))
    records = [
        # 20:00 UTC on the 9th is already the 10th at UTC+5.
        make_registration(1, created_at=datetime(2025, 3, 9, 20, 0, tzinfo=UTC), department="Sales"),
        make_registration(2, created_at=datetime(2025, 3, 10, 10, 0, tzinfo=UTC)),
        make_registration(3, created_at=datetime(2025, 3, 8, 10, 0, tzinfo=UTC)),
    ]

    stats = compute_stats(records, today=date(2025, 3, 10), tz=tz)

    assert (stats.total, stats.today, stats.departments) == (3, 2, 2)


def test_stats_for_empty_set():
    stats = compute_stats([], today=date(2025, 3, 10), tz=UTC)

    assert (stats.total, stats.today, stats.departments) == (0, 0, 0)


def test_changing_filters_resets_page():
    browser = RegistrationBrowser(page_size=2)
    browser.set_records(make_registration(i) for i in range(6))
    browser.go_to_page(3)

    browser.set_search("person")
    assert browser.page == 1

    browser.go_to_page(2)
    browser.set_department("Engineering")
    assert browser.page == 1


def test_go_to_page_clamps():
    browser = RegistrationBrowser(page_size=2)
    browser.set_records(make_registration(i) for i in range(3))

    assert browser.go_to_page(7).page == 2
    assert browser.go_to_page(-1).page == 1


def test_removing_last_item_on_last_page_moves_back():
    browser = RegistrationBrowser(page_size=2)
    browser.set_records(make_registration(i) for i in range(3))
    browser.go_to_page(2)

    assert browser.remove("reg-2")

    assert browser.page == 1
    assert browser.remove("reg-2") is False


def test_replace_swaps_in_place(records):
    browser = RegistrationBrowser()
    browser.set_records(records)
    edited = records[1].model_copy(update={"full_name": "Robert Jones"})

    assert browser.replace(edited)
    assert [r.full_name for r in browser.records] == ["Alice Smith", "Robert Jones", "Carol Lee"]
    assert browser.replace(make_registration(99)) is False
