import csv
import io

import pytest

from crm_intel.features.engagement.services.export_service import CSV_COLUMNS, ContactExportService


@pytest.fixture
def service():
    return ContactExportService()


def _rows(text):
    return list(csv.DictReader(io.StringIO(text)))


def test_header_matches_columns(service, now):
    text = service.export_scored_contacts_csv([], now=now)

    assert text.splitlines() == [",".join(CSV_COLUMNS)]


def test_rows_are_scored_and_ordered_by_email(service, make_contact, now):
    contacts = [
        make_contact(days_ago=10, email="zoe@example.com"),
        make_contact(days_ago=200, list_ids=frozenset(), email="adam@example.com"),
        make_contact(email="mia@example.com", email_blacklisted=True),
    ]

    rows = _rows(service.export_scored_contacts_csv(contacts, now=now))

    assert [r["email"] for r in rows] == ["adam@example.com", "mia@example.com", "zoe@example.com"]
    assert [r["score"] for r in rows] == ["60", "0", "90"]
    assert [r["tier"] for r in rows] == ["Warm", "Cold", "Champion"]
    assert [r["is_blacklisted"] for r in rows] == ["no", "yes", "no"]
    assert rows[0]["list_count"] == "0"
    assert rows[0]["days_since_modified"] == "200"
    assert rows[2]["modified_at"] == "2024-06-02T15:30:00+00:00"


def test_missing_timestamps_export_as_blank(service, make_contact, now):
    contact = make_contact(days_ago=None, created_at=None)

    row = _rows(service.export_scored_contacts_csv([contact], now=now))[0]

    assert row["modified_at"] == ""
    assert row["created_at"] == ""
    assert row["days_since_modified"] == "999"


def test_tier_and_search_filters_apply(service, make_contact, now):
    contacts = [
        make_contact(days_ago=10, email="vip@acme.io"),
        make_contact(days_ago=10, email="vip@other.io"),
        make_contact(days_ago=200, email="late@acme.io"),
    ]

    rows = _rows(service.export_scored_contacts_csv(contacts, search="ACME", tier="Champion", now=now))

    assert [r["email"] for r in rows] == ["vip@acme.io"]


def test_unknown_tier_is_rejected(service, make_contact, now):
    with pytest.raises(ValueError):
        service.export_scored_contacts_csv([make_contact()], tier="Lukewarm", now=now)
