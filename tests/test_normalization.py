"""Mini README: Tests for record normalisation at the store boundary.

Structure:
    * test_malformed_record_falls_back_to_safe_defaults - bad fields never raise.
    * test_date_coercion_accepts_common_formats - ISO datetimes and human dates.
    * test_normalisation_is_idempotent - a second pass changes nothing.
"""

from __future__ import annotations

import math

import pytest

from campusledger.ledger import (
    BudgetEntry,
    Department,
    EntryImpact,
    EntryType,
    FundKey,
    normalize_number,
    normalize_record,
    to_iso_date,
)

TODAY = "2024-06-01"

MALFORMED_RECORDS = [
    {},
    {"amount": "abc", "type": "income", "fund": "Operational", "impact": "available_only"},
    {"amount": float("nan"), "type": None, "date": "not a date", "department": "XYZ"},
    {"amount": float("inf"), "fund": 42, "impact": ["AVAILABLE_ONLY"], "date": 1709596800000},
    {"id": "e1", "title": None, "amount": "125.5", "type": "INCOME", "date": "March 5, 2024"},
    {"title": "Venue", "amount": -40, "type": "EXPENSE", "fund": "trust", "createdAt": "later"},
    {"title": 7, "amount": True, "impact": "AVAILABLE_ONLY", "department": "msa", "date": "03/05/2024"},
    {"title": "Legacy", "amount": 10**400, "type": "INCOME", "date": 10**400, "createdAt": -(10**400)},
]


def test_malformed_record_falls_back_to_safe_defaults() -> None:
    """Unknown type, fund, impact, department and date are coerced, not rejected."""

    entry = normalize_record(
        {
            "title": "Legacy row",
            "amount": "abc",
            "type": "income",
            "fund": "Operational",
            "impact": "available_only",
            "date": "sometime",
            "department": "XYZ",
        },
        entry_id="legacy-1",
        today=TODAY,
    )

    assert entry.entry_id == "legacy-1"
    assert entry.amount == 0.0
    assert entry.entry_type is EntryType.EXPENSE
    assert entry.fund is None
    assert entry.impact is EntryImpact.LEDGER
    assert entry.date == TODAY
    assert entry.department is Department.SAMASA


def test_known_values_are_kept() -> None:
    """Valid stored values survive normalisation untouched."""

    entry = normalize_record(
        {
            "id": "e9",
            "title": "Unity Cup Venue",
            "amount": 45000,
            "type": "EXPENSE",
            "category": "Events",
            "department": "PSSS",
            "date": "2024-02-15",
            "approvedBy": "Governor",
            "fund": "project",
            "impact": "LEDGER",
            "createdAt": 1700000000.5,
        }
    )

    assert entry.entry_id == "e9"
    assert entry.amount == pytest.approx(45000.0)
    assert entry.fund is FundKey.PROJECT
    assert entry.department is Department.PSSS
    assert entry.approved_by == "Governor"
    assert entry.created_at == pytest.approx(1700000000.5)
    assert entry.updated_at is None


def test_date_coercion_accepts_common_formats() -> None:
    """Existing ISO dates pass through; other shapes are parsed or replaced by today."""

    assert to_iso_date("2024-03-05", today=TODAY) == "2024-03-05"
    assert to_iso_date("2024-03-05T22:10:00Z", today=TODAY) == "2024-03-05"
    assert to_iso_date("2024-03-05T22:10:00-05:00", today=TODAY) == "2024-03-06"
    assert to_iso_date("2024-03-06T01:30:00+08:00", today=TODAY) == "2024-03-05"
    assert to_iso_date("March 5, 2024", today=TODAY) == "2024-03-05"
    assert to_iso_date("03/05/2024", today=TODAY) == "2024-03-05"
    assert to_iso_date("", today=TODAY) == TODAY
    assert to_iso_date(None, today=TODAY) == TODAY
    assert to_iso_date("31st of never", today=TODAY) == TODAY
    assert to_iso_date(float("nan"), today=TODAY) == TODAY


def test_normalize_number_rejects_non_finite_values() -> None:
    assert normalize_number("12.5") == pytest.approx(12.5)
    assert normalize_number(" 3 ") == pytest.approx(3.0)
    for value in (None, "abc", float("nan"), float("inf"), "-inf", [1], True, 10**400):
        result = normalize_number(value)
        assert result == 0.0 and math.isfinite(result)


@pytest.mark.parametrize("raw", MALFORMED_RECORDS)
def test_normalisation_is_idempotent(raw: dict) -> None:
    """normalize(normalize(x)) equals normalize(x) for arbitrary malformed input."""

    once = normalize_record(raw, today=TODAY)
    twice = normalize_record(once, today=TODAY)
    from_record = normalize_record(once.as_record(), today=TODAY)

    assert isinstance(once, BudgetEntry)
    assert twice == once
    assert from_record == once


def test_oversized_stored_amount_reads_as_zero() -> None:
    entry = normalize_record({"title": "Legacy", "amount": 10**400, "type": "INCOME"}, today=TODAY)

    assert entry.amount == 0.0
    assert entry.entry_type is EntryType.INCOME
