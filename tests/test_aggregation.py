"""Mini README: Tests for the aggregation engine.

These tests pin the balance equation, the fund partition, and the way
overrides shift only their own cards.
"""

from __future__ import annotations

import random

import pytest

from campusledger.ledger import (
    BudgetEntry,
    BudgetOverride,
    Department,
    EntryImpact,
    EntryType,
    FundKey,
    compute_totals,
)


def _entry(
    entry_id: str,
    entry_type: EntryType,
    amount: float,
    *,
    impact: EntryImpact = EntryImpact.LEDGER,
    fund: FundKey | None = None,
    department: Department = Department.SAMASA,
) -> BudgetEntry:
    return BudgetEntry(
        entry_id=entry_id,
        title=f"Entry {entry_id}",
        amount=amount,
        entry_type=entry_type,
        category="Test",
        department=department,
        date="2024-05-01",
        approved_by="Treasurer",
        fund=fund,
        impact=impact,
    )


SCENARIO = [
    _entry("a", EntryType.INCOME, 1000),
    _entry("b", EntryType.EXPENSE, 300, fund=FundKey.OPERATIONAL),
    _entry("c", EntryType.INCOME, 50, impact=EntryImpact.AVAILABLE_ONLY),
]


def test_scenario_without_override() -> None:
    """Available-only entries raise the balance without counting as revenue."""

    totals = compute_totals(SCENARIO, "ALL", BudgetOverride())

    assert totals.revenue == pytest.approx(1000)
    assert totals.expenditure == pytest.approx(300)
    assert totals.available == pytest.approx(750)
    assert totals.fund_utilization.operational == pytest.approx(300)
    assert totals.fund_utilization.project == 0
    assert totals.fund_utilization.trust == 0


def test_available_override_only_moves_available() -> None:
    totals = compute_totals(SCENARIO, "ALL", BudgetOverride(available=200))

    assert totals.available == pytest.approx(950)
    assert totals.revenue == pytest.approx(1000)
    assert totals.expenditure == pytest.approx(300)


def test_revenue_and_expenditure_overrides_do_not_flow_into_available() -> None:
    """The override paths are independent: only override.available moves the balance."""

    totals = compute_totals(SCENARIO, None, BudgetOverride(revenue=500, expenditure=120))

    assert totals.revenue == pytest.approx(1500)
    assert totals.expenditure == pytest.approx(420)
    assert totals.available == pytest.approx(750)
    assert totals.fund_utilization.operational == pytest.approx(300)


def test_balance_equation_holds_for_random_sets_in_any_order() -> None:
    rng = random.Random(7)
    funds = list(FundKey)
    entries = []
    for index in range(200):
        kind = rng.choice(["income", "expense", "adjust"])
        amount = round(rng.uniform(1, 5000), 2)
        department = rng.choice(list(Department))
        if kind == "income":
            entries.append(_entry(str(index), EntryType.INCOME, amount, department=department))
        elif kind == "expense":
            entries.append(
                _entry(str(index), EntryType.EXPENSE, amount, fund=rng.choice(funds), department=department)
            )
        else:
            entries.append(
                _entry(str(index), EntryType.INCOME, amount, impact=EntryImpact.AVAILABLE_ONLY, department=department)
            )
    override = BudgetOverride(available=-75.5, revenue=10, expenditure=20)

    forward = compute_totals(entries, "ALL", override)
    shuffled = list(entries)
    rng.shuffle(shuffled)
    backward = compute_totals(shuffled, "ALL", override)

    expected = (
        forward.raw_revenue - forward.raw_expenditure + forward.available_adjustments + override.available
    )
    assert forward.available == pytest.approx(expected)
    assert backward.available == pytest.approx(forward.available)
    fund_sum = (
        forward.fund_utilization.operational
        + forward.fund_utilization.project
        + forward.fund_utilization.trust
    )
    assert fund_sum == pytest.approx(forward.raw_expenditure)
    assert forward.fund_utilization.unallocated == 0


def test_department_scope_filters_entries_and_uses_given_override() -> None:
    entries = [
        _entry("s1", EntryType.INCOME, 400, department=Department.SAMASA),
        _entry("m1", EntryType.INCOME, 900, department=Department.MSA),
        _entry("m2", EntryType.EXPENSE, 100, fund=FundKey.TRUST, department=Department.MSA),
    ]

    totals = compute_totals(entries, Department.MSA, BudgetOverride(available=5))

    assert totals.scope == "MSA"
    assert totals.entry_count == 2
    assert totals.revenue == pytest.approx(900)
    assert totals.available == pytest.approx(805)
    assert totals.fund_utilization.trust == pytest.approx(100)


def test_legacy_expense_without_fund_is_unallocated() -> None:
    """Expenses with no fund still count once, in the unallocated bucket."""

    entries = [
        _entry("x", EntryType.EXPENSE, 80),
        _entry("y", EntryType.EXPENSE, 20, fund=FundKey.PROJECT),
    ]

    totals = compute_totals(entries)

    assert totals.expenditure == pytest.approx(100)
    assert totals.fund_utilization.unallocated == pytest.approx(80)
    assert totals.fund_utilization.total == pytest.approx(totals.raw_expenditure)


def test_empty_ledger_is_all_zero() -> None:
    totals = compute_totals([], "ALL")

    assert totals.available == 0
    assert totals.revenue == 0
    assert totals.expenditure == 0
    assert totals.as_dict()["funds"] == {
        "operational": 0.0,
        "project": 0.0,
        "trust": 0.0,
        "unallocated": 0.0,
    }
