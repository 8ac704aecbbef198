"""Mini README: Aggregation engine for ledger totals.

Structure:
    * FundUtilization - expenditure split across the three funds.
    * LedgerTotals - displayed top-line cards plus their raw components.
    * entries_in_scope - department filter shared with the table view.
    * compute_totals - single-pass aggregation with override merge.

The balance equation for a scope is::

    available = raw_revenue - raw_expenditure + available_adjustments
                + override.available

Override revenue/expenditure only shift their own cards. They are not folded
into ``available``; the two override paths are independent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .models import (
    ALL_SCOPE,
    ZERO_OVERRIDE,
    BudgetEntry,
    BudgetOverride,
    EntryImpact,
    EntryType,
    FundKey,
    Scope,
    scope_key,
)


@dataclass(frozen=True, slots=True)
class FundUtilization:
    """Ledger expenditure per fund.

    ``unallocated`` collects legacy expense entries stored without a fund so
    the four buckets always sum to the raw expenditure.
    """

    operational: float = 0.0
    project: float = 0.0
    trust: float = 0.0
    unallocated: float = 0.0

    @property
    def total(self) -> float:
        return self.operational + self.project + self.trust + self.unallocated

    def as_dict(self) -> Dict[str, float]:
        return {
            "operational": self.operational,
            "project": self.project,
            "trust": self.trust,
            "unallocated": self.unallocated,
        }


@dataclass(frozen=True, slots=True)
class LedgerTotals:
    """Aggregates for one scope, overrides already merged."""

    scope: str
    revenue: float
    expenditure: float
    available: float
    fund_utilization: FundUtilization
    raw_revenue: float
    raw_expenditure: float
    available_adjustments: float
    override: BudgetOverride
    entry_count: int

    def as_dict(self) -> Dict[str, object]:
        return {
            "scope": self.scope,
            "available": self.available,
            "revenue": self.revenue,
            "expenditure": self.expenditure,
            "funds": self.fund_utilization.as_dict(),
            "raw": {
                "revenue": self.raw_revenue,
                "expenditure": self.raw_expenditure,
                "available_adjustments": self.available_adjustments,
            },
            "override": self.override.as_dict(),
            "entry_count": self.entry_count,
        }


def entries_in_scope(entries: Iterable[BudgetEntry], scope: Optional[Scope]) -> List[BudgetEntry]:
    """Return entries belonging to ``scope``; ``ALL`` keeps everything."""

    key = scope_key(scope)
    if key == ALL_SCOPE:
        return list(entries)
    return [entry for entry in entries if entry.department.value == key]


def compute_totals(
    entries: Iterable[BudgetEntry],
    scope: Optional[Scope] = None,
    override: Optional[BudgetOverride] = None,
) -> LedgerTotals:
    """Aggregate ``entries`` for ``scope`` and merge the scope's override."""

    key = scope_key(scope)
    override = override or ZERO_OVERRIDE

    revenue = 0.0
    expenditure = 0.0
    adjustments = 0.0
    per_fund = {fund: 0.0 for fund in FundKey}
    unallocated = 0.0
    count = 0

    for entry in entries:
        if key != ALL_SCOPE and entry.department.value != key:
            continue
        count += 1
        if entry.impact is EntryImpact.AVAILABLE_ONLY:
            adjustments += entry.amount
        elif entry.entry_type is EntryType.INCOME:
            revenue += entry.amount
        else:
            expenditure += entry.amount
            if entry.fund is None:
                unallocated += entry.amount
            else:
                per_fund[entry.fund] += entry.amount

    return LedgerTotals(
        scope=key,
        revenue=revenue + override.revenue,
        expenditure=expenditure + override.expenditure,
        available=(revenue - expenditure) + adjustments + override.available,
        fund_utilization=FundUtilization(
            operational=per_fund[FundKey.OPERATIONAL],
            project=per_fund[FundKey.PROJECT],
            trust=per_fund[FundKey.TRUST],
            unallocated=unallocated,
        ),
        raw_revenue=revenue,
        raw_expenditure=expenditure,
        available_adjustments=adjustments,
        override=override,
        entry_count=count,
    )
