"""Mini README: Typed ledger entities shared by every ledger module.

Structure:
    * EntryType / EntryImpact / FundKey / Department - explicit enums for the
      loosely-typed fields of stored records.
    * ViewerRole - portal roles used by the visibility policy.
    * BudgetEntry - one normalised ledger line item.
    * BudgetOverride - additive top-line correction for a scope.
    * ALL_SCOPE - the organisation-wide scope key.

Entities are frozen so consumers cannot mutate the shared snapshot in place.
Amounts are stored unsigned; the sign comes from ``entry_type``/``impact``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

ALL_SCOPE = "ALL"


class EntryType(str, Enum):
    """Direction of a ledger entry."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class EntryImpact(str, Enum):
    """Whether an entry moves the full ledger or only the available balance."""

    LEDGER = "LEDGER"
    AVAILABLE_ONLY = "AVAILABLE_ONLY"


class FundKey(str, Enum):
    """Earmarked expenditure funds."""

    OPERATIONAL = "operational"
    PROJECT = "project"
    TRUST = "trust"

    @classmethod
    def from_str(cls, value: str) -> "FundKey":
        """Coerce arbitrary casing into a valid fund key."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported fund: {value}") from error


class Department(str, Enum):
    """Organisational units that own ledger entries."""

    SAMASA = "SAMASA"
    MSA = "MSA"
    PSSS = "PSSS"
    LALISA = "LALISA"
    MSSA = "MSSA"
    PASS = "PASS"

    @classmethod
    def from_str(cls, value: str) -> "Department":
        """Coerce arbitrary casing into a valid department."""

        try:
            return cls(value.strip().upper())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported department: {value}") from error


class ViewerRole(str, Enum):
    """Portal roles; superadmins and officers are privileged."""

    SUPERADMIN = "SUPERADMIN"
    OFFICER = "OFFICER"
    STUDENT = "STUDENT"

    @property
    def is_privileged(self) -> bool:
        return self in (ViewerRole.SUPERADMIN, ViewerRole.OFFICER)

    @classmethod
    def from_str(cls, value: str) -> "ViewerRole":
        """Coerce arbitrary casing into a role, rejecting unknown names."""

        try:
            return cls(value.strip().upper())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported viewer role: {value}") from error


Scope = Union[Department, str]


def scope_key(scope: Optional[Scope]) -> str:
    """Return the canonical key for a department scope, ``ALL`` when omitted."""

    if scope is None:
        return ALL_SCOPE
    if isinstance(scope, Department):
        return scope.value
    text = str(scope).strip()
    if not text or text.upper() == ALL_SCOPE:
        return ALL_SCOPE
    return Department.from_str(text).value


@dataclass(frozen=True, slots=True)
class BudgetEntry:
    """A normalised ledger line item."""

    entry_id: str
    title: str
    amount: float
    entry_type: EntryType
    category: str
    department: Department
    date: str
    approved_by: str
    fund: Optional[FundKey] = None
    impact: EntryImpact = EntryImpact.LEDGER
    created_at: Optional[float] = None
    updated_at: Optional[float] = None

    @property
    def signed_amount(self) -> float:
        """Amount with the display sign; available-only entries count positive."""

        if self.impact is EntryImpact.LEDGER and self.entry_type is EntryType.EXPENSE:
            return -self.amount
        return self.amount

    def search_text(self) -> str:
        """Lower-cased haystack used by the table search."""

        fund = self.fund.value if self.fund else ""
        return " ".join(
            [
                self.title,
                self.category,
                self.department.value,
                self.date,
                self.entry_type.value,
                fund,
                self.impact.value,
            ]
        ).lower()

    def as_record(self) -> Dict[str, object]:
        """Export using the stored document field names."""

        record: Dict[str, object] = {
            "id": self.entry_id,
            "title": self.title,
            "amount": self.amount,
            "type": self.entry_type.value,
            "category": self.category,
            "department": self.department.value,
            "date": self.date,
            "approvedBy": self.approved_by,
            "impact": self.impact.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.fund is not None:
            record["fund"] = self.fund.value
        return record


@dataclass(frozen=True, slots=True)
class BudgetOverride:
    """Manual deltas added to a scope's top-line aggregates."""

    available: float = 0.0
    revenue: float = 0.0
    expenditure: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "available": self.available,
            "revenue": self.revenue,
            "expenditure": self.expenditure,
        }


ZERO_OVERRIDE = BudgetOverride()
