"""Mini README: Record drafts and write-path validation.

Structure:
    * RecordMode - what the editor is recording: income, an expense, or an
      available-balance adjustment.
    * RecordDraft - raw form values as entered by an editor.
    * build_entry_payload - validate a draft and produce the stored document.

Validation happens before anything reaches the repository. A rejected draft
raises ``ValidationError`` and nothing is written.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import ValidationError
from .models import ALL_SCOPE, Department, EntryImpact, EntryType, FundKey
from .normalization import to_iso_date

DEFAULT_CATEGORIES = {
    "INCOME": "Income",
    "EXPENSE": "Expense",
    "AVAILABLE_ONLY": "Balance Adjustment",
}


class RecordMode(str, Enum):
    """Kinds of record an editor can enter."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    AVAILABLE_ONLY = "AVAILABLE_ONLY"

    @classmethod
    def from_str(cls, value: str) -> "RecordMode":
        try:
            return cls(value.strip().upper())
        except (ValueError, AttributeError) as error:
            raise ValidationError(f"Unsupported record mode: {value}") from error


@dataclass(slots=True)
class RecordDraft:
    """Unvalidated values from the record form."""

    mode: RecordMode
    title: str
    amount: Any
    department: Any
    date: Optional[str] = None
    category: str = ""
    fund: Optional[str] = None


def _parse_amount(value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError("Amount must be a number.")
    try:
        amount = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError) as error:
        raise ValidationError("Amount must be a number.") from error
    if not math.isfinite(amount) or amount == 0:
        raise ValidationError("Amount must not be 0.")
    if amount < 0:
        raise ValidationError("Amount must be positive; the record type sets the sign.")
    return amount


def _parse_department(value: Any) -> Department:
    if isinstance(value, Department):
        return value
    text = "" if value is None else str(value).strip()
    if text.upper() == ALL_SCOPE:
        raise ValidationError("Pick a specific department; Overall is a view, not a department.")
    try:
        return Department.from_str(text)
    except ValueError as error:
        raise ValidationError(str(error)) from error


def _parse_fund(value: Any) -> Optional[FundKey]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, FundKey):
        return value
    try:
        return FundKey.from_str(str(value))
    except ValueError as error:
        raise ValidationError(str(error)) from error


def build_entry_payload(
    draft: RecordDraft,
    editor_name: str,
    *,
    today: Optional[str] = None,
) -> Dict[str, Any]:
    """Validate ``draft`` and return the document to store.

    Timestamps are left to the repository so creation and update can stamp
    them differently.
    """

    mode = draft.mode if isinstance(draft.mode, RecordMode) else RecordMode.from_str(str(draft.mode))
    title = (draft.title or "").strip()
    if not title:
        raise ValidationError("Description is required.")
    amount = _parse_amount(draft.amount)
    department = _parse_department(draft.department)
    # The fund selector only applies to expenses; other modes ignore it.
    fund = _parse_fund(draft.fund) if mode is RecordMode.EXPENSE else None
    if mode is RecordMode.EXPENSE and fund is None:
        raise ValidationError("Pick Operational / Project / Trust for Expense.")

    category = (draft.category or "").strip() or DEFAULT_CATEGORIES[mode.value]
    raw_date = (draft.date or "").strip() if isinstance(draft.date, str) else draft.date
    payload: Dict[str, Any] = {
        "title": title,
        "amount": amount,
        "department": department.value,
        "date": to_iso_date(raw_date, today=today),
        "approvedBy": editor_name,
        "category": category,
    }
    if mode is RecordMode.AVAILABLE_ONLY:
        payload["impact"] = EntryImpact.AVAILABLE_ONLY.value
        payload["type"] = EntryType.INCOME.value
        payload["fund"] = None
    else:
        payload["impact"] = EntryImpact.LEDGER.value
        payload["type"] = mode.value
        payload["fund"] = fund.value if fund else None
    return payload
