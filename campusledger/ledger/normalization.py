"""Mini README: Classification and normalisation of stored ledger records.

Structure:
    * normalize_number - finite float or zero.
    * to_iso_date - ``YYYY-MM-DD`` string, falling back to today.
    * normalize_record - the single conversion point from an untyped stored
      record to a ``BudgetEntry``.

Stored data is never rejected here. Legacy or hand-edited documents with a
bad amount, date, type, fund, impact or department are coerced to safe
defaults so the ledger stays readable. Normalising an already normalised
entry returns an equal entry.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional, Union

from ..logging_utils import get_logger
from .models import BudgetEntry, Department, EntryImpact, EntryType, FundKey

LOGGER = get_logger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_FALLBACK_DATE_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%a %b %d %Y",
)


def normalize_number(value: Any) -> float:
    """Return ``value`` as a finite float, or ``0.0`` when it is not one."""

    if isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _today() -> str:
    return date.today().isoformat()


def _utc_date(moment: datetime) -> date:
    """Calendar date of ``moment``; offset-aware values are read in UTC."""

    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


def _parse_date_text(text: str) -> Optional[date]:
    """Try ISO datetimes first, then a handful of human formats."""

    candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        parsed = None
    if parsed is not None:
        return _utc_date(parsed)
    for pattern in _FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(text, pattern).date()
        except ValueError:
            continue
    return None


def to_iso_date(value: Any, today: Optional[str] = None) -> str:
    """Coerce ``value`` to ``YYYY-MM-DD``; unparseable input becomes today."""

    fallback = today or _today()
    if isinstance(value, datetime):
        return _utc_date(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Numeric dates are epoch milliseconds, as the browser client stores them.
        try:
            if not math.isfinite(value):
                return fallback
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc).date().isoformat()
        except (OverflowError, OSError, ValueError):
            return fallback

    text = "" if value is None else str(value).strip()
    if not text:
        return fallback
    if _ISO_DATE.match(text):
        return text
    parsed = _parse_date_text(text)
    if parsed is None:
        LOGGER.debug("Unparseable entry date %r replaced with %s", text, fallback)
        return fallback
    return parsed.isoformat()


def _coerce_type(value: Any) -> EntryType:
    return EntryType.INCOME if value == EntryType.INCOME.value else EntryType.EXPENSE


def _coerce_impact(value: Any) -> EntryImpact:
    return EntryImpact.AVAILABLE_ONLY if value == EntryImpact.AVAILABLE_ONLY.value else EntryImpact.LEDGER


def _coerce_fund(value: Any) -> Optional[FundKey]:
    if isinstance(value, FundKey):
        return value
    try:
        return FundKey(value)
    except ValueError:
        return None


def _coerce_department(value: Any, default: Department) -> Department:
    if isinstance(value, Department):
        return value
    try:
        return Department(value)
    except ValueError:
        if value not in (None, ""):
            LOGGER.debug("Unknown department %r replaced with %s", value, default.value)
        return default


def _coerce_timestamp(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.timestamp()
    number = normalize_number(value)
    return number if number else None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def normalize_record(
    raw: Union[Mapping[str, Any], BudgetEntry],
    *,
    entry_id: Optional[str] = None,
    default_department: Department = Department.SAMASA,
    today: Optional[str] = None,
) -> BudgetEntry:
    """Convert a stored record (or an existing entry) into a ``BudgetEntry``.

    ``entry_id`` takes precedence over an ``id`` key inside the record, which
    mirrors stores that keep the document identifier outside its data.
    """

    if isinstance(raw, BudgetEntry):
        raw = raw.as_record()

    # str-based enum members compare equal to their stored string values.
    return BudgetEntry(
        entry_id=_text(entry_id if entry_id is not None else raw.get("id")),
        title=_text(raw.get("title")),
        amount=normalize_number(raw.get("amount")),
        entry_type=_coerce_type(raw.get("type")),
        category=_text(raw.get("category")),
        department=_coerce_department(raw.get("department"), default_department),
        date=to_iso_date(raw.get("date"), today=today),
        approved_by=_text(raw.get("approvedBy")),
        fund=_coerce_fund(raw.get("fund")),
        impact=_coerce_impact(raw.get("impact")),
        created_at=_coerce_timestamp(raw.get("createdAt")),
        updated_at=_coerce_timestamp(raw.get("updatedAt")),
    )
