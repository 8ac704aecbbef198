"""Mini README: Budget ledger and aggregation engine.

This package turns the shared entry collection into the numbers and tables
the portal shows: ``normalization`` converts stored records into typed
entries, ``aggregation`` computes the top-line cards and fund utilisation,
``visibility`` pages the table per viewer role, ``overrides`` merges manual
corrections, ``repository`` talks to the document store, and ``board``
keeps the live snapshot everything else reads from.
"""

from .aggregation import FundUtilization, LedgerTotals, compute_totals, entries_in_scope
from .board import BudgetBoard, LedgerView, create_board
from .drafts import RecordDraft, RecordMode, build_entry_payload
from .models import (
    ALL_SCOPE,
    BudgetEntry,
    BudgetOverride,
    Department,
    EntryImpact,
    EntryType,
    FundKey,
    ViewerRole,
)
from .normalization import normalize_number, normalize_record, to_iso_date
from .overrides import OverrideLayer, parse_override
from .repository import EntryRepository
from .visibility import LedgerPage, can_manage, filter_entries, paginate_entries

__all__ = [
    "ALL_SCOPE",
    "BudgetBoard",
    "BudgetEntry",
    "BudgetOverride",
    "Department",
    "EntryImpact",
    "EntryRepository",
    "EntryType",
    "FundKey",
    "FundUtilization",
    "LedgerPage",
    "LedgerTotals",
    "LedgerView",
    "OverrideLayer",
    "RecordDraft",
    "RecordMode",
    "ViewerRole",
    "build_entry_payload",
    "can_manage",
    "compute_totals",
    "create_board",
    "entries_in_scope",
    "filter_entries",
    "normalize_number",
    "normalize_record",
    "paginate_entries",
    "parse_override",
    "to_iso_date",
]
