"""Mini README: Role-scoped visibility and pagination of the ledger table.

Structure:
    * can_manage - whether a viewer may create, edit, or delete entries.
    * filter_entries - scope filter followed by case-insensitive search.
    * clamp_page - keeps a requested page inside ``[1, page_count]``.
    * LedgerPage - the slice handed to a table plus its caption numbers.
    * paginate_entries - applies the whole policy for one viewer.

Privileged viewers page through the full history. Everyone else sees the
newest page only and is told when older rows are being withheld.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .aggregation import entries_in_scope
from .models import BudgetEntry, Scope, ViewerRole, scope_key


def can_manage(viewer: ViewerRole, editable: bool = True) -> bool:
    """Writes need a privileged role on an editable surface."""

    return editable and viewer.is_privileged


def filter_entries(
    entries: Iterable[BudgetEntry],
    *,
    scope: Optional[Scope] = None,
    search: str = "",
) -> List[BudgetEntry]:
    """Return scope entries whose searchable text contains ``search``."""

    scoped = entries_in_scope(entries, scope)
    needle = (search or "").strip().lower()
    if not needle:
        return scoped
    return [entry for entry in scoped if needle in entry.search_text()]


def page_count_for(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def clamp_page(page: int, page_count: int) -> int:
    return max(1, min(page_count, page))


@dataclass(frozen=True, slots=True)
class LedgerPage:
    """A single page of the ledger table."""

    entries: Tuple[BudgetEntry, ...]
    page: int
    page_count: int
    page_size: int
    total: int
    visible_from: int
    visible_to: int
    withheld: bool
    scope: str
    search: str

    @property
    def caption(self) -> str:
        """Footer text such as ``Showing 1-10 of 25 (latest 10)``."""

        text = f"Showing {self.visible_from}-{self.visible_to} of {self.total}"
        if self.withheld:
            text += f" (latest {self.page_size})"
        return text

    def as_dict(self) -> Dict[str, object]:
        return {
            "entries": [
                {**entry.as_record(), "signedAmount": entry.signed_amount}
                for entry in self.entries
            ],
            "page": self.page,
            "page_count": self.page_count,
            "page_size": self.page_size,
            "total": self.total,
            "visible_from": self.visible_from,
            "visible_to": self.visible_to,
            "withheld": self.withheld,
            "scope": self.scope,
            "search": self.search,
            "caption": self.caption,
        }


def paginate_entries(
    entries: Sequence[BudgetEntry],
    viewer: ViewerRole,
    *,
    scope: Optional[Scope] = None,
    search: str = "",
    page: int = 1,
    page_size: int = 10,
) -> LedgerPage:
    """Filter, paginate, and cap ``entries`` for ``viewer``."""

    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    matching = filter_entries(entries, scope=scope, search=search)
    total = len(matching)

    if viewer.is_privileged:
        page_count = page_count_for(total, page_size)
        current = clamp_page(page, page_count)
        withheld = False
    else:
        page_count = 1
        current = 1
        withheld = total > page_size

    start = (current - 1) * page_size
    window = tuple(matching[start : start + page_size])
    return LedgerPage(
        entries=window,
        page=current,
        page_count=page_count,
        page_size=page_size,
        total=total,
        visible_from=start + 1 if window else 0,
        visible_to=start + len(window),
        withheld=withheld,
        scope=scope_key(scope),
        search=search,
    )
