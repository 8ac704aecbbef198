"""Mini README: Live budget board combining entries, overrides, and views.

Structure:
    * BudgetBoard - owns the single in-memory snapshot fed by the entry
      repository and the override layer, recomputes aggregates on every
      notification, and guards the write path.
    * LedgerView - one client's table state (scope, search, page) that
      re-clamps itself whenever the snapshot changes.

Recomputation is synchronous and never touches the store; it only reads the
immutable tuple delivered by the last notification. Concurrent edits to the
same entry are last-write-wins at the store and go undetected here.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from ..configuration import CampusLedgerSettings, get_settings
from ..document_store import REGISTRY, DocumentStore
from ..errors import PermissionDeniedError
from ..logging_utils import get_logger
from .aggregation import LedgerTotals, compute_totals
from .demo import seed_demo_entries
from .drafts import RecordDraft, build_entry_payload
from .models import ALL_SCOPE, BudgetEntry, Department, Scope, ViewerRole, scope_key
from .overrides import OverrideLayer
from .repository import EntryRepository, Snapshot
from .visibility import LedgerPage, can_manage, paginate_entries

LOGGER = get_logger(__name__)

Listener = Callable[["BudgetBoard"], None]


class BudgetBoard:
    """Shared, live view of the ledger for one process."""

    def __init__(
        self,
        repository: EntryRepository,
        overrides: OverrideLayer,
        *,
        page_size: int = 10,
        recent_limit: int = 4,
        editable: bool = True,
    ) -> None:
        self._repository = repository
        self._overrides = overrides
        self.page_size = page_size
        self.recent_limit = recent_limit
        self.editable = editable
        self._entries: Snapshot = ()
        self._entry_error: Optional[Exception] = None
        self._overall: LedgerTotals = compute_totals((), ALL_SCOPE)
        self._listeners: List[Listener] = []
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._closed = False
        overrides.add_listener(self._recompute)

    # -- lifecycle -------------------------------------------------------

    def open(self) -> "BudgetBoard":
        """Subscribe to entries and overrides."""

        if self._unsubscribe is not None:
            return self
        self._closed = False
        self._overrides.start()
        self._unsubscribe = self._repository.subscribe(self._on_entries)
        return self

    def close(self) -> None:
        """Stop all recomputation; safe to call repeatedly."""

        self._closed = True
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
            LOGGER.debug("Budget board closed")
        self._overrides.stop()

    def __enter__(self) -> "BudgetBoard":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- notifications ---------------------------------------------------

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after each recomputation; returns a remover."""

        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _on_entries(self, entries: Snapshot, error: Optional[Exception]) -> None:
        if self._closed:
            return
        self._entries = entries
        self._entry_error = error
        self._recompute()

    def _recompute(self) -> None:
        if self._closed:
            return
        self._overall = compute_totals(self._entries, ALL_SCOPE, self._overrides.resolve(ALL_SCOPE))
        LOGGER.debug(
            "Recomputed ledger: %s entries available=%.2f revenue=%.2f expenditure=%.2f stale=%s",
            len(self._entries),
            self._overall.available,
            self._overall.revenue,
            self._overall.expenditure,
            self.stale,
        )
        for listener in list(self._listeners):
            listener(self)

    # -- reads -----------------------------------------------------------

    @property
    def entries(self) -> Snapshot:
        return self._entries

    @property
    def last_error(self) -> Optional[Exception]:
        return self._entry_error or self._overrides.last_error

    @property
    def stale(self) -> bool:
        """True while the board serves data frozen by a subscription failure."""

        return self.last_error is not None

    @property
    def overall(self) -> LedgerTotals:
        return self._overall

    def totals(self, scope: Optional[Scope] = None) -> LedgerTotals:
        """Aggregates for ``scope`` with its override merged."""

        if scope_key(scope) == ALL_SCOPE:
            return self._overall
        return compute_totals(self._entries, scope, self._overrides.resolve(scope))

    def table(
        self,
        viewer: ViewerRole,
        *,
        scope: Optional[Scope] = None,
        search: str = "",
        page: int = 1,
    ) -> LedgerPage:
        return paginate_entries(
            self._entries,
            viewer,
            scope=scope,
            search=search,
            page=page,
            page_size=self.page_size,
        )

    def recent_activity(self, limit: Optional[int] = None) -> List[BudgetEntry]:
        """Newest entries across every department."""

        return list(self._entries[: limit or self.recent_limit])

    def find(self, entry_id: str) -> Optional[BudgetEntry]:
        for entry in self._entries:
            if entry.entry_id == entry_id:
                return entry
        return None

    # -- writes ----------------------------------------------------------

    def _require_manage(self, viewer: ViewerRole) -> None:
        if not can_manage(viewer, self.editable):
            raise PermissionDeniedError(f"{viewer.value} viewers cannot manage the budget ledger")

    def record(
        self,
        viewer: ViewerRole,
        editor_name: str,
        draft: RecordDraft,
        entry_id: Optional[str] = None,
    ) -> str:
        """Validate ``draft`` and create it, or overwrite ``entry_id``."""

        self._require_manage(viewer)
        payload = build_entry_payload(draft, editor_name)
        if entry_id is None:
            return self._repository.create(payload)

        existing = self.find(entry_id)
        if existing is not None and existing.approved_by and existing.approved_by != editor_name:
            # Attribution stays with whoever first approved the entry.
            payload["approvedBy"] = existing.approved_by
        self._repository.update(entry_id, payload)
        return entry_id

    def remove(self, viewer: ViewerRole, entry_id: str) -> None:
        self._require_manage(viewer)
        self._repository.delete(entry_id)


class LedgerView:
    """Table state for a single client, kept in range across updates."""

    def __init__(
        self,
        board: BudgetBoard,
        viewer: ViewerRole,
        *,
        scope: Optional[Scope] = None,
        search: str = "",
    ) -> None:
        self._board = board
        self.viewer = viewer
        self._scope = scope_key(scope)
        self._search = search
        self.page = 1
        self.current: LedgerPage = board.table(viewer, scope=self._scope, search=search)
        self.totals: LedgerTotals = board.totals(self._scope)
        self._detach = board.add_listener(lambda _board: self.refresh())

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def search(self) -> str:
        return self._search

    def set_scope(self, scope: Optional[Scope]) -> LedgerPage:
        """Switch department scope and start over at page one."""

        self._scope = scope_key(scope)
        self.page = 1
        return self.refresh()

    def set_search(self, search: str) -> LedgerPage:
        """Change the search text and start over at page one."""

        self._search = search
        self.page = 1
        return self.refresh()

    def go_to(self, page: int) -> LedgerPage:
        self.page = page
        return self.refresh()

    def refresh(self) -> LedgerPage:
        """Recompute the visible page and totals from the board snapshot."""

        self.current = self._board.table(
            self.viewer, scope=self._scope, search=self._search, page=self.page
        )
        self.page = self.current.page
        self.totals = self._board.totals(self._scope)
        return self.current

    def close(self) -> None:
        self._detach()


def create_board(
    settings: Optional[CampusLedgerSettings] = None,
    *,
    store: Optional[DocumentStore] = None,
) -> BudgetBoard:
    """Wire store, repository, and overrides from settings and open the board."""

    settings = settings or get_settings()
    store = store or REGISTRY.create(settings.store_backend)
    repository = EntryRepository(
        store,
        settings.entries_collection,
        default_department=Department.from_str(settings.default_department),
    )
    overrides = OverrideLayer(store, settings.overrides_collection)
    board = BudgetBoard(
        repository,
        overrides,
        page_size=settings.page_size,
        recent_limit=settings.recent_activity_limit,
    ).open()
    if settings.seed_demo_data and not board.entries:
        seed_demo_entries(repository)
    LOGGER.info(
        "Budget board ready on '%s' backend with %s entries",
        store.backend_name,
        len(board.entries),
    )
    return board
