"""Mini README: Override layer resolving per-scope top-line corrections.

Structure:
    * parse_override - coerce a stored override document to ``BudgetOverride``.
    * OverrideLayer - live, scope-keyed cache fed by the overrides collection.

Override documents are keyed by scope (a department id or ``ALL``) and store
``{"top": {"available", "revenue", "expenditure"}}``; a flat document with
the same three keys is read too. Missing scopes and missing fields resolve
to zero so stored overrides stay interpretable. Writing overrides belongs
to the editor surface, not this layer.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..document_store.base import DocumentStore, StoredDocument, Unsubscribe
from ..logging_utils import get_logger
from .models import ZERO_OVERRIDE, BudgetOverride, Scope, scope_key
from .normalization import normalize_number

LOGGER = get_logger(__name__)


def parse_override(record: Optional[Mapping[str, Any]]) -> BudgetOverride:
    """Read an override document, treating absent values as zero."""

    if not record:
        return ZERO_OVERRIDE
    values = record.get("top")
    if not isinstance(values, Mapping):
        values = record
    return BudgetOverride(
        available=normalize_number(values.get("available")),
        revenue=normalize_number(values.get("revenue")),
        expenditure=normalize_number(values.get("expenditure")),
    )


class OverrideLayer:
    """Keep the latest override per scope and notify on change."""

    def __init__(self, store: DocumentStore, collection: str) -> None:
        self._store = store
        self._collection = collection
        self._overrides: Dict[str, BudgetOverride] = {}
        self._unsubscribe: Optional[Unsubscribe] = None
        self._listeners: List[Callable[[], None]] = []
        self.last_error: Optional[Exception] = None

    def start(self) -> None:
        """Begin listening to the overrides collection."""

        if self._unsubscribe is not None:
            return
        self._unsubscribe = self._store.subscribe(
            self._collection, self._on_snapshot, self._on_error
        )

    def stop(self) -> None:
        """Stop listening; safe to call repeatedly."""

        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def resolve(self, scope: Optional[Scope]) -> BudgetOverride:
        """Return the override for ``scope``, zero when none is stored."""

        return self._overrides.get(scope_key(scope), ZERO_OVERRIDE)

    def _on_snapshot(self, documents: Sequence[StoredDocument]) -> None:
        self._overrides = {
            document.document_id: parse_override(document.data) for document in documents
        }
        self.last_error = None
        LOGGER.debug("Override snapshot received for scopes %s", sorted(self._overrides))
        self._notify()

    def _on_error(self, error: Exception) -> None:
        # Keep the last good overrides; the error is reported to listeners.
        LOGGER.warning("Override subscription failed, keeping last snapshot: %s", error)
        self.last_error = error
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
