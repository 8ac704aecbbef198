"""Mini README: Entry repository over the document store.

Structure:
    * EntryRepository - create/update/delete single entry documents and
      stream the full, normalised entry set to subscribers.

Subscribers always receive the complete current snapshot ordered newest
created first and should replace their local copy with it. When the store
reports a subscription failure the callback fires again with the last good
snapshot and the error; nothing is retried here. Write failures surface as
``TransportError`` from the store, unchanged.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from ..document_store.base import SERVER_TIMESTAMP, DocumentStore, StoredDocument, Unsubscribe
from ..logging_utils import get_logger
from .models import BudgetEntry, Department
from .normalization import normalize_record

LOGGER = get_logger(__name__)

Snapshot = Tuple[BudgetEntry, ...]
EntryCallback = Callable[[Snapshot, Optional[Exception]], None]


class EntryRepository:
    """Canonical access point for ledger entry documents."""

    def __init__(
        self,
        store: DocumentStore,
        collection: str = "budgetEntries",
        *,
        default_department: Department = Department.SAMASA,
    ) -> None:
        self._store = store
        self._collection = collection
        self._default_department = default_department

    @property
    def collection(self) -> str:
        return self._collection

    def create(self, payload: Mapping[str, Any]) -> str:
        """Store a new entry and return its identifier."""

        record: Dict[str, Any] = dict(payload)
        record.pop("id", None)
        record["createdAt"] = SERVER_TIMESTAMP
        record["updatedAt"] = SERVER_TIMESTAMP
        entry_id = self._store.create(self._collection, record)
        LOGGER.info("Created budget entry %s (%s)", entry_id, record.get("title"))
        return entry_id

    def update(self, entry_id: str, payload: Mapping[str, Any]) -> None:
        """Overwrite an entry's fields; the creation timestamp is kept."""

        record: Dict[str, Any] = dict(payload)
        record.pop("id", None)
        record.pop("createdAt", None)
        record["updatedAt"] = SERVER_TIMESTAMP
        self._store.update(self._collection, entry_id, record)
        LOGGER.info("Updated budget entry %s", entry_id)

    def delete(self, entry_id: str) -> None:
        """Delete an entry permanently."""

        self._store.delete(self._collection, entry_id)
        LOGGER.info("Deleted budget entry %s", entry_id)

    def subscribe(self, callback: EntryCallback) -> Unsubscribe:
        """Stream normalised snapshots to ``callback`` until unsubscribed."""

        last_good: Snapshot = ()

        def on_snapshot(documents: Sequence[StoredDocument]) -> None:
            nonlocal last_good
            last_good = tuple(
                normalize_record(
                    document.data,
                    entry_id=document.document_id,
                    default_department=self._default_department,
                )
                for document in documents
            )
            callback(last_good, None)

        def on_error(error: Exception) -> None:
            LOGGER.warning(
                "Entry subscription on '%s' failed; serving %s cached entries: %s",
                self._collection,
                len(last_good),
                error,
            )
            callback(last_good, error)

        return self._store.subscribe(
            self._collection,
            on_snapshot,
            on_error,
            order_by="createdAt",
            descending=True,
        )
