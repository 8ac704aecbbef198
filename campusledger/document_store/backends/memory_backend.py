"""Mini README: Simulated real-time document store held in memory.

Structure:
    * InMemoryDocumentStore - ``DocumentStore`` backend used for local runs,
      demos, and tests.

The backend mimics the hosted store closely enough for the ledger: each
write replaces ``SERVER_TIMESTAMP`` fields with a non-decreasing clock,
every subscriber of the collection receives the full ordered snapshot after
each change, and ``emit_error`` pushes a subscription failure the way a
revoked permission or dropped connection would, detaching the listeners.
``set_offline`` makes writes fail with ``TransportError``.
"""

from __future__ import annotations

import copy
import itertools
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ...errors import TransportError
from ...logging_utils import get_logger
from ..base import (
    SERVER_TIMESTAMP,
    DocumentStore,
    ErrorCallback,
    SnapshotCallback,
    StoredDocument,
    Unsubscribe,
)
from ..registry import REGISTRY

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class _Document:
    data: Dict[str, Any]
    sequence: int


@dataclass(slots=True)
class _Subscription:
    collection: str
    on_snapshot: SnapshotCallback
    on_error: Optional[ErrorCallback]
    order_by: Optional[str]
    descending: bool
    active: bool = True


class InMemoryDocumentStore(DocumentStore):
    """Dictionary-backed store with push notifications."""

    backend_name = "memory"

    def __init__(self, connection_string: Optional[str] = None) -> None:
        super().__init__(connection_string=connection_string)
        self._collections: Dict[str, Dict[str, _Document]] = {}
        self._subscriptions: List[_Subscription] = []
        self._sequence = itertools.count(1)
        self._last_timestamp = 0.0
        self._offline = False

    # -- clock -----------------------------------------------------------

    def _now(self) -> float:
        self._last_timestamp = max(time.time(), self._last_timestamp)
        return self._last_timestamp

    def _stamp(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        now = self._now()
        return {
            key: now if value is SERVER_TIMESTAMP else copy.deepcopy(value)
            for key, value in record.items()
        }

    # -- reads -----------------------------------------------------------

    def _ordered(self, subscription: _Subscription) -> Tuple[StoredDocument, ...]:
        documents = self._collections.get(subscription.collection, {})
        items = list(documents.items())
        if subscription.order_by:
            field_name = subscription.order_by

            def sort_key(item: Tuple[str, _Document]) -> Tuple[float, int]:
                value = item[1].data.get(field_name)
                return (float("-inf") if value is None else value, item[1].sequence)

        else:

            def sort_key(item: Tuple[str, _Document]) -> Tuple[float, int]:
                return (0.0, item[1].sequence)

        items.sort(key=sort_key, reverse=subscription.descending)
        return tuple(
            StoredDocument(document_id=document_id, data=copy.deepcopy(document.data))
            for document_id, document in items
        )

    def subscribe(
        self,
        collection: str,
        on_snapshot: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Unsubscribe:
        subscription = _Subscription(
            collection=collection,
            on_snapshot=on_snapshot,
            on_error=on_error,
            order_by=order_by,
            descending=descending,
        )
        self._subscriptions.append(subscription)
        LOGGER.debug("Subscribed to '%s' (order_by=%s desc=%s)", collection, order_by, descending)
        on_snapshot(self._ordered(subscription))

        def unsubscribe() -> None:
            if not subscription.active:
                return
            subscription.active = False
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)
            LOGGER.debug("Unsubscribed from '%s'", collection)

        return unsubscribe

    def get(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        """Return a copy of one document, or ``None`` when absent."""

        document = self._collections.get(collection, {}).get(document_id)
        return copy.deepcopy(document.data) if document else None

    def count(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))

    # -- writes ----------------------------------------------------------

    def _ensure_online(self, operation: str, collection: str) -> None:
        if self._offline:
            raise TransportError(
                f"Document store is offline; {operation} on '{collection}' failed",
                operation=operation,
                collection=collection,
            )

    def create(self, collection: str, record: Mapping[str, Any]) -> str:
        self._ensure_online("create", collection)
        document_id = uuid.uuid4().hex[:20]
        self._collections.setdefault(collection, {})[document_id] = _Document(
            data=self._stamp(record), sequence=next(self._sequence)
        )
        LOGGER.debug("Created %s/%s", collection, document_id)
        self._broadcast(collection)
        return document_id

    def set(self, collection: str, document_id: str, record: Mapping[str, Any]) -> None:
        """Create or fully replace a document under a caller-chosen identifier."""

        self._ensure_online("set", collection)
        documents = self._collections.setdefault(collection, {})
        existing = documents.get(document_id)
        sequence = existing.sequence if existing else next(self._sequence)
        documents[document_id] = _Document(data=self._stamp(record), sequence=sequence)
        self._broadcast(collection)

    def update(self, collection: str, document_id: str, record: Mapping[str, Any]) -> None:
        self._ensure_online("update", collection)
        document = self._collections.get(collection, {}).get(document_id)
        if document is None:
            raise TransportError(
                f"No document to update: {collection}/{document_id}",
                operation="update",
                collection=collection,
            )
        document.data.update(self._stamp(record))
        LOGGER.debug("Updated %s/%s", collection, document_id)
        self._broadcast(collection)

    def delete(self, collection: str, document_id: str) -> None:
        self._ensure_online("delete", collection)
        removed = self._collections.get(collection, {}).pop(document_id, None)
        if removed is None:
            return
        LOGGER.debug("Deleted %s/%s", collection, document_id)
        self._broadcast(collection)

    # -- simulation hooks ------------------------------------------------

    def set_offline(self, offline: bool = True) -> None:
        """Make subsequent writes fail until switched back online."""

        self._offline = offline
        LOGGER.info("Memory store is now %s", "offline" if offline else "online")

    def emit_error(self, collection: str, error: Exception) -> None:
        """Fail every listener on ``collection`` and detach it."""

        failed = [sub for sub in self._subscriptions if sub.collection == collection]
        for subscription in failed:
            subscription.active = False
            self._subscriptions.remove(subscription)
        LOGGER.warning("Subscription error on '%s': %s", collection, error)
        for subscription in failed:
            if subscription.on_error is not None:
                subscription.on_error(error)

    def _broadcast(self, collection: str) -> None:
        for subscription in list(self._subscriptions):
            if subscription.active and subscription.collection == collection:
                subscription.on_snapshot(self._ordered(subscription))


REGISTRY.register(InMemoryDocumentStore)
