"""Mini README: Abstract contract for the real-time document store.

Structure:
    * SERVER_TIMESTAMP - sentinel replaced by the store with its own clock.
    * StoredDocument - a document identifier paired with its data.
    * DocumentStore - abstract interface implemented by store backends.

The ledger never talks to a transport directly. Backends push the complete,
ordered contents of a collection to every subscriber after each change and
report subscription failures through the ``on_error`` callback. Write
failures are raised as ``TransportError``; backends do not retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class _ServerTimestamp:
    """Placeholder asking the backend to stamp a field on write."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True, slots=True)
class StoredDocument:
    """A document as delivered to subscribers."""

    document_id: str
    data: Dict[str, Any] = field(default_factory=dict)


SnapshotCallback = Callable[[Sequence[StoredDocument]], None]
ErrorCallback = Callable[[Exception], None]
Unsubscribe = Callable[[], None]


class DocumentStore(ABC):
    """Base interface for document store backends."""

    backend_name: str = "generic"

    def __init__(self, connection_string: Optional[str] = None) -> None:
        self.connection_string = connection_string
        LOGGER.debug(
            "Initialising %s document store with connection '%s'",
            self.backend_name,
            connection_string,
        )

    @abstractmethod
    def subscribe(
        self,
        collection: str,
        on_snapshot: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Unsubscribe:
        """Push every snapshot of ``collection`` until the returned callable runs."""

    @abstractmethod
    def create(self, collection: str, record: Mapping[str, Any]) -> str:
        """Insert a new document and return its generated identifier."""

    @abstractmethod
    def update(self, collection: str, document_id: str, record: Mapping[str, Any]) -> None:
        """Overwrite the given fields of an existing document."""

    @abstractmethod
    def delete(self, collection: str, document_id: str) -> None:
        """Remove a document permanently."""

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for status endpoints."""

        return {
            "backend": self.backend_name,
            "connection": self.connection_string or "not configured",
        }
