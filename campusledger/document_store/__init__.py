"""Mini README: Document store subsystem package initialiser.

Re-exports the store contract and registry. The package is divided into
``base`` for the abstract interface, ``registry`` for backend lookup, and
``backends`` for concrete implementations.
"""

from .base import SERVER_TIMESTAMP, DocumentStore, StoredDocument, Unsubscribe
from .registry import REGISTRY, DocumentStoreRegistry
from . import backends  # noqa: F401  # ensure built-in backends register on import

__all__ = [
    "DocumentStore",
    "DocumentStoreRegistry",
    "REGISTRY",
    "SERVER_TIMESTAMP",
    "StoredDocument",
    "Unsubscribe",
]
