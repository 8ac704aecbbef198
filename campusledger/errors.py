"""Mini README: Error taxonomy shared by the ledger and its store collaborator.

Structure:
    * LedgerError - base class for every error raised by Campus Ledger.
    * ValidationError - a record draft was rejected before any write.
    * TransportError - the document store failed a read or write.
    * PermissionDeniedError - the viewer may not manage the ledger.

Malformed stored data is never an error: it is coerced during
normalisation so legacy records stay readable.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for ledger failures."""


class ValidationError(LedgerError, ValueError):
    """Raised when a record draft fails validation; nothing is written."""


class TransportError(LedgerError):
    """Raised when the document store cannot complete an operation."""

    def __init__(self, message: str, *, operation: str = "", collection: str = "") -> None:
        super().__init__(message)
        self.operation = operation
        self.collection = collection


class PermissionDeniedError(LedgerError):
    """Raised when a viewer without management rights attempts a write."""
