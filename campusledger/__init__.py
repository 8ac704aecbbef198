"""Mini README: Core package initializer for the Campus Ledger service.

Campus Ledger keeps the student-government budget ledger: it normalises
stored entries, aggregates revenue, expenditure and fund utilisation per
department, and serves a role-scoped table of the live ledger. Convenience
imports live here so callers do not need to know the module layout.
"""

from .errors import LedgerError, PermissionDeniedError, TransportError, ValidationError
from .logging_utils import get_logger

__all__ = [
    "LedgerError",
    "PermissionDeniedError",
    "TransportError",
    "ValidationError",
    "get_logger",
]
