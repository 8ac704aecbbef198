"""Mini README: Deterministic demo ledger for local runs and previews.

Structure:
    * DEMO_ENTRIES - stored-shape records spread over the six departments.
    * seed_demo_entries - write the demo records through a repository.

The records are written oldest first so the newest-created ordering of the
live table matches their list order reversed.
"""

from __future__ import annotations

from typing import Dict, List

from ..logging_utils import get_logger
from .repository import EntryRepository

LOGGER = get_logger(__name__)

DEMO_ENTRIES: List[Dict[str, object]] = [
    {"title": "Quarterly Allocation", "amount": 250000, "type": "INCOME", "date": "2024-01-01",
     "category": "Operational", "approvedBy": "Admin", "department": "SAMASA"},
    {"title": "Unity Cup Venue", "amount": 45000, "type": "EXPENSE", "date": "2024-02-15",
     "category": "Events", "approvedBy": "Governor", "department": "SAMASA", "fund": "project"},
    {"title": "Office Supplies", "amount": 12000, "type": "EXPENSE", "date": "2024-03-05",
     "category": "Resources", "approvedBy": "Gen Sec", "department": "SAMASA", "fund": "operational"},
    {"title": "Workshop Materials", "amount": 15000, "type": "EXPENSE", "date": "2024-01-20",
     "category": "Resources", "approvedBy": "MSA Mayor", "department": "MSA", "fund": "project"},
    {"title": "MSA Fundraising", "amount": 30000, "type": "INCOME", "date": "2024-02-01",
     "category": "Operational", "approvedBy": "MSA Mayor", "department": "MSA"},
    {"title": "Seminar Expenses", "amount": 22000, "type": "EXPENSE", "date": "2024-03-10",
     "category": "Programs", "approvedBy": "PSSS Mayor", "department": "PSSS", "fund": "project"},
    {"title": "Department Grant", "amount": 50000, "type": "INCOME", "date": "2024-01-15",
     "category": "Operational", "approvedBy": "PSSS Mayor", "department": "PSSS"},
    {"title": "Art Exhibit Supplies", "amount": 18000, "type": "EXPENSE", "date": "2024-02-28",
     "category": "Programs", "approvedBy": "LALISA Mayor", "department": "LALISA", "fund": "project"},
    {"title": "Department Funding", "amount": 40000, "type": "INCOME", "date": "2024-01-10",
     "category": "Operational", "approvedBy": "LALISA Mayor", "department": "LALISA"},
    {"title": "Sports Equipment", "amount": 25000, "type": "EXPENSE", "date": "2024-03-15",
     "category": "Programs", "approvedBy": "MSSA Mayor", "department": "MSSA", "fund": "operational"},
    {"title": "MSSA Sponsorship", "amount": 35000, "type": "INCOME", "date": "2024-02-05",
     "category": "Operational", "approvedBy": "MSSA Mayor", "department": "MSSA"},
    {"title": "Pass Seminar Materials", "amount": 10000, "type": "EXPENSE", "date": "2024-03-20",
     "category": "Programs", "approvedBy": "PASS Mayor", "department": "PASS", "fund": "trust"},
    {"title": "Pass Funding", "amount": 20000, "type": "INCOME", "date": "2024-01-25",
     "category": "Operational", "approvedBy": "PASS Mayor", "department": "PASS"},
]


def seed_demo_entries(repository: EntryRepository) -> List[str]:
    """Write every demo record and return the new identifiers."""

    identifiers = [repository.create({**record, "impact": "LEDGER"}) for record in DEMO_ENTRIES]
    LOGGER.info("Seeded %s demo budget entries", len(identifiers))
    return identifiers
