"""Mini README: Centralised configuration models and helpers for Campus Ledger.

Structure:
    * CampusLedgerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefix
    ``CAMPUSLEDGER_``), pick the document store backend, tune the table page
    size, and specify service ports. The configuration is cached so the cost
    of validation is incurred only once per process.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class CampusLedgerSettings(BaseSettings):
    """Runtime configuration for the Campus Ledger service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    page_size: int = Field(
        10,
        description="Rows per ledger table page; public viewers only ever see one page.",
        ge=1,
    )
    recent_activity_limit: int = Field(
        4,
        description="Number of newest entries shown in the recent activity feed.",
        ge=1,
    )
    entries_collection: str = Field(
        "budgetEntries",
        description="Document store collection holding ledger entries.",
    )
    overrides_collection: str = Field(
        "budgetOverrides",
        description="Document store collection holding per-scope overrides.",
    )
    store_backend: str = Field(
        "memory",
        description="Identifier of the registered document store backend.",
    )
    seed_demo_data: bool = Field(
        True,
        description="Populate an empty store with the demo ledger on startup.",
    )
    default_department: str = Field(
        "SAMASA",
        description="Department assigned to stored entries with a missing or unknown department.",
    )

    class Config:
        env_prefix = "CAMPUSLEDGER_"
        env_file = ".env"
        case_sensitive = False

    @validator("store_backend", "default_department", pre=True)
    def _strip_identifier(cls, value: object) -> str:
        """Trim whitespace around identifiers read from the environment."""

        return str(value).strip()

    @validator("default_department")
    def _known_department(cls, value: str) -> str:
        """Reject default departments outside the fixed organisational units."""

        from .ledger.models import Department

        try:
            return Department.from_str(value).value
        except ValueError as error:
            raise ValueError(f"Unknown default department: {value}") from error


@lru_cache()
def get_settings() -> CampusLedgerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return CampusLedgerSettings()
