"""Mini README: Interfaces (HTTP/CLI) for Campus Ledger.

Exports the FastAPI application factory that serves the budget ledger.
The Typer launcher in ``main_budget_centre.py`` wraps it for operators.
"""

from .web_app import create_application

__all__ = ["create_application"]
