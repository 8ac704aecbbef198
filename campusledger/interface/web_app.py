"""Mini README: FastAPI service exposing the live budget ledger.

Structure:
    * create_application - application factory wiring routes to a board.
    * Budget routes - summary cards, role-scoped table, recent activity,
      and record create/update/delete for privileged editors.

Authentication lives outside this service; callers pass the viewer role and
editor name they already resolved. Handlers are ``async`` so every board
access runs on the event loop thread.
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from fastapi import FastAPI, Form, HTTPException, Query
from fastapi.responses import JSONResponse

from ..configuration import get_settings
from ..errors import PermissionDeniedError, TransportError, ValidationError
from ..ledger import BudgetBoard, RecordDraft, RecordMode, ViewerRole, can_manage, create_board
from ..ledger.models import scope_key
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")


def _viewer(role: str) -> ViewerRole:
    try:
        return ViewerRole.from_str(role)
    except ValueError as error:
        raise HTTPException(status_code=400, detail=str(error)) from error


def _scope(department: str) -> str:
    try:
        return scope_key(department)
    except ValueError as error:
        raise HTTPException(status_code=400, detail=str(error)) from error


def create_application(board: Optional[BudgetBoard] = None) -> FastAPI:
    """Create the FastAPI application bound to ``board`` (or a configured one)."""

    app = FastAPI(title="Campus Ledger", version="0.3.0")
    settings = get_settings()
    budget_board = board or create_board(settings)
    app.state.board = budget_board

    @app.on_event("shutdown")
    async def close_board() -> None:
        budget_board.close()

    def _write(action: str, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        except PermissionDeniedError as error:
            raise HTTPException(status_code=403, detail=str(error)) from error
        except TransportError as error:
            LOGGER.error("Store rejected %s: %s", action, error)
            raise HTTPException(status_code=502, detail=str(error)) from error

    def _draft(
        mode: str, title: str, amount: str, department: str,
        date: Optional[str], category: Optional[str], fund: Optional[str],
    ) -> RecordDraft:
        try:
            record_mode = RecordMode.from_str(mode)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return RecordDraft(
            mode=record_mode,
            title=title,
            amount=amount,
            department=department,
            date=date,
            category=category or "",
            fund=fund,
        )

    @app.get("/")
    async def overview() -> JSONResponse:
        """Organisation-wide cards plus the newest activity."""

        totals = budget_board.overall
        LOGGER.debug(
            "Overview -> available: %.2f revenue: %.2f expenditure: %.2f",
            totals.available,
            totals.revenue,
            totals.expenditure,
        )
        return JSONResponse(
            {
                "totals": totals.as_dict(),
                "recent_activity": [entry.as_record() for entry in budget_board.recent_activity()],
                "stale": budget_board.stale,
                "environment": settings.environment,
            }
        )

    @app.get("/budget/summary")
    async def summary(department: str = Query("ALL")) -> JSONResponse:
        """Top-line cards and fund utilisation for one scope."""

        totals = budget_board.totals(_scope(department))
        payload = totals.as_dict()
        payload["stale"] = budget_board.stale
        if budget_board.last_error is not None:
            payload["error"] = str(budget_board.last_error)
        return JSONResponse(payload)

    @app.get("/budget/entries")
    async def entries(
        role: str = Query(ViewerRole.STUDENT.value),
        department: str = Query("ALL"),
        search: str = Query(""),
        page: int = Query(1),
    ) -> JSONResponse:
        """Role-scoped page of the ledger table."""

        viewer = _viewer(role)
        ledger_page = budget_board.table(viewer, scope=_scope(department), search=search, page=page)
        LOGGER.debug(
            "Table for %s scope=%s page=%s/%s rows=%s",
            viewer.value,
            ledger_page.scope,
            ledger_page.page,
            ledger_page.page_count,
            len(ledger_page.entries),
        )
        payload = ledger_page.as_dict()
        payload["can_manage"] = can_manage(viewer, budget_board.editable)
        return JSONResponse(payload)

    @app.get("/budget/recent")
    async def recent(limit: Optional[int] = Query(None, ge=1, le=50)) -> JSONResponse:
        return JSONResponse(
            {"entries": [entry.as_record() for entry in budget_board.recent_activity(limit)]}
        )

    @app.post("/budget/entries", status_code=201)
    async def create_entry(
        role: str = Form(...),
        editor_name: str = Form(...),
        mode: str = Form(...),
        title: str = Form(""),
        amount: str = Form(""),
        department: str = Form(...),
        date: Optional[str] = Form(None),
        category: Optional[str] = Form(None),
        fund: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Record a new entry on behalf of ``editor_name``."""

        viewer = _viewer(role)
        draft = _draft(mode, title, amount, department, date, category, fund)
        entry_id = _write("create", lambda: budget_board.record(viewer, editor_name, draft))
        LOGGER.info("Entry %s recorded by %s", entry_id, editor_name)
        return JSONResponse({"id": entry_id}, status_code=201)

    @app.put("/budget/entries/{entry_id}")
    async def update_entry(
        entry_id: str,
        role: str = Form(...),
        editor_name: str = Form(...),
        mode: str = Form(...),
        title: str = Form(""),
        amount: str = Form(""),
        department: str = Form(...),
        date: Optional[str] = Form(None),
        category: Optional[str] = Form(None),
        fund: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Overwrite every editable field of an existing entry."""

        viewer = _viewer(role)
        draft = _draft(mode, title, amount, department, date, category, fund)
        _write(
            "update",
            lambda: budget_board.record(viewer, editor_name, draft, entry_id=entry_id),
        )
        entry = budget_board.find(entry_id)
        return JSONResponse({"id": entry_id, "entry": entry.as_record() if entry else None})

    @app.delete("/budget/entries/{entry_id}")
    async def delete_entry(entry_id: str, role: str = Query(...)) -> JSONResponse:
        """Delete an entry permanently."""

        viewer = _viewer(role)
        _write("delete", lambda: budget_board.remove(viewer, entry_id))
        return JSONResponse({"id": entry_id, "deleted": True})

    return app
