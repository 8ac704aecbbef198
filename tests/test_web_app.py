"""Mini README: HTTP-level tests for the FastAPI budget service.

The application is bound to a board over a fresh in-memory store so every
test starts from an empty ledger.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from campusledger.document_store.backends import InMemoryDocumentStore
from campusledger.interface import create_application
from campusledger.ledger import BudgetBoard, EntryRepository, OverrideLayer


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def client(store: InMemoryDocumentStore) -> TestClient:
    board = BudgetBoard(
        EntryRepository(store, "budgetEntries"),
        OverrideLayer(store, "budgetOverrides"),
        page_size=10,
    ).open()
    return TestClient(create_application(board))


def _form(**overrides: str) -> dict:
    form = {
        "role": "OFFICER",
        "editor_name": "Alice Reyes",
        "mode": "EXPENSE",
        "title": "Tarpaulin printing",
        "amount": "300",
        "department": "SAMASA",
        "date": "2024-05-02",
        "fund": "operational",
    }
    form.update(overrides)
    return form


def test_create_then_summarise(client: TestClient) -> None:
    assert client.post("/budget/entries", data=_form(mode="INCOME", title="Grant", amount="1000")).status_code == 201
    assert client.post("/budget/entries", data=_form()).status_code == 201
    assert client.post("/budget/entries", data=_form(mode="AVAILABLE_ONLY", title="Carry-over", amount="50")).status_code == 201

    response = client.get("/budget/summary", params={"department": "ALL"})

    assert response.status_code == 200
    body = response.json()
    assert body["available"] == pytest.approx(750)
    assert body["revenue"] == pytest.approx(1000)
    assert body["expenditure"] == pytest.approx(300)
    assert body["funds"]["operational"] == pytest.approx(300)
    assert body["stale"] is False


def test_expense_without_fund_is_a_bad_request(client: TestClient, store: InMemoryDocumentStore) -> None:
    form = _form()
    del form["fund"]

    response = client.post("/budget/entries", data=form)

    assert response.status_code == 400
    assert store.count("budgetEntries") == 0


def test_students_cannot_record(client: TestClient) -> None:
    response = client.post("/budget/entries", data=_form(role="STUDENT"))

    assert response.status_code == 403


def test_student_table_is_capped_to_latest_page(client: TestClient) -> None:
    for index in range(25):
        client.post("/budget/entries", data=_form(mode="INCOME", title=f"Row {index}", amount="1"))

    student = client.get("/budget/entries", params={"role": "STUDENT", "page": 3}).json()
    officer = client.get("/budget/entries", params={"role": "OFFICER", "page": 3}).json()

    assert len(student["entries"]) == 10
    assert student["withheld"] is True
    assert student["can_manage"] is False
    assert student["caption"].endswith("(latest 10)")
    assert len(officer["entries"]) == 5
    assert officer["page_count"] == 3
    assert officer["can_manage"] is True


def test_update_and_delete_round_trip(client: TestClient) -> None:
    entry_id = client.post("/budget/entries", data=_form()).json()["id"]

    updated = client.put(
        f"/budget/entries/{entry_id}",
        data=_form(editor_name="Bob Tan", amount="450", fund="project"),
    )
    assert updated.status_code == 200
    assert updated.json()["entry"]["fund"] == "project"
    assert updated.json()["entry"]["approvedBy"] == "Alice Reyes"

    deleted = client.delete(f"/budget/entries/{entry_id}", params={"role": "SUPERADMIN"})
    assert deleted.status_code == 200
    assert client.get("/budget/summary").json()["expenditure"] == 0


def test_unknown_role_or_department_is_rejected(client: TestClient) -> None:
    assert client.get("/budget/entries", params={"role": "JANITOR"}).status_code == 400
    assert client.get("/budget/summary", params={"department": "ENGINEERING"}).status_code == 400


def test_store_failures_map_to_bad_gateway(client: TestClient, store: InMemoryDocumentStore) -> None:
    store.set_offline()

    response = client.post("/budget/entries", data=_form())

    assert response.status_code == 502


def test_overview_lists_recent_activity(client: TestClient) -> None:
    for index in range(5):
        client.post("/budget/entries", data=_form(mode="INCOME", title=f"Row {index}", amount="2"))

    body = client.get("/").json()

    assert [entry["title"] for entry in body["recent_activity"]] == ["Row 4", "Row 3", "Row 2", "Row 1"]
    assert body["totals"]["revenue"] == pytest.approx(10)
    assert len(client.get("/budget/recent", params={"limit": 2}).json()["entries"]) == 2
