"""End-to-end tests of the /api/tasks endpoints through the FastAPI app."""

import warnings
from decimal import Decimal

import pytest

from task_tracker.routers.health import migration_head

API = "/api/tasks"

ACME = {
    "client_name": "Acme",
    "task_description": "Logo design",
    "expected_amount": 500.00,
    "is_paid": False,
}


def create(client, **overrides):
    response = client.post(API, json={**ACME, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def test_payment_lifecycle(client):
    created = create(client)
    assert isinstance(created["id"], int)
    assert created["is_paid"] is False
    assert Decimal(created["expected_amount"]) == Decimal("500.00")

    response = client.patch(f"{API}/{created['id']}/toggle-payment")
    assert response.status_code == 200
    assert response.json()["is_paid"] is True

    response = client.delete(f"{API}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Task deleted successfully"}

    response = client.delete(f"{API}/{created['id']}")
    assert response.status_code == 404
    assert response.json() == {"success": False, "code": "not_found", "message": "Task not found"}


def test_list_tasks_empty(client):
    response = client.get(API)

    assert response.status_code == 200
    assert response.json() == []


def test_list_tasks_newest_first(client):
    ids = [create(client, client_name=name)["id"] for name in ("A", "B", "C")]

    tasks = client.get(API).json()

    assert [task["id"] for task in tasks] == list(reversed(ids))
    created_at = [task["created_at"] for task in tasks]
    assert created_at == sorted(created_at, reverse=True)


def test_task_body_shape(client):
    created = create(client, date_commissioned="2026-09-01")

    assert set(created) == {
        "id",
        "client_name",
        "task_description",
        "date_commissioned",
        "date_delivered",
        "expected_amount",
        "is_paid",
        "created_at",
        "updated_at",
    }
    assert created["date_commissioned"] == "2026-09-01"
    assert created["date_delivered"] is None


def test_create_accepts_browser_client_fields(client):
    response = client.post(API, json={
        "clientName": "Globex",
        "taskDescription": "Landing page copy",
        "dateCommissioned": "",
        "dateDelivered": "2026-10-01",
        "expectedAmount": "99.999",
        "isPaid": True,
    })

    assert response.status_code == 201
    body = response.json()
    assert body["client_name"] == "Globex"
    assert body["date_commissioned"] is None
    assert body["date_delivered"] == "2026-10-01"
    assert Decimal(body["expected_amount"]) == Decimal("100.00")
    assert body["is_paid"] is True


def test_invalid_create_persists_nothing(client):
    response = client.post(API, json={"expected_amount": -5})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    assert "client_name is required" in body["details"]
    assert "task_description is required" in body["details"]
    assert "expected_amount must be greater than or equal to 0" in body["details"]
    assert client.get(API).json() == []


def test_non_object_body_is_rejected(client):
    response = client.post(API, json=[1, 2, 3])

    assert response.status_code == 400
    assert response.json()["details"] == ["payload must be a JSON object"]


def test_malformed_json_is_rejected(client):
    response = client.post(API, content="{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


@pytest.mark.parametrize("bad_id", ["abc", "0", "-1", "1.5", "99999999999"])
def test_invalid_task_id_is_rejected(client, bad_id):
    responses = [
        client.put(f"{API}/{bad_id}", json=ACME),
        client.patch(f"{API}/{bad_id}/toggle-payment"),
        client.delete(f"{API}/{bad_id}"),
    ]

    for response in responses:
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid task ID"


def test_missing_task_leaves_table_unchanged(client):
    create(client)

    assert client.put(f"{API}/999", json=ACME).status_code == 404
    assert client.patch(f"{API}/999/toggle-payment").status_code == 404
    assert client.delete(f"{API}/999").status_code == 404
    assert len(client.get(API).json()) == 1


def test_update_checks_existence_before_validating(client):
    response = client.put(f"{API}/999", json={})

    assert response.status_code == 404


def test_update_replaces_fields_and_clears_dates(client):
    created = create(client, date_commissioned="2026-09-01", date_delivered="2026-09-15")

    response = client.put(f"{API}/{created['id']}", json={
        "client_name": "Acme Corp",
        "task_description": "Logo design, second round",
        "expected_amount": "650",
        "is_paid": True,
    })

    assert response.status_code == 200
    updated = response.json()
    assert updated["id"] == created["id"]
    assert updated["client_name"] == "Acme Corp"
    assert updated["date_commissioned"] is None
    assert updated["date_delivered"] is None
    assert Decimal(updated["expected_amount"]) == Decimal("650.00")
    assert updated["is_paid"] is True
    assert updated["created_at"] == created["created_at"]
    assert updated["updated_at"] >= created["updated_at"]


def test_invalid_update_changes_nothing(client):
    created = create(client)

    response = client.put(f"{API}/{created['id']}", json={**ACME, "client_name": "   "})

    assert response.status_code == 400
    assert response.json()["details"] == ["client_name must not be empty"]
    assert client.get(API).json()[0]["client_name"] == "Acme"


def test_unknown_route_returns_json_404(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "code": "not_found", "message": "Route not found"}


def test_root_and_health(client):
    assert client.get("/").json() == {"success": True, "message": "API is running"}

    health = client.get("/health").json()
    assert health["success"] is True
    assert health["db_ok"] is True
    assert health["alembic_current"] is None
    assert health["alembic_head_ok"] is False
    assert health["alembic_head"] == "001_create_tasks"
    assert health["uptime"] >= 0


def test_migration_head_reads_alembic_ini_without_warnings():
    migration_head.cache_clear()

    with warnings.catch_warnings():
        warnings.filterwarnings("error", message=".*path_separator.*")
        assert migration_head() == "001_create_tasks"
