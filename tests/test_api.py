"""HTTP surface: routing, error envelopes and the timer endpoints."""

from worklog.core.config import settings
from worklog.services.timecalc import today_local


def test_health(api_client):
    assert api_client.get("/health").json() == {"ok": True}


def test_reconcile_endpoint_from_duration(api_client):
    response = api_client.post(
        "/api/v1/work-sessions/reconcile",
        json={"start": "2024-01-01T09:00:00", "duration": 90, "edited_field": "duration"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["end"].startswith("2024-01-01T10:30:00")
    assert body["duration"] == 90
    assert body["time"] == "1h 30m"
    assert body["is_running"] is False


def test_reconcile_endpoint_rejects_bad_timestamp(api_client):
    response = api_client.post(
        "/api/v1/work-sessions/reconcile",
        json={"start": "yesterday", "duration": 10, "edited_field": "duration"},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "http_error"


def test_toggle_endpoint_to_running(api_client):
    response = api_client.post(
        "/api/v1/work-sessions/toggle",
        json={"start": "2024-01-01T09:00:00", "end": "2024-01-01T10:00:00", "duration": 60, "is_running": True},
    )
    assert response.json()["end"] is None
    assert response.json()["duration"] == 0


def test_work_session_lifecycle(api_client):
    created = api_client.post(
        "/api/v1/work-sessions",
        json={"title": "Pairing", "start": "2024-01-01T09:00:00", "end": "2024-01-01T11:00:00", "rate": "30"},
    )
    assert created.status_code == 201
    session = created.json()
    assert session["time"] == "2h"
    assert session["value"] == "60.00"
    assert session["start_display"] == "2024-01-01 09:00"

    cloned = api_client.post(f"/api/v1/work-sessions/{session['id']}/clone")
    assert cloned.status_code == 201
    clone = cloned.json()
    assert clone["url"] == f"/api/v1/work-sessions/{clone['id']}"
    fetched = api_client.get(clone["url"]).json()
    assert fetched["duration"] == 120
    assert fetched["start_display"].endswith("09:00")

    bulk = api_client.post("/api/v1/work-sessions/clone", json={"ids": [session["id"], clone["id"]]})
    assert bulk.status_code == 201
    assert [item["source_id"] for item in bulk.json()] == [session["id"], clone["id"]]

    summary = api_client.get("/api/v1/work-sessions/summary").json()
    assert summary["count"] == 4
    assert summary["duration"] == 480


def test_finish_endpoint(api_client):
    created = api_client.post("/api/v1/work-sessions", json={"title": "On call", "start": "2024-01-01T09:00:00"})
    assert created.json()["is_running"] is True
    finished = api_client.post(f"/api/v1/work-sessions/{created.json()['id']}/finish")
    assert finished.status_code == 200
    assert finished.json()["is_running"] is False
    assert finished.json()["end"] is not None


def test_missing_record_uses_error_envelope(api_client):
    response = api_client.get("/api/v1/work-sessions/999")
    assert response.status_code == 404
    assert response.json() == {"code": "http_error", "message": "Not found"}


def test_request_validation_uses_error_envelope(api_client):
    task = api_client.post("/api/v1/tasks", json={"title": "Ship"}).json()
    response = api_client.post(f"/api/v1/tasks/{task['id']}/postpone", json={"field": "title", "interval": "1 day"})
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_settings_drive_stamping_over_http(api_client):
    saved = api_client.put(
        "/api/v1/settings",
        json={"tasks_fill_actual_start_date_when_in_progress": True},
    )
    assert saved.json()["tasks_fill_actual_start_date_when_in_progress"] is True
    assert saved.json()["company_id"] == settings.COMPANY_ID

    doing = api_client.post("/api/v1/statuses", json={"name": "Doing", "phase": "in_progress"}).json()
    task = api_client.post("/api/v1/tasks", json={"title": "Ship"}).json()
    assert task["actual_start"] is None

    updated = api_client.patch(f"/api/v1/tasks/{task['id']}", json={"status_id": doing["id"]}).json()
    assert updated["phase"] == "in_progress"
    assert updated["status_name"] == "Doing"
    assert updated["actual_start"] == today_local(settings.TZ).isoformat()


def test_deleting_used_status_conflicts(api_client):
    todo = api_client.post("/api/v1/statuses", json={"name": "Todo"}).json()
    api_client.post("/api/v1/tasks", json={"title": "Ship", "status_id": todo["id"]})
    response = api_client.delete(f"/api/v1/statuses/{todo['id']}")
    assert response.status_code == 409


def test_clients_and_projects(api_client):
    client = api_client.post("/api/v1/clients", json={"name": "Acme", "email": "ops@acme.test"}).json()
    assert client["label_name"] == "Acme (ops@acme.test)"
    project = api_client.post("/api/v1/projects", json={"name": "Website", "client_id": client["id"]}).json()
    assert project["client_name"] == "Acme"
    listed = api_client.get("/api/v1/projects", params={"client_id": client["id"]}).json()
    assert [p["name"] for p in listed] == ["Website"]
    bad = api_client.post("/api/v1/projects", json={"name": "Ghost", "client_id": 404})
    assert bad.status_code == 422


def test_clearing_end_over_http_resumes_and_search_filters(api_client):
    created = api_client.post(
        "/api/v1/work-sessions",
        json={"title": "Pairing", "start": "2024-01-01T09:00:00", "end": "2024-01-01T10:00:00"},
    ).json()
    api_client.post("/api/v1/work-sessions", json={"title": "Invoicing", "start": "2024-01-02T09:00:00", "duration": 15})

    resumed = api_client.patch(f"/api/v1/work-sessions/{created['id']}", json={"end": None})
    assert resumed.status_code == 200
    assert resumed.json()["end"] is None
    assert resumed.json()["is_running"] is True

    found = api_client.get("/api/v1/work-sessions", params={"q": "pair"}).json()
    assert [item["title"] for item in found] == ["Pairing"]


def test_task_activity_endpoint(api_client):
    todo = api_client.post("/api/v1/statuses", json={"name": "Todo"}).json()
    done = api_client.post("/api/v1/statuses", json={"name": "Done", "phase": "closed"}).json()
    task = api_client.post("/api/v1/tasks", json={"title": "Ship", "status_id": todo["id"]}).json()
    api_client.patch(f"/api/v1/tasks/{task['id']}", json={"status_id": done["id"]})

    response = api_client.get(f"/api/v1/tasks/{task['id']}/activity")
    assert response.status_code == 200
    assert [(a["old_status"], a["new_status"]) for a in response.json()] == [(None, "Todo"), ("Todo", "Done")]
    assert api_client.get("/api/v1/tasks/999/activity").status_code == 404
