"""Tests for the FastAPI dashboard."""

import pytest
from fastapi.testclient import TestClient

from dashboard.app import create_app
from database.manager import DatabaseWriteError

DAY = "/api/days/2025-10-18"


@pytest.fixture
def client(planner):
    with TestClient(create_app(planner)) as test_client:
        yield test_client


def test_health_endpoint(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["data"]["stored_days"] == 0


def test_health_without_planner():
    with TestClient(create_app()) as test_client:
        assert test_client.get("/health").json()["status"] == "error"
        assert test_client.get(DAY).status_code == 503


def test_get_day_is_read_only(client, store):
    resp = client.get(DAY)
    assert resp.status_code == 200

    body = resp.json()
    assert body["date_key"] == "2025-10-18"
    assert body["stored"] is False
    assert body["progress"] == 0
    assert body["blocks"][0]["start"] == "08:00"
    assert body["blocks"][0]["end"] == "09:30"
    assert len(store) == 0


def test_invalid_date_key_is_400(client):
    assert client.get("/api/days/18-10-2025").status_code == 400
    assert client.get("/api/days/2025-02-30").status_code == 400


def test_toggle_block(client, store):
    body = client.post(f"{DAY}/blocks/t1/toggle").json()

    assert body["blocks"][0]["done"] is True
    assert body["progress"] == 17
    assert body["stored"] is True
    assert store.has("2025-10-18")


def test_unknown_block_is_404(client, store):
    assert client.post(f"{DAY}/blocks/nope/toggle").status_code == 404
    assert client.delete(f"{DAY}/blocks/nope").status_code == 404
    assert len(store) == 0


def test_rename_block(client):
    resp = client.patch(f"{DAY}/blocks/t2", json={"title": "  Apply: 5 companies  "})
    assert resp.status_code == 200
    assert resp.json()["blocks"][2]["title"] == "Apply: 5 companies"


def test_rename_rejects_blank_title(client):
    assert client.patch(f"{DAY}/blocks/t2", json={"title": "   "}).status_code == 422


def test_edit_sub_item(client):
    resp = client.put(f"{DAY}/blocks/t3/sub-items/2", json={"value": "Control Systems"})
    assert resp.json()["blocks"][4]["sub_items"] == ["Subject 1", "Subject 2", "Control Systems"]


def test_edit_sub_item_out_of_range_is_noop(client, store):
    resp = client.put(f"{DAY}/blocks/t3/sub-items/7", json={"value": "x"})
    assert resp.status_code == 200
    assert len(resp.json()["blocks"][4]["sub_items"]) == 3
    assert len(store) == 0


def test_add_and_remove_block(client):
    added = client.post(f"{DAY}/blocks").json()
    ids = [b["id"] for b in added["day"]["blocks"]]
    assert ids[-2] == added["id"]
    assert ids[-1] == "t3c"

    after = client.delete(f"{DAY}/blocks/{added['id']}").json()
    assert added["id"] not in [b["id"] for b in after["blocks"]]


def test_reset_and_unmark(client):
    client.post(f"{DAY}/blocks/t1/toggle")
    assert client.post(f"{DAY}/unmark").json()["progress"] == 0

    client.patch(f"{DAY}/blocks/t1", json={"title": "Changed"})
    reset = client.post(f"{DAY}/reset").json()
    assert reset["blocks"][0]["title"] == "Internship hunt"


def test_export_is_plain_text(client):
    resp = client.get(f"{DAY}/export")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert 'filename="plan-2025-10-18.txt"' in resp.headers["content-disposition"]
    assert resp.text.splitlines()[0] == "08:00 - 09:30 | Internship hunt"


def test_set_start_hour_clamps(client):
    assert client.put("/api/settings/start-hour", json={"hour": 30}).json() == {"start_hour": 23}
    assert client.put("/api/settings/start-hour", json={"hour": "abc"}).json() == {"start_hour": 0}
    assert client.get(DAY).json()["blocks"][0]["start"] == "00:00"


def test_calendar_month(client, store):
    body = client.get("/api/calendar/2025/10").json()

    assert body["cells"][:3] == [None, None, None]
    assert body["cells"][3]["date_key"] == "2025-10-01"
    assert body["week_start"] == "sunday"
    assert len(store) == 0


def test_calendar_invalid_month(client):
    assert client.get("/api/calendar/2025/13").status_code == 422


def test_clear_history_requires_confirm(client, store):
    client.post(f"{DAY}/blocks/t1/toggle")

    assert client.delete("/api/history").status_code == 400
    assert len(store) == 1

    resp = client.delete("/api/history", params={"confirm": "true"})
    assert resp.json() == {"cleared": True, "removed_days": 1}
    assert len(store) == 0


def test_history_export_is_json_download(client):
    client.post(f"{DAY}/blocks/t1/toggle")

    resp = client.get("/api/history/export")
    assert resp.status_code == 200
    assert "planner_history_export.json" in resp.headers["content-disposition"]
    assert resp.json()["2025-10-18"][0]["done"] is True


def test_write_failure_is_503(client, store, monkeypatch):
    def broken_save(date_key, snapshot):
        raise DatabaseWriteError("disk full")

    monkeypatch.setattr(store, "save", broken_save)
    assert client.post(f"{DAY}/blocks/t1/toggle").status_code == 503
