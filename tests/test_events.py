"""Tests for event creation, listing and the cached dashboard."""

from __future__ import annotations

import json
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from models import db
from models.event import Event
from models.inquiry import Inquiry
from services.dashboard import dashboard_cache_key


def _future(days: int = 30) -> str:
    return (datetime.utcnow() + timedelta(days=days)).replace(microsecond=0).isoformat()


def _event_payload(**overrides) -> dict:
    payload = {
        "event_type": "wedding",
        "title": "Harbour wedding",
        "event_date": _future(),
        "attendee_count": 120,
        "location": {"address": "1 Quay St", "city": "Auckland"},
        "budget_total": 25000,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def manager_id(make_user):
    return make_user("planner@example.com")


def test_create_event(client, manager_id, auth_headers):
    response = client.post(
        "/api/events", json=_event_payload(), headers=auth_headers(manager_id)
    )

    assert response.status_code == 201
    event = response.get_json()["event"]
    assert event["status"] == "planning"
    assert event["event_manager_id"] == manager_id
    assert event["budget_total"] == 25000.0
    assert event["location"]["city"] == "Auckland"


def test_draft_events_start_as_draft(client, manager_id, auth_headers):
    response = client.post(
        "/api/events",
        json=_event_payload(is_draft=True),
        headers=auth_headers(manager_id),
    )

    assert response.get_json()["event"]["status"] == "draft"


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"event_type": "rave"}, "event_type"),
        ({"title": ""}, "title"),
        ({"event_date": "2001-01-01T00:00:00"}, "event_date"),
        ({"attendee_count": 0}, "attendee_count"),
        ({"duration_hours": 200}, "duration_hours"),
        ({"location": {"city": "Auckland"}}, "location.address"),
        ({"budget_total": -5}, "budget_total"),
    ],
)
def test_create_event_validation(client, manager_id, auth_headers, overrides, field):
    response = client.post(
        "/api/events",
        json=_event_payload(**overrides),
        headers=auth_headers(manager_id),
    )

    assert response.status_code == 400
    fields = {error["field"] for error in response.get_json()["errors"]}
    assert field in fields


def test_contractors_cannot_create_events(client, make_user, auth_headers):
    contractor = make_user("crew@example.com", role="contractor")

    response = client.post(
        "/api/events", json=_event_payload(), headers=auth_headers(contractor)
    )

    assert response.status_code == 403


def test_database_failure_is_not_leaked(client, manager_id, auth_headers, monkeypatch):
    def _fail():
        raise OperationalError("INSERT INTO events", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db.session, "commit", _fail)

    response = client.post(
        "/api/events", json=_event_payload(), headers=auth_headers(manager_id)
    )

    assert response.status_code == 500
    payload = response.get_json()
    assert payload["message"] == "Failed to create event."
    assert "disk I/O" not in json.dumps(payload)


def test_list_events_scoped_to_manager(client, app, make_user, manager_id, auth_headers):
    other = make_user("other@example.com")
    admin = make_user("admin@example.com", role="admin")
    headers = auth_headers(manager_id)
    client.post("/api/events", json=_event_payload(title="Mine"), headers=headers)
    client.post(
        "/api/events",
        json=_event_payload(title="Theirs", event_type="corporate"),
        headers=auth_headers(other),
    )

    own = client.get("/api/events", headers=headers).get_json()
    assert [event["title"] for event in own["events"]] == ["Mine"]
    assert own["total"] == 1

    everything = client.get("/api/events", headers=auth_headers(admin)).get_json()
    assert everything["total"] == 2

    corporate = client.get(
        "/api/events?event_type=corporate", headers=auth_headers(admin)
    ).get_json()
    assert [event["title"] for event in corporate["events"]] == ["Theirs"]


def test_contractors_cannot_list_events(client, make_user, auth_headers):
    contractor = make_user("crew@example.com", role="contractor")
    response = client.get("/api/events", headers=auth_headers(contractor))
    assert response.status_code == 403


def test_dashboard_aggregates(client, app, manager_id, auth_headers):
    with app.app_context():
        db.session.add_all(
            [
                Event(
                    event_manager_id=manager_id,
                    title="Soon",
                    event_type="birthday",
                    event_date=datetime.utcnow() + timedelta(days=3),
                    budget_total=1000,
                    status="planning",
                ),
                Event(
                    event_manager_id=manager_id,
                    title="Cancelled",
                    event_type="concert",
                    event_date=datetime.utcnow() + timedelta(days=5),
                    budget_total=5000,
                    status="cancelled",
                ),
                Event(
                    event_manager_id=manager_id,
                    title="Past",
                    event_type="corporate",
                    event_date=datetime.utcnow() - timedelta(days=5),
                    budget_total=500,
                    status="completed",
                ),
            ]
        )
        db.session.commit()

    response = client.get("/api/events/dashboard", headers=auth_headers(manager_id))

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["cached"] is False
    dashboard = payload["dashboard"]
    assert dashboard["events"]["total"] == 3
    assert dashboard["events"]["by_status"]["cancelled"] == 1
    assert [event["title"] for event in dashboard["upcoming_events"]] == ["Soon"]
    assert dashboard["total_budget"] == 1500.0
    assert dashboard["inquiries"]["sent"] == 0


def test_dashboard_is_cached_and_invalidated(client, manager_id, auth_headers, fake_redis):
    headers = auth_headers(manager_id)

    first = client.get("/api/events/dashboard", headers=headers).get_json()
    second = client.get("/api/events/dashboard", headers=headers).get_json()

    assert first["cached"] is False
    assert second["cached"] is True
    assert second["dashboard"] == first["dashboard"]
    key = f"eventpros:{dashboard_cache_key(manager_id)}"
    assert fake_redis.ttls[key] == 300

    client.post("/api/events", json=_event_payload(), headers=headers)
    assert key not in fake_redis.store

    third = client.get("/api/events/dashboard", headers=headers).get_json()
    assert third["cached"] is False
    assert third["dashboard"]["events"]["total"] == 1


def test_dashboard_is_manager_only(client, make_user, auth_headers):
    contractor = make_user("crew@example.com", role="contractor")
    response = client.get("/api/events/dashboard", headers=auth_headers(contractor))
    assert response.status_code == 403


def _create_event(client, headers, **overrides) -> dict:
    response = client.post("/api/events", json=_event_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["event"]


def test_owner_and_admin_read_single_event(client, make_user, manager_id, auth_headers):
    event = _create_event(client, auth_headers(manager_id))
    url = f"/api/events/{event['id']}"
    outsider = auth_headers(make_user("other@example.com"))
    admin = auth_headers(make_user("admin@example.com", role="admin"))

    own = client.get(url, headers=auth_headers(manager_id))
    assert own.get_json()["event"]["id"] == event["id"]
    assert client.get(url, headers=admin).status_code == 200
    assert client.get(url, headers=outsider).status_code == 403
    assert client.get("/api/events/999", headers=admin).status_code == 404


def test_partial_update_keeps_other_fields(client, manager_id, auth_headers):
    headers = auth_headers(manager_id)
    event = _create_event(client, headers)

    response = client.put(
        f"/api/events/{event['id']}",
        json={"title": "Garden wedding", "status": "confirmed"},
        headers=headers,
    )

    assert response.status_code == 200
    updated = response.get_json()["event"]
    assert updated["title"] == "Garden wedding"
    assert updated["status"] == "confirmed"
    assert updated["attendee_count"] == 120
    assert updated["location"]["city"] == "Auckland"


def test_update_validates_fields(client, manager_id, auth_headers):
    headers = auth_headers(manager_id)
    event = _create_event(client, headers)

    response = client.put(
        f"/api/events/{event['id']}",
        json={"status": "postponed", "attendee_count": 0},
        headers=headers,
    )

    assert response.status_code == 400
    fields = {error["field"] for error in response.get_json()["errors"]}
    assert {"status", "attendee_count"} <= fields


def test_outsider_cannot_update_or_delete(client, make_user, manager_id, auth_headers):
    event = _create_event(client, auth_headers(manager_id))
    outsider = auth_headers(make_user("other@example.com"))
    url = f"/api/events/{event['id']}"

    assert client.put(url, json={"title": "Mine now"}, headers=outsider).status_code == 403
    assert client.delete(url, headers=outsider).status_code == 403


def test_delete_event_detaches_inquiries(client, app, make_user, manager_id, auth_headers):
    headers = auth_headers(manager_id)
    contractor = make_user("crew@example.com", role="contractor", verified=True)
    event = _create_event(client, headers)
    inquiry = client.post(
        "/api/inquiries",
        json={
            "contractor_id": contractor,
            "event_id": event["id"],
            "inquiry_type": "general",
            "subject": "Lighting",
            "message": "Do you do lighting?",
        },
        headers=headers,
    ).get_json()["inquiry"]

    response = client.delete(f"/api/events/{event['id']}", headers=headers)

    assert response.status_code == 200
    assert client.get(f"/api/events/{event['id']}", headers=headers).status_code == 404
    with app.app_context():
        assert db.session.get(Inquiry, inquiry["id"]).event_id is None


@pytest.mark.parametrize("status", ["in_progress", "completed"])
def test_running_or_finished_events_cannot_be_deleted(
    client, make_user, manager_id, auth_headers, status
):
    headers = auth_headers(manager_id)
    event = _create_event(client, headers)
    client.put(f"/api/events/{event['id']}", json={"status": status}, headers=headers)
    admin = auth_headers(make_user("admin@example.com", role="admin"))

    response = client.delete(f"/api/events/{event['id']}", headers=admin)

    assert response.status_code == 400
    assert response.get_json()["message"] == "Cannot delete event in current status."


def test_update_and_delete_invalidate_dashboard(client, manager_id, auth_headers, fake_redis):
    headers = auth_headers(manager_id)
    event = _create_event(client, headers)
    key = f"eventpros:{dashboard_cache_key(manager_id)}"

    client.get("/api/events/dashboard", headers=headers)
    assert key in fake_redis.store
    client.put(f"/api/events/{event['id']}", json={"status": "confirmed"}, headers=headers)
    assert key not in fake_redis.store

    client.get("/api/events/dashboard", headers=headers)
    client.delete(f"/api/events/{event['id']}", headers=headers)
    dashboard = client.get("/api/events/dashboard", headers=headers).get_json()
    assert dashboard["cached"] is False
    assert dashboard["dashboard"]["events"]["total"] == 0
