"""Tests for the inquiries API."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import OperationalError

from models import db
from models.event import Event
from models.inquiry import Inquiry
from models.user import User
from services import inquiry_enrichment


@pytest.fixture()
def parties(make_user):
    return {
        "manager": make_user("planner@example.com"),
        "contractor": make_user("crew@example.com", role="contractor", verified=True),
        "other_manager": make_user("other@example.com"),
        "admin": make_user("admin@example.com", role="admin"),
    }


def _payload(contractor_id: int, **overrides) -> dict:
    payload = {
        "contractor_id": contractor_id,
        "inquiry_type": "quote_request",
        "subject": "Sound for a wedding",
        "message": "Are you available in March?",
    }
    payload.update(overrides)
    return payload


def _create(client, headers, contractor_id, **overrides) -> dict:
    response = client.post(
        "/api/inquiries", json=_payload(contractor_id, **overrides), headers=headers
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()["inquiry"]


def test_create_inquiry(client, parties, auth_headers):
    inquiry = _create(client, auth_headers(parties["manager"]), parties["contractor"])

    assert inquiry["status"] == "sent"
    assert inquiry["priority"] == "medium"
    assert inquiry["event_manager_id"] == parties["manager"]


def test_create_inquiry_with_event_details(client, parties, auth_headers):
    details = {
        "event_type": "wedding",
        "title": "Harbour wedding",
        "event_date": (datetime.utcnow() + timedelta(days=60)).isoformat(),
        "location": {"address": "1 Quay St"},
        "service_requirements": [
            {
                "category": "audio",
                "type": "PA system",
                "priority": "high",
                "is_required": True,
            }
        ],
    }

    inquiry = _create(
        client,
        auth_headers(parties["manager"]),
        parties["contractor"],
        event_details=details,
    )

    assert inquiry["event_details"]["title"] == "Harbour wedding"
    assert isinstance(inquiry["event_details"]["event_date"], str)


def test_unverified_contractor_is_not_found(client, make_user, parties, auth_headers):
    unverified = make_user("new@example.com", role="contractor")

    response = client.post(
        "/api/inquiries", json=_payload(unverified), headers=auth_headers(parties["manager"])
    )

    assert response.status_code == 404


def test_event_must_belong_to_sender(client, app, parties, auth_headers):
    with app.app_context():
        event = Event(
            event_manager_id=parties["other_manager"],
            title="Not yours",
            event_type="corporate",
            event_date=datetime.utcnow() + timedelta(days=10),
        )
        db.session.add(event)
        db.session.commit()
        event_id = event.id

    response = client.post(
        "/api/inquiries",
        json=_payload(parties["contractor"], event_id=event_id),
        headers=auth_headers(parties["manager"]),
    )

    assert response.status_code == 404


def test_only_event_managers_send_inquiries(client, parties, auth_headers):
    response = client.post(
        "/api/inquiries",
        json=_payload(parties["contractor"]),
        headers=auth_headers(parties["contractor"]),
    )

    assert response.status_code == 403


def test_subject_length_is_validated(client, parties, auth_headers):
    response = client.post(
        "/api/inquiries",
        json=_payload(parties["contractor"], subject="x" * 201),
        headers=auth_headers(parties["manager"]),
    )

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["message"] == "Subject must be 1-200 characters"


def test_inquiry_creation_is_rate_limited(app_factory):
    app = app_factory(INQUIRY_RATE_LIMIT="2 per hour")
    client = app.test_client()

    with app.app_context():
        manager = User(email="busy@example.com", role="event_manager")
        manager.set_password("Password123")
        contractor = User(email="crew2@example.com", role="contractor", is_verified=True)
        contractor.set_password("Password123")
        db.session.add_all([manager, contractor])
        db.session.commit()
        headers = {"Authorization": f"Bearer {create_access_token(identity=str(manager.id))}"}
        contractor_id = contractor.id

    statuses = [
        client.post("/api/inquiries", json=_payload(contractor_id), headers=headers).status_code
        for _ in range(3)
    ]

    assert statuses == [201, 201, 429]


def test_listing_is_scoped_by_role(client, parties, auth_headers):
    _create(client, auth_headers(parties["manager"]), parties["contractor"])
    _create(client, auth_headers(parties["other_manager"]), parties["contractor"])

    mine = client.get("/api/inquiries", headers=auth_headers(parties["manager"])).get_json()
    received = client.get(
        "/api/inquiries", headers=auth_headers(parties["contractor"])
    ).get_json()
    everything = client.get("/api/inquiries", headers=auth_headers(parties["admin"])).get_json()

    assert mine["total"] == 1
    assert received["total"] == 2
    assert everything["total"] == 2
    sender = mine["inquiries"][0]["sender"]
    assert sender["email"] == "planner@example.com"
    assert mine["inquiries"][0]["contractor"]["id"] == parties["contractor"]


def test_listing_filters(client, parties, auth_headers):
    headers = auth_headers(parties["manager"])
    _create(client, headers, parties["contractor"], priority="high")
    _create(client, headers, parties["contractor"], inquiry_type="general")

    high = client.get("/api/inquiries?priority=high", headers=headers).get_json()
    general = client.get("/api/inquiries?inquiry_type=general", headers=headers).get_json()

    assert high["total"] == 1
    assert general["total"] == 1
    assert general["inquiries"][0]["inquiry_type"] == "general"


def test_failed_enrichment_uses_placeholder(client, parties, auth_headers, monkeypatch):
    headers = auth_headers(parties["manager"])
    _create(client, headers, parties["contractor"])

    real_summary = inquiry_enrichment._user_summary

    def _flaky(user_id):
        if user_id == parties["manager"]:
            raise OperationalError("SELECT users", {}, Exception("timeout"))
        return real_summary(user_id)

    monkeypatch.setattr(inquiry_enrichment, "_user_summary", _flaky)

    response = client.get("/api/inquiries", headers=headers)

    assert response.status_code == 200
    inquiry = response.get_json()["inquiries"][0]
    assert inquiry["sender"] == {
        "id": parties["manager"],
        "email": None,
        "name": "Unknown user",
    }
    assert inquiry["contractor"]["email"] == "crew@example.com"


def test_contractor_first_read_marks_viewed(client, app, parties, auth_headers):
    inquiry = _create(client, auth_headers(parties["manager"]), parties["contractor"])

    manager_view = client.get(
        f"/api/inquiries/{inquiry['id']}", headers=auth_headers(parties["manager"])
    ).get_json()
    assert manager_view["inquiry"]["status"] == "sent"

    contractor_view = client.get(
        f"/api/inquiries/{inquiry['id']}", headers=auth_headers(parties["contractor"])
    ).get_json()
    assert contractor_view["inquiry"]["status"] == "viewed"
    assert contractor_view["inquiry"]["responses"] == []


def test_outsiders_cannot_read(client, parties, auth_headers):
    inquiry = _create(client, auth_headers(parties["manager"]), parties["contractor"])

    response = client.get(
        f"/api/inquiries/{inquiry['id']}", headers=auth_headers(parties["other_manager"])
    )

    assert response.status_code == 403


def test_unknown_inquiry_is_404(client, parties, auth_headers):
    response = client.get("/api/inquiries/999", headers=auth_headers(parties["admin"]))
    assert response.status_code == 404


@pytest.mark.parametrize(
    "response_type, expected_status",
    [("reply", "responded"), ("quote", "quoted"), ("decline", "declined")],
)
def test_contractor_response_moves_status(
    client, parties, auth_headers, response_type, expected_status
):
    inquiry = _create(client, auth_headers(parties["manager"]), parties["contractor"])

    response = client.post(
        f"/api/inquiries/{inquiry['id']}/respond",
        json={"message": "Happy to help", "response_type": response_type},
        headers=auth_headers(parties["contractor"]),
    )

    assert response.status_code == 201
    assert response.get_json()["inquiry_status"] == expected_status


def test_manager_reply_keeps_status(client, parties, auth_headers):
    inquiry = _create(client, auth_headers(parties["manager"]), parties["contractor"])

    response = client.post(
        f"/api/inquiries/{inquiry['id']}/respond",
        json={"message": "One more detail"},
        headers=auth_headers(parties["manager"]),
    )

    assert response.get_json()["inquiry_status"] == "sent"
    detail = client.get(
        f"/api/inquiries/{inquiry['id']}", headers=auth_headers(parties["manager"])
    ).get_json()
    assert [item["message"] for item in detail["inquiry"]["responses"]] == ["One more detail"]


def test_manager_accepts_only_quoted(client, app, parties, auth_headers):
    manager = auth_headers(parties["manager"])
    inquiry = _create(client, manager, parties["contractor"])
    url = f"/api/inquiries/{inquiry['id']}"

    early = client.put(url, json={"status": "accepted"}, headers=manager)
    assert early.status_code == 409

    client.post(
        f"{url}/respond",
        json={"message": "$2,000", "response_type": "quote"},
        headers=auth_headers(parties["contractor"]),
    )
    accepted = client.put(url, json={"status": "accepted"}, headers=manager)
    assert accepted.status_code == 200
    assert accepted.get_json()["inquiry"]["status"] == "accepted"

    final = client.put(url, json={"priority": "high"}, headers=manager)
    assert final.status_code == 409


def test_contractor_update_rules(client, parties, auth_headers):
    inquiry = _create(client, auth_headers(parties["manager"]), parties["contractor"])
    url = f"/api/inquiries/{inquiry['id']}"
    contractor = auth_headers(parties["contractor"])

    assert client.put(url, json={"priority": "low"}, headers=contractor).status_code == 403
    assert client.put(url, json={"status": "accepted"}, headers=contractor).status_code == 403
    ok = client.put(url, json={"status": "declined"}, headers=contractor)
    assert ok.status_code == 200
    assert ok.get_json()["inquiry"]["status"] == "declined"


def test_admin_may_override(client, app, parties, auth_headers):
    inquiry = _create(client, auth_headers(parties["manager"]), parties["contractor"])

    response = client.put(
        f"/api/inquiries/{inquiry['id']}",
        json={"status": "expired", "priority": "low"},
        headers=auth_headers(parties["admin"]),
    )

    assert response.status_code == 200
    with app.app_context():
        stored = db.session.get(Inquiry, inquiry["id"])
        assert stored.status == "expired"
        assert stored.priority == "low"


def test_failed_lookup_does_not_poison_later_lookups(
    client, parties, auth_headers, monkeypatch
):
    headers = auth_headers(parties["manager"])
    _create(client, headers, parties["contractor"])

    real_summary = inquiry_enrichment._user_summary

    def _broken_session(user_id):
        if user_id == parties["manager"]:
            duplicate = User(email="crew@example.com", role="contractor")
            duplicate.set_password("Password123")
            db.session.add(duplicate)
            db.session.flush()
        return real_summary(user_id)

    monkeypatch.setattr(inquiry_enrichment, "_user_summary", _broken_session)

    response = client.get("/api/inquiries", headers=headers)

    assert response.status_code == 200
    inquiry = response.get_json()["inquiries"][0]
    assert inquiry["sender"]["name"] == "Unknown user"
    assert inquiry["contractor"]["email"] == "crew@example.com"


def test_sender_deletes_inquiry(client, app, parties, auth_headers):
    manager = auth_headers(parties["manager"])
    inquiry = _create(client, manager, parties["contractor"])
    url = f"/api/inquiries/{inquiry['id']}"
    client.post(
        f"{url}/respond",
        json={"message": "Sure", "response_type": "reply"},
        headers=auth_headers(parties["contractor"]),
    )

    response = client.delete(url, headers=manager)

    assert response.status_code == 200
    assert client.get(url, headers=manager).status_code == 404
    with app.app_context():
        assert db.session.get(Inquiry, inquiry["id"]) is None


def test_only_sender_or_admin_deletes_inquiry(client, parties, auth_headers):
    first = _create(client, auth_headers(parties["manager"]), parties["contractor"])
    second = _create(client, auth_headers(parties["manager"]), parties["contractor"])

    by_contractor = client.delete(
        f"/api/inquiries/{first['id']}", headers=auth_headers(parties["contractor"])
    )
    by_outsider = client.delete(
        f"/api/inquiries/{first['id']}", headers=auth_headers(parties["other_manager"])
    )
    by_admin = client.delete(
        f"/api/inquiries/{second['id']}", headers=auth_headers(parties["admin"])
    )

    assert by_contractor.status_code == 403
    assert by_outsider.status_code == 403
    assert by_admin.status_code == 200


def test_inquiry_changes_refresh_dashboard(client, parties, auth_headers, fake_redis):
    manager = auth_headers(parties["manager"])
    contractor = auth_headers(parties["contractor"])

    def _counts():
        return client.get("/api/events/dashboard", headers=manager).get_json()

    assert _counts()["dashboard"]["inquiries"]["sent"] == 0
    inquiry = _create(client, manager, parties["contractor"])

    after_create = _counts()
    assert after_create["cached"] is False
    assert after_create["dashboard"]["inquiries"]["sent"] == 1

    client.post(
        f"/api/inquiries/{inquiry['id']}/respond",
        json={"message": "$900", "response_type": "quote"},
        headers=contractor,
    )
    assert _counts()["dashboard"]["inquiries"]["quoted"] == 1

    client.put(
        f"/api/inquiries/{inquiry['id']}", json={"status": "accepted"}, headers=manager
    )
    assert _counts()["dashboard"]["inquiries"]["accepted"] == 1

    client.delete(f"/api/inquiries/{inquiry['id']}", headers=manager)
    assert _counts()["dashboard"]["inquiries"]["accepted"] == 0
