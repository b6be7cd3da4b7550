"""
Tests for the v1 HTTP surface: caller identity from bearer tokens and
mapping of service errors to status codes.
"""

import sqlite3

import pytest
from fastapi.testclient import TestClient

from project_hub_api.app.core import config
from project_hub_api.app.core.security import create_access_token, decode_access_token
from tests.conftest import MEMBER, OUTSIDER, OWNER


def _auth(user_id):
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user_id)})}"}


@pytest.fixture
def client(sqlite_db, monkeypatch):
    monkeypatch.setattr(config.settings, "sweep_enabled", False)
    from project_hub_api.app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def project_id(client):
    response = client.post("/api/v1/projects/", json={"name": "Riverside"}, headers=_auth(OWNER))
    assert response.status_code == 201
    pid = response.json()["id"]
    response = client.post(f"/api/v1/projects/{pid}/members", json={"user_id": MEMBER}, headers=_auth(OWNER))
    assert response.status_code == 200
    return pid


class TestSecurity:
    def test_token_round_trip(self):
        payload = decode_access_token(create_access_token({"sub": "5"}))
        assert payload["sub"] == "5"

    def test_tampered_token_is_rejected(self):
        token = create_access_token({"sub": "5"})
        header, payload, signature = token.split(".")
        assert decode_access_token(f"{header}.{payload}.{signature[:-2]}xx") is None
        assert decode_access_token("not-a-token") is None

    def test_expired_token_is_rejected(self):
        assert decode_access_token(create_access_token({"sub": "5"}, expires_delta=-10)) is None

    def test_missing_token_is_401(self, client):
        assert client.get("/api/v1/events/mine").status_code == 401

    def test_non_numeric_subject_is_401(self, client):
        headers = {"Authorization": f"Bearer {create_access_token({'sub': 'bot'})}"}
        assert client.get("/api/v1/events/mine", headers=headers).status_code == 401


class TestEventRoutes:
    def test_lifecycle(self, client, project_id):
        created = client.post(
            "/api/v1/events/",
            json={"project_id": project_id, "title": "Pour", "date": "2000-01-01T08:00:00Z"},
            headers=_auth(MEMBER),
        )
        assert created.status_code == 201
        event = created.json()
        assert event["status"] == "pending"
        assert event["created_by"] == MEMBER

        forbidden = client.patch(f"/api/v1/events/{event['id']}", json={"title": "x"}, headers=_auth(OWNER))
        assert forbidden.status_code == 403

        updated = client.patch(f"/api/v1/events/{event['id']}", json={"title": "Pour B"}, headers=_auth(MEMBER))
        assert updated.status_code == 200
        assert updated.json()["title"] == "Pour B"

        swept = client.post("/api/v1/events/realize-due", headers=_auth(OUTSIDER))
        assert swept.json() == {"updated": 1}
        assert client.get(f"/api/v1/events/{event['id']}", headers=_auth(OWNER)).json()["status"] == "realized"

        mine = client.get("/api/v1/events/mine", headers=_auth(OWNER)).json()
        assert [e["id"] for e in mine] == [event["id"]]
        assert client.get("/api/v1/events/mine", headers=_auth(OUTSIDER)).json() == []

        assert client.delete(f"/api/v1/events/{event['id']}", headers=_auth(MEMBER)).status_code == 204
        assert client.get(f"/api/v1/events/{event['id']}", headers=_auth(MEMBER)).status_code == 404

    def test_invalid_status_is_422(self, client, project_id):
        response = client.post(
            "/api/v1/events/",
            json={"project_id": project_id, "title": "Pour", "date": "2030-01-01T08:00:00Z", "status": "done"},
            headers=_auth(OWNER),
        )
        assert response.status_code == 422


class TestIncidentRoutes:
    def test_membership_and_ownership(self, client, project_id):
        assert client.post(
            "/api/v1/incidents/", json={"project_id": project_id, "title": "Leak"}, headers=_auth(OUTSIDER)
        ).status_code == 403

        created = client.post(
            "/api/v1/incidents/", json={"project_id": project_id, "title": "Leak"}, headers=_auth(MEMBER)
        )
        assert created.status_code == 201
        incident = created.json()
        assert (incident["type"], incident["priority"], incident["status"]) == ("other", "medium", "open")

        assert client.get(f"/api/v1/incidents/{incident['id']}", headers=_auth(OUTSIDER)).status_code == 403
        assert client.get(f"/api/v1/incidents/{incident['id']}", headers=_auth(OWNER)).status_code == 200

        updated = client.patch(
            f"/api/v1/incidents/{incident['id']}",
            json={"status": "in_progress", "assigned_to": OWNER},
            headers=_auth(OWNER),
        )
        assert updated.status_code == 200
        assert updated.json()["assigned_to"] == OWNER

        assert client.delete(f"/api/v1/incidents/{incident['id']}", headers=_auth(OWNER)).status_code == 403
        assert client.delete(f"/api/v1/incidents/{incident['id']}", headers=_auth(MEMBER)).status_code == 204
        assert client.get(f"/api/v1/incidents/{incident['id']}", headers=_auth(MEMBER)).status_code == 404

    def test_unknown_project_is_404(self, client):
        response = client.get("/api/v1/incidents/project/999", headers=_auth(OWNER))
        assert response.status_code == 404


class TestMessageRoutes:
    def test_post_and_page(self, client):
        for n in range(12):
            response = client.post("/api/v1/chats/3/messages", json={"text": f"m{n}"}, headers=_auth(MEMBER))
            assert response.status_code == 201
        assert response.json()["sender_id"] == MEMBER

        page = client.get(
            "/api/v1/chats/3/messages", params={"limit": 5, "with_total": True}, headers=_auth(OWNER)
        ).json()
        assert page["total"] == 12
        assert [m["text"] for m in page["items"]] == ["m11", "m10", "m9", "m8", "m7"]

        plain = client.get("/api/v1/chats/3/messages", params={"limit": 2, "offset": 10}, headers=_auth(OWNER)).json()
        assert [m["text"] for m in plain] == ["m1", "m0"]

    def test_limit_is_bounded(self, client):
        response = client.get("/api/v1/chats/3/messages", params={"limit": 0}, headers=_auth(OWNER))
        assert response.status_code == 422


class TestStoreFailures:
    def test_rejected_patch_is_500_and_next_patch_succeeds(self, client, project_id):
        event = client.post(
            "/api/v1/events/",
            json={"project_id": project_id, "title": "Pour", "date": "2030-01-01T08:00:00Z"},
            headers=_auth(OWNER),
        ).json()

        rejected = client.patch(f"/api/v1/events/{event['id']}", json={"title": None}, headers=_auth(OWNER))
        assert rejected.status_code == 500
        assert rejected.json() == {"detail": "The record could not be saved"}

        renamed = client.patch(f"/api/v1/events/{event['id']}", json={"title": "Pour B"}, headers=_auth(OWNER))
        assert renamed.status_code == 200
        assert renamed.json()["title"] == "Pour B"

    def test_sweep_on_broken_store_is_500(self, client, sqlite_db):
        conn = sqlite3.connect(sqlite_db)
        try:
            conn.execute("DROP TABLE events")
            conn.commit()
        finally:
            conn.close()

        response = client.post("/api/v1/events/realize-due", headers=_auth(OWNER))

        assert response.status_code == 500
        assert response.json() == {"detail": "The record could not be saved"}
