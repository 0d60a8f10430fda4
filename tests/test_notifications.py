"""Tests for the notification store endpoints."""
from datetime import datetime, timedelta, timezone

from eventhub.models.notification import NotificationKind
from eventhub.schemas.notification import NotificationCreate
from eventhub.services import notification_service
from tests.conftest import create_test_user


def _seed(db, user_id, count=2) -> list[str]:
    base = datetime(2030, 1, 1, tzinfo=timezone.utc)
    return [
        notification_service.create_notification(db, NotificationCreate(
            user_id=user_id,
            kind=NotificationKind.event_update,
            title=f"Update {i}",
            message=f"Message {i}",
            created_at=base + timedelta(minutes=i),
        )).notification_id
        for i in range(count)
    ]


class TestNotificationStore:

    def test_list_newest_first(self, client, db):
        user = create_test_user(client)
        _seed(db, user["user_id"], count=3)
        titles = [n["title"] for n in client.get(f"/api/notifications/?user_id={user['user_id']}").json()]
        assert titles == ["Update 2", "Update 1", "Update 0"]

    def test_list_requires_user(self, client):
        assert client.get("/api/notifications/").status_code == 422

    def test_mark_read(self, client, db):
        user = create_test_user(client)
        first, _ = _seed(db, user["user_id"])
        resp = client.post(f"/api/notifications/{first}/read")
        assert resp.status_code == 200
        assert resp.json()["is_read"] is True
        assert client.post("/api/notifications/nope/read").status_code == 404

    def test_mark_all_read(self, client, db):
        user = create_test_user(client)
        other = create_test_user(client, name="Other")
        _seed(db, user["user_id"], count=3)
        _seed(db, other["user_id"], count=1)

        resp = client.post(f"/api/notifications/read-all?user_id={user['user_id']}")
        assert resp.status_code == 200
        assert resp.json()["updated"] == 3

        mine = client.get(f"/api/notifications/?user_id={user['user_id']}").json()
        assert all(n["is_read"] for n in mine)
        theirs = client.get(f"/api/notifications/?user_id={other['user_id']}").json()
        assert not any(n["is_read"] for n in theirs)

    def test_delete(self, client, db):
        user = create_test_user(client)
        first, second = _seed(db, user["user_id"])
        assert client.delete(f"/api/notifications/{first}").status_code == 204
        remaining = client.get(f"/api/notifications/?user_id={user['user_id']}").json()
        assert [n["notification_id"] for n in remaining] == [second]
        assert client.delete(f"/api/notifications/{first}").status_code == 404


class TestCalendarSync:

    def test_success(self, client):
        user = create_test_user(client)
        resp = client.post("/api/notifications/calendar-sync", json={
            "user_id": user["user_id"], "event_title": "Book Club", "success": True,
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["kind"] == "calendar_sync"
        assert data["title"] == "Calendar Synced"
        assert data["event_id"] is None
        assert "Book Club" in data["message"]

    def test_failure(self, client):
        user = create_test_user(client)
        data = client.post("/api/notifications/calendar-sync", json={
            "user_id": user["user_id"], "event_title": "Book Club", "success": False,
        }).json()
        assert data["title"] == "Calendar Sync Failed"
        assert "try again" in data["message"]


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "reminders": False}
