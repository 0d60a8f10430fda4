"""The reminder scheduler running against the SQLAlchemy-backed store."""
from datetime import datetime, timedelta, timezone

from eventhub.main import build_reminder_scheduler
from eventhub.models.event import Event, EventStatus
from eventhub.models.notification import Notification, NotificationKind
from eventhub.models.rsvp import Rsvp, RSVPStatus
from eventhub.models.user import User
from eventhub.reminders.scheduler import ReminderScheduler
from eventhub.reminders.stores import SqlReminderStore

T = datetime(2030, 3, 20, 19, 30, tzinfo=timezone.utc)


def _seed(db):
    host = User(display_name="Host")
    alice = User(display_name="Alice")
    bob = User(display_name="Bob")
    db.add_all([host, alice, bob])
    db.flush()
    event = Event(
        title="Board Game Night", location="The Dice Cafe", start_time_utc=T,
        capacity=20, host_id=host.user_id,
    )
    db.add(event)
    db.flush()
    db.add_all([
        Rsvp(event_id=event.event_id, user_id=alice.user_id, status=RSVPStatus.attending),
        Rsvp(event_id=event.event_id, user_id=bob.user_id, status=RSVPStatus.maybe),
    ])
    db.commit()
    return event.event_id, alice.user_id, bob.user_id


def _scheduler(session_factory):
    store = SqlReminderStore(session_factory)
    return ReminderScheduler(events=store, rsvps=store, notifications=store)


def test_store_reads_upcoming_events_and_attendees(db, session_factory):
    event_id, alice_id, _ = _seed(db)
    store = SqlReminderStore(session_factory)

    (event,) = store.list_upcoming_events()
    assert event.event_id == event_id
    assert event.title == "Board Game Night"
    statuses = {r.user_id: r.status for r in store.list_attendees(event_id)}
    assert statuses[alice_id] == RSVPStatus.attending


def test_tick_persists_one_reminder_per_attendee(db, session_factory):
    event_id, alice_id, bob_id = _seed(db)
    scheduler = _scheduler(session_factory)

    scheduler.tick(T - timedelta(hours=24))
    scheduler.tick(T - timedelta(hours=23, minutes=50))

    rows = db.query(Notification).all()
    assert len(rows) == 1
    (row,) = rows
    assert row.user_id == alice_id
    assert row.event_id == event_id
    assert row.kind == NotificationKind.event_reminder_24h
    assert "Wednesday, March 20, 2030" in row.message
    assert "7:30 PM" in row.message
    assert "The Dice Cafe" in row.message
    assert row.is_read is False


def test_restart_respects_existing_history(db, session_factory):
    _seed(db)
    _scheduler(session_factory).tick(T - timedelta(hours=1, minutes=10))
    # A fresh scheduler (new process) sees the stored reminder.
    result = _scheduler(session_factory).tick(T - timedelta(minutes=55))
    assert result.sent == {}
    assert db.query(Notification).filter(Notification.kind == NotificationKind.event_reminder_1h).count() == 1


def test_cancelled_event_is_skipped(db, session_factory):
    event_id, _, _ = _seed(db)
    db.query(Event).filter(Event.event_id == event_id).update({Event.status: EventStatus.cancelled})
    db.commit()
    result = _scheduler(session_factory).tick(T - timedelta(hours=24))
    assert result.events_scanned == 0
    assert db.query(Notification).count() == 0


def test_reminders_are_visible_through_the_api(client, session_factory):
    host = client.post("/api/users/", json={"display_name": "Host"}).json()
    guest = client.post("/api/users/", json={"display_name": "Guest"}).json()
    event = client.post("/api/events/", json={
        "title": "Sunrise Hike", "location": "Trailhead Lot B",
        "start_time_utc": T.isoformat(), "capacity": 8, "host_id": host["user_id"],
    }).json()
    client.post("/api/rsvps/", json={
        "event_id": event["event_id"], "user_id": guest["user_id"], "status": "attending",
    })

    _scheduler(session_factory).tick(T - timedelta(hours=1))

    resp = client.get(f"/api/notifications/?user_id={guest['user_id']}")
    assert resp.status_code == 200
    (reminder,) = resp.json()
    assert reminder["kind"] == "event_reminder_1h"
    assert reminder["event_id"] == event["event_id"]
    assert "Sunrise Hike" in reminder["message"]


def test_offset_start_time_is_stored_as_utc(client, session_factory):
    host = client.post("/api/users/", json={"display_name": "Host"}).json()
    guest = client.post("/api/users/", json={"display_name": "Guest"}).json()
    resp = client.post("/api/events/", json={
        "title": "Rooftop Jazz", "location": "Hotel Roof",
        "start_time_utc": "2030-06-15T20:00:00+02:00", "capacity": 30, "host_id": host["user_id"],
    })
    assert resp.status_code == 201
    event = resp.json()
    assert event["start_time_utc"].startswith("2030-06-15T18:00:00")
    client.post("/api/rsvps/", json={
        "event_id": event["event_id"], "user_id": guest["user_id"], "status": "attending",
    })

    result = _scheduler(session_factory).tick(datetime(2030, 6, 14, 18, 0, tzinfo=timezone.utc))

    assert result.sent == {"DAY_BEFORE": 1}
    (reminder,) = client.get(f"/api/notifications/?user_id={guest['user_id']}").json()
    assert "6:00 PM" in reminder["message"]


def test_reminder_uses_recipient_timezone(client, session_factory):
    host = client.post("/api/users/", json={"display_name": "Host"}).json()
    berlin = client.post("/api/users/", json={
        "display_name": "Lena", "default_timezone": "Europe/Berlin",
    }).json()
    plain = client.post("/api/users/", json={"display_name": "Sam"}).json()
    event = client.post("/api/events/", json={
        "title": "Late Show", "location": "Main Stage",
        "start_time_utc": "2030-06-15T22:30:00Z", "capacity": 30, "host_id": host["user_id"],
    }).json()
    for user in (berlin, plain):
        client.post("/api/rsvps/", json={
            "event_id": event["event_id"], "user_id": user["user_id"], "status": "attending",
        })

    scheduler = build_reminder_scheduler(session_factory)
    scheduler.tick(datetime(2030, 6, 14, 22, 30, tzinfo=timezone.utc))

    (lena_msg,) = client.get(f"/api/notifications/?user_id={berlin['user_id']}").json()
    (sam_msg,) = client.get(f"/api/notifications/?user_id={plain['user_id']}").json()
    # 22:30 UTC is 00:30 the next day in Berlin (CEST).
    assert "Sunday, June 16, 2030" in lena_msg["message"]
    assert "12:30 AM" in lena_msg["message"]
    assert "Saturday, June 15, 2030" in sam_msg["message"]
    assert "10:30 PM" in sam_msg["message"]
