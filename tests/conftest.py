"""Pytest fixtures — in-memory SQLite database for fast, isolated tests."""
import os
import uuid
from datetime import datetime, timezone

# Keep the background reminder thread out of API tests.
os.environ.setdefault("REMINDER_ENABLED", "false")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from eventhub.database import Base, get_db
from eventhub.main import app

# Import all models so they register with Base.metadata
from eventhub.models.user import User                  # noqa: F401
from eventhub.models.event import Event                # noqa: F401
from eventhub.models.rsvp import Rsvp                  # noqa: F401
from eventhub.models.notification import Notification  # noqa: F401
from eventhub.models.announcement import Announcement  # noqa: F401
from eventhub.models.favorite import Favorite          # noqa: F401
from eventhub.schemas.event import EventOut
from eventhub.schemas.notification import NotificationCreate, NotificationOut
from eventhub.schemas.rsvp import RsvpOut

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: create rows via the API, return the JSON response dict
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, name: str = "Test User", tz: str = "America/New_York") -> dict:
    """Helper — POST /api/users and return response JSON."""
    resp = client.post("/api/users/", json={
        "display_name": name,
        "default_timezone": tz,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_event(client: TestClient, host_id: str, title: str = "Test Event",
                      start: datetime = None, capacity: int = 10,
                      location: str = "Community Hall") -> dict:
    """Helper — POST /api/events and return response JSON."""
    start = start or datetime(2030, 6, 1, 18, 0, tzinfo=timezone.utc)
    resp = client.post("/api/events/", json={
        "title": title,
        "location": location,
        "start_time_utc": start.isoformat(),
        "capacity": capacity,
        "host_id": host_id,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def rsvp(client: TestClient, event_id: str, user_id: str, status: str = "attending"):
    return client.post("/api/rsvps/", json={
        "event_id": event_id,
        "user_id": user_id,
        "status": status,
    })


# ---------------------------------------------------------------------------
# In-memory collaborators for the reminder scheduler
# ---------------------------------------------------------------------------
class FakeReminderStore:
    """EventSource + RsvpSource + NotificationStore + UserDirectory kept in plain lists."""

    def __init__(self):
        self.events: list[EventOut] = []
        self.rsvps: list[RsvpOut] = []
        self.notifications: list[NotificationOut] = []
        self.fail_create_for: set[str] = set()
        self.fail_attendees_for: set[str] = set()
        self.timezones: dict[str, str] = {}

    def add_event(self, title: str, start: datetime, location: str = "Riverside Park",
                  event_id: str = None, status: str = "upcoming") -> EventOut:
        ev = EventOut(
            event_id=event_id or str(uuid.uuid4()),
            title=title,
            location=location,
            start_time_utc=start,
            capacity=100,
            host_id="host-1",
            status=status,
        )
        self.events.append(ev)
        return ev

    def add_rsvp(self, event_id: str, user_id: str, status: str = "attending") -> None:
        self.rsvps.append(RsvpOut(event_id=event_id, user_id=user_id, status=status))

    def seed_notification(self, user_id: str, event_id: str, kind: str, created_at: datetime) -> None:
        self.notifications.append(NotificationOut(
            notification_id=str(uuid.uuid4()),
            user_id=user_id,
            event_id=event_id,
            kind=kind,
            title="seeded",
            message="seeded",
            created_at=created_at,
        ))

    def for_user(self, user_id: str, kind: str = None) -> list[NotificationOut]:
        return [
            n for n in self.notifications
            if n.user_id == user_id and (kind is None or n.kind == kind)
        ]

    # EventSource
    def list_upcoming_events(self) -> list[EventOut]:
        return [e for e in self.events if e.status == "upcoming"]

    # RsvpSource
    def list_attendees(self, event_id: str) -> list[RsvpOut]:
        if event_id in self.fail_attendees_for:
            raise ConnectionError(f"attendee lookup failed for {event_id}")
        return [r for r in self.rsvps if r.event_id == event_id]

    # NotificationStore
    def list_notifications(self, user_id: str) -> list[NotificationOut]:
        return sorted(self.for_user(user_id), key=lambda n: n.created_at, reverse=True)

    def create_notification(self, data: NotificationCreate) -> NotificationOut:
        if data.user_id in self.fail_create_for:
            raise RuntimeError(f"store rejected notification for {data.user_id}")
        notification = NotificationOut(
            notification_id=str(uuid.uuid4()),
            user_id=data.user_id,
            event_id=data.event_id,
            kind=data.kind,
            title=data.title,
            message=data.message,
            created_at=data.created_at or datetime.now(timezone.utc),
        )
        self.notifications.append(notification)
        return notification

    # UserDirectory
    def get_timezone(self, user_id: str):
        return self.timezones.get(user_id)


@pytest.fixture
def store():
    return FakeReminderStore()
