"""Collaborator interfaces the reminder core reads from and writes to.

The scheduler only sees detached pydantic records, never ORM rows, so it can
run on a background thread with its own short-lived sessions.
"""
from typing import Callable, Optional, Protocol

from sqlalchemy.orm import Session

from eventhub.models.event import Event, EventStatus
from eventhub.models.rsvp import Rsvp
from eventhub.models.user import User
from eventhub.schemas.event import EventOut
from eventhub.schemas.notification import NotificationCreate, NotificationOut
from eventhub.schemas.rsvp import RsvpOut
from eventhub.services import notification_service


class EventSource(Protocol):
    def list_upcoming_events(self) -> list[EventOut]: ...


class RsvpSource(Protocol):
    def list_attendees(self, event_id: str) -> list[RsvpOut]: ...


class NotificationStore(Protocol):
    def list_notifications(self, user_id: str) -> list[NotificationOut]: ...

    def create_notification(self, data: NotificationCreate) -> NotificationOut: ...


class UserDirectory(Protocol):
    def get_timezone(self, user_id: str) -> Optional[str]: ...


class SqlReminderStore:
    """EventSource, RsvpSource, NotificationStore and UserDirectory over the
    SQLAlchemy models.

    Every call opens and closes its own session from ``session_factory``.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_upcoming_events(self) -> list[EventOut]:
        with self._session_factory() as db:
            events = (
                db.query(Event)
                .filter(Event.status == EventStatus.upcoming)
                .order_by(Event.start_time_utc)
                .all()
            )
            return [EventOut.model_validate(e) for e in events]

    def list_attendees(self, event_id: str) -> list[RsvpOut]:
        with self._session_factory() as db:
            rsvps = db.query(Rsvp).filter(Rsvp.event_id == event_id).all()
            return [RsvpOut.model_validate(r) for r in rsvps]

    def list_notifications(self, user_id: str) -> list[NotificationOut]:
        with self._session_factory() as db:
            rows = notification_service.list_notifications(db, user_id)
            return [NotificationOut.model_validate(n) for n in rows]

    def create_notification(self, data: NotificationCreate) -> NotificationOut:
        with self._session_factory() as db:
            notification = notification_service.create_notification(db, data)
            return NotificationOut.model_validate(notification)

    def get_timezone(self, user_id: str) -> Optional[str]:
        with self._session_factory() as db:
            row = db.query(User.default_timezone).filter(User.user_id == user_id).first()
            return row.default_timezone if row else None
