"""Core event service.

Responsibilities:
- Authorization hook: only the host may update/cancel
- Cancellation safety (soft delete via status, never a row delete)
- Attendee notifications for every host edit and cancellation
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Any

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from eventhub.models.event import Event, EventStatus
from eventhub.models.user import User
from eventhub.services import notification_service
from eventhub.utils.timezone import to_utc_aware

logger = logging.getLogger(__name__)

# Status only moves through cancel_event.
_IMMUTABLE_FIELDS = ("event_id", "host_id", "created_at", "updated_at", "status")


def _check_authorization(event: Event, actor_user_id: str) -> None:
    """Only the host may modify an event."""
    if event.host_id != actor_user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the host may modify this event.",
        )


def get_event_or_404(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def list_events(
    db: Session,
    status_filter: Optional[EventStatus] = None,
    host_id: Optional[str] = None,
    search: Optional[str] = None,
    start_after: Optional[datetime] = None,
    start_before: Optional[datetime] = None,
) -> list[Event]:
    """List events ordered by start time, with optional filters."""
    query = db.query(Event)
    if status_filter:
        query = query.filter(Event.status == status_filter)
    if host_id:
        query = query.filter(Event.host_id == host_id)
    if search:
        pattern = f"%{search.lower()}%"
        query = query.filter(or_(
            Event.title.ilike(pattern),
            Event.description.ilike(pattern),
            Event.location.ilike(pattern),
        ))
    if start_after:
        query = query.filter(Event.start_time_utc >= to_utc_aware(start_after))
    if start_before:
        query = query.filter(Event.start_time_utc <= to_utc_aware(start_before))
    return query.order_by(Event.start_time_utc).all()


def create_event(
    db: Session,
    title: str,
    location: str,
    start_utc: datetime,
    capacity: int,
    host_id: str,
    description: str = "",
) -> Event:
    host = db.query(User).filter(User.user_id == host_id).first()
    if not host:
        raise HTTPException(status_code=404, detail="Host user not found")

    event = Event(
        title=title,
        description=description,
        location=location,
        start_time_utc=to_utc_aware(start_utc),
        capacity=capacity,
        host_id=host_id,
        status=EventStatus.upcoming,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by host %s", title, event.event_id, host_id)
    return event


def _describe_changes(changed: dict[str, Any]) -> str:
    parts = []
    if "start_time_utc" in changed:
        parts.append("the start time has changed")
    if "location" in changed:
        parts.append(f"the location is now {changed['location']}")
    if "title" in changed:
        parts.append("the title has changed")
    if not parts:
        parts.append("event details have been updated")
    text = "; ".join(parts)
    return text[0].upper() + text[1:] + "."


def update_event(
    db: Session,
    event_id: str,
    actor_user_id: str,
    updates: dict[str, Any],
) -> Event:
    """Update an event (host only) and notify attending users."""
    event = get_event_or_404(db, event_id)
    _check_authorization(event, actor_user_id)

    if event.status == EventStatus.cancelled:
        raise HTTPException(status_code=400, detail="Cannot update a cancelled event")

    changed: dict[str, Any] = {}
    for field, value in updates.items():
        if field in _IMMUTABLE_FIELDS or not hasattr(event, field):
            continue
        current = getattr(event, field)
        if field == "start_time_utc":
            # SQLite reads the column back naive.
            current, value = to_utc_aware(current), to_utc_aware(value)
        if current != value:
            setattr(event, field, value)
            changed[field] = value

    if not changed:
        return event

    event.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(event)
    logger.info("Updated event %s fields=%s", event_id, sorted(changed))

    notification_service.notify_event_update(db, event, _describe_changes(changed))
    return event


def cancel_event(
    db: Session,
    event_id: str,
    actor_user_id: str,
    cancel_reason: Optional[str] = None,
) -> Event:
    """Soft-cancel an event (host only) and notify attending users."""
    event = get_event_or_404(db, event_id)
    _check_authorization(event, actor_user_id)

    if event.status == EventStatus.cancelled:
        raise HTTPException(status_code=400, detail="Event is already cancelled")

    event.status = EventStatus.cancelled
    event.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(event)
    logger.info("Cancelled event %s (reason: %s)", event_id, cancel_reason)

    notification_service.notify_event_cancelled(db, event, cancel_reason)
    return event
