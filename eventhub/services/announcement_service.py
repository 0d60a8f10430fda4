"""Announcement service: host broadcasts to an event's attending users."""
import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from eventhub.models.announcement import Announcement
from eventhub.services import notification_service
from eventhub.services.event_service import get_event_or_404

logger = logging.getLogger(__name__)


def create_announcement(
    db: Session,
    event_id: str,
    host_id: str,
    subject: str,
    message: str,
) -> tuple[Announcement, int]:
    """Record an announcement and notify attendees; returns it with the recipient count."""
    event = get_event_or_404(db, event_id)
    if event.host_id != host_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the event host can send announcements",
        )

    announcement = Announcement(event_id=event_id, host_id=host_id, subject=subject, message=message)
    db.add(announcement)
    db.commit()
    db.refresh(announcement)
    logger.info("Host %s posted announcement %s on event %s",
                host_id, announcement.announcement_id, event_id)

    sent = notification_service.notify_announcement(db, event, subject, message)
    return announcement, sent


def list_announcements(db: Session, event_id: str) -> list[Announcement]:
    """An event's announcements, newest first."""
    get_event_or_404(db, event_id)
    return (
        db.query(Announcement)
        .filter(Announcement.event_id == event_id)
        .order_by(Announcement.created_at.desc())
        .all()
    )
