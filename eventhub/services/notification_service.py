"""Notification service: the in-app notification store and its emitters.

Store operations (create / list / mark read / delete) raise ``HTTPException``
like the other services. The ``notify_*`` emitters are side effects of other
writes (event edits, RSVPs, announcements, calendar syncs): they log and
swallow their own failures so the originating request still succeeds.
"""
import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from eventhub.models.event import Event
from eventhub.models.notification import Notification, NotificationKind
from eventhub.models.rsvp import Rsvp, RSVPStatus
from eventhub.schemas.notification import NotificationCreate

logger = logging.getLogger(__name__)


def create_notification(db: Session, data: NotificationCreate) -> Notification:
    notification = Notification(
        user_id=data.user_id,
        event_id=data.event_id,
        kind=data.kind,
        title=data.title,
        message=data.message,
        is_read=False,
    )
    if data.created_at is not None:
        notification.created_at = data.created_at
    db.add(notification)
    db.commit()
    db.refresh(notification)
    logger.debug("Created %s notification %s for user %s",
                 data.kind.value, notification.notification_id, data.user_id)
    return notification


def list_notifications(db: Session, user_id: str) -> list[Notification]:
    """All notifications for a user, newest first."""
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc())
        .all()
    )


def mark_read(db: Session, notification_id: str) -> Notification:
    notification = db.query(Notification).filter(Notification.notification_id == notification_id).first()
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return notification


def mark_all_read(db: Session, user_id: str) -> int:
    """Flip the read flag on every unread notification of a user; returns the count."""
    updated = (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    logger.info("Marked %d notifications read for user %s", updated, user_id)
    return updated


def delete_notification(db: Session, notification_id: str) -> None:
    notification = db.query(Notification).filter(Notification.notification_id == notification_id).first()
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    db.delete(notification)
    db.commit()
    logger.info("Deleted notification %s", notification_id)


def _attending_user_ids(db: Session, event_id: str) -> list[str]:
    rows = (
        db.query(Rsvp.user_id)
        .filter(Rsvp.event_id == event_id, Rsvp.status == RSVPStatus.attending)
        .all()
    )
    return [row.user_id for row in rows]


def _notify_attendees(db: Session, event: Event, kind: NotificationKind, title: str, message: str) -> int:
    sent = 0
    for user_id in _attending_user_ids(db, event.event_id):
        try:
            create_notification(db, NotificationCreate(
                user_id=user_id,
                kind=kind,
                title=title,
                message=message,
                event_id=event.event_id,
            ))
            sent += 1
        except Exception:
            db.rollback()
            logger.exception("Failed to send %s notification to user %s", kind.value, user_id)
    return sent


def notify_event_update(db: Session, event: Event, message: str) -> int:
    """Tell every attending user that an event changed."""
    try:
        sent = _notify_attendees(
            db, event, NotificationKind.event_update,
            title="Event Update",
            message=f"{event.title}: {message}",
        )
    except Exception:
        logger.exception("Error sending event update notifications for event %s", event.event_id)
        return 0
    logger.info("Sent %d event update notifications for event %s", sent, event.event_id)
    return sent


def notify_event_cancelled(db: Session, event: Event, reason: Optional[str] = None) -> int:
    message = f'"{event.title}" has been cancelled.'
    if reason:
        message += f" Reason: {reason}"
    try:
        sent = _notify_attendees(
            db, event, NotificationKind.event_cancelled,
            title="Event Cancelled",
            message=message,
        )
    except Exception:
        logger.exception("Error sending cancellation notifications for event %s", event.event_id)
        return 0
    logger.info("Sent %d cancellation notifications for event %s", sent, event.event_id)
    return sent


def notify_new_rsvp(db: Session, event: Event, attendee_name: str) -> None:
    """Tell the host that someone RSVP'd to their event."""
    try:
        create_notification(db, NotificationCreate(
            user_id=event.host_id,
            kind=NotificationKind.new_rsvp,
            title="New RSVP",
            message=f'{attendee_name} has RSVP\'d to your event "{event.title}"',
            event_id=event.event_id,
        ))
    except Exception:
        db.rollback()
        logger.exception("Error sending new RSVP notification for event %s", event.event_id)


def notify_calendar_sync(db: Session, user_id: str, success: bool, event_title: str) -> Notification:
    if success:
        title = "Calendar Synced"
        message = f'"{event_title}" has been added to your Google Calendar'
    else:
        title = "Calendar Sync Failed"
        message = f'Failed to sync "{event_title}" to your Google Calendar. Please try again.'
    return create_notification(db, NotificationCreate(
        user_id=user_id,
        kind=NotificationKind.calendar_sync,
        title=title,
        message=message,
    ))


def notify_announcement(db: Session, event: Event, subject: str, message: str) -> int:
    """Deliver a host announcement to every attending user."""
    try:
        sent = _notify_attendees(
            db, event, NotificationKind.announcement,
            title=f"Announcement: {subject}",
            message=message,
        )
    except Exception:
        logger.exception("Error sending announcement notifications for event %s", event.event_id)
        return 0
    logger.info("Sent %d announcement notifications for event %s", sent, event.event_id)
    return sent
