"""Notification API routes."""
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from eventhub.database import get_db
from eventhub.schemas.notification import NotificationOut, CalendarSyncReport
from eventhub.services import notification_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[NotificationOut])
def list_notifications(user_id: str = Query(...), db: Session = Depends(get_db)):
    """A user's notifications, newest first."""
    return notification_service.list_notifications(db, user_id)


@router.post("/read-all")
def mark_all_read(user_id: str = Query(...), db: Session = Depends(get_db)):
    updated = notification_service.mark_all_read(db, user_id)
    return {"message": "All notifications marked as read", "updated": updated}


@router.post("/calendar-sync", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
def report_calendar_sync(payload: CalendarSyncReport, db: Session = Depends(get_db)):
    """Record the outcome of a client-side calendar sync."""
    return notification_service.notify_calendar_sync(
        db, payload.user_id, payload.success, payload.event_title,
    )


@router.post("/{notification_id}/read", response_model=NotificationOut)
def mark_read(notification_id: str, db: Session = Depends(get_db)):
    return notification_service.mark_read(db, notification_id)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(notification_id: str, db: Session = Depends(get_db)):
    notification_service.delete_notification(db, notification_id)
