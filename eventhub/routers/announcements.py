"""Event announcement routes, mounted under /api/events."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventhub.database import get_db
from eventhub.schemas.announcement import AnnouncementCreate, AnnouncementOut, AnnouncementSent
from eventhub.services import announcement_service

router = APIRouter()


@router.post("/{event_id}/announcements", response_model=AnnouncementSent,
             status_code=status.HTTP_201_CREATED)
def send_announcement(event_id: str, payload: AnnouncementCreate, db: Session = Depends(get_db)):
    """Post an announcement (host only); every attending user is notified."""
    announcement, sent = announcement_service.create_announcement(
        db,
        event_id=event_id,
        host_id=payload.host_id,
        subject=payload.subject,
        message=payload.message,
    )
    return AnnouncementSent(
        announcement=AnnouncementOut.model_validate(announcement),
        message=f"Announcement sent to {sent} attendees",
        recipient_count=sent,
    )


@router.get("/{event_id}/announcements", response_model=list[AnnouncementOut])
def list_announcements(event_id: str, db: Session = Depends(get_db)):
    return announcement_service.list_announcements(db, event_id)
