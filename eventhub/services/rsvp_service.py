"""RSVP service: attendance records with capacity enforcement."""
import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from eventhub.models.event import EventStatus
from eventhub.models.rsvp import Rsvp, RSVPStatus
from eventhub.models.user import User
from eventhub.services import notification_service
from eventhub.services.event_service import get_event_or_404

logger = logging.getLogger(__name__)


def _attending_count(db: Session, event_id: str) -> int:
    return (
        db.query(Rsvp)
        .filter(Rsvp.event_id == event_id, Rsvp.status == RSVPStatus.attending)
        .count()
    )


def set_rsvp(db: Session, event_id: str, user_id: str, rsvp_status: RSVPStatus) -> Rsvp:
    """Create or update a user's RSVP.

    A transition into ``attending`` must fit the event's capacity and notifies
    the host, unless the host is the one RSVPing.
    """
    event = get_event_or_404(db, event_id)
    if event.status == EventStatus.cancelled:
        raise HTTPException(status_code=400, detail="Cannot RSVP to a cancelled event")

    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    rsvp = db.query(Rsvp).filter(Rsvp.event_id == event_id, Rsvp.user_id == user_id).first()
    was_attending = rsvp is not None and rsvp.status == RSVPStatus.attending
    becomes_attending = rsvp_status == RSVPStatus.attending and not was_attending

    if becomes_attending and _attending_count(db, event_id) >= event.capacity:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Event is at full capacity")

    if rsvp is None:
        rsvp = Rsvp(event_id=event_id, user_id=user_id, status=rsvp_status)
        db.add(rsvp)
    else:
        rsvp.status = rsvp_status
    db.commit()
    db.refresh(rsvp)
    logger.info("User %s RSVP'd '%s' to event %s", user_id, rsvp_status.value, event_id)

    if becomes_attending and event.host_id != user_id:
        notification_service.notify_new_rsvp(db, event, user.display_name)
    return rsvp


def list_rsvps(db: Session, event_id: str) -> list[Rsvp]:
    get_event_or_404(db, event_id)
    return db.query(Rsvp).filter(Rsvp.event_id == event_id).all()


def delete_rsvp(db: Session, event_id: str, user_id: str) -> None:
    rsvp = db.query(Rsvp).filter(Rsvp.event_id == event_id, Rsvp.user_id == user_id).first()
    if not rsvp:
        raise HTTPException(status_code=404, detail="RSVP not found")
    db.delete(rsvp)
    db.commit()
    logger.info("Removed RSVP of user %s for event %s", user_id, event_id)
