"""RSVP API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventhub.database import get_db
from eventhub.schemas.rsvp import RsvpSet, RsvpOut
from eventhub.services import rsvp_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=RsvpOut, status_code=status.HTTP_200_OK)
def set_rsvp(payload: RsvpSet, db: Session = Depends(get_db)):
    """Set or update a user's RSVP status for an event."""
    return rsvp_service.set_rsvp(db, payload.event_id, payload.user_id, payload.status)


@router.get("/event/{event_id}", response_model=list[RsvpOut])
def list_event_rsvps(event_id: str, db: Session = Depends(get_db)):
    """List every RSVP recorded for an event."""
    return rsvp_service.list_rsvps(db, event_id)


@router.delete("/{event_id}/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rsvp(event_id: str, user_id: str, db: Session = Depends(get_db)):
    rsvp_service.delete_rsvp(db, event_id, user_id)
