"""Event API routes — delegates to event_service for invariant enforcement."""
import logging
from typing import Optional
from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from eventhub.database import get_db
from eventhub.models.event import EventStatus
from eventhub.schemas.event import EventCreate, EventUpdate, EventOut, EventCancelRequest
from eventhub.services import event_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    """Create a new event hosted by ``host_id``."""
    return event_service.create_event(
        db=db,
        title=payload.title,
        description=payload.description,
        location=payload.location,
        start_utc=payload.start_time_utc,
        capacity=payload.capacity,
        host_id=payload.host_id,
    )


@router.get("/", response_model=list[EventOut])
def list_events(
    status_filter: Optional[EventStatus] = Query(None, alias="status"),
    host_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    start_after: Optional[datetime] = Query(None),
    start_before: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
):
    """List events with optional filters, soonest first."""
    return event_service.list_events(
        db,
        status_filter=status_filter,
        host_id=host_id,
        search=search,
        start_after=start_after,
        start_before=start_before,
    )


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    return event_service.get_event_or_404(db, event_id)


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdate,
    actor_user_id: str = Query(..., description="ID of the user performing the update"),
    db: Session = Depends(get_db),
):
    """Update an event (host only); attending users are notified."""
    return event_service.update_event(
        db=db,
        event_id=event_id,
        actor_user_id=actor_user_id,
        updates=payload.model_dump(exclude_unset=True),
    )


@router.post("/{event_id}/cancel", response_model=EventOut)
def cancel_event(event_id: str, payload: EventCancelRequest, db: Session = Depends(get_db)):
    """Cancel an event (soft delete, host only)."""
    return event_service.cancel_event(
        db=db,
        event_id=event_id,
        actor_user_id=payload.cancelled_by_user_id,
        cancel_reason=payload.cancel_reason,
    )
