"""Pydantic schemas for RSVPs."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from eventhub.models.rsvp import RSVPStatus


class RsvpSet(BaseModel):
    event_id: str
    user_id: str
    status: RSVPStatus


class RsvpOut(BaseModel):
    event_id: str
    user_id: str
    status: RSVPStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
