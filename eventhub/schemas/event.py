"""Pydantic schemas for Events.

``EventOut`` is also the detached record the reminder scheduler reads, so it
carries no relationships.
"""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from eventhub.models.event import EventStatus
from eventhub.utils.timezone import to_utc_aware


class EventCreate(BaseModel):
    title: str
    description: str = ""
    location: str
    start_time_utc: datetime
    capacity: int = Field(gt=0)
    host_id: str

    @field_validator("start_time_utc")
    @classmethod
    def _normalize_start(cls, v: datetime) -> datetime:
        return to_utc_aware(v)


class EventUpdate(BaseModel):
    """Partial update. Status is not editable here; use the cancel endpoint."""

    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start_time_utc: Optional[datetime] = None
    capacity: Optional[int] = Field(default=None, gt=0)

    model_config = {"extra": "forbid"}

    @field_validator("start_time_utc")
    @classmethod
    def _normalize_start(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc_aware(v)


class EventOut(BaseModel):
    event_id: str
    title: str
    description: str = ""
    location: str
    start_time_utc: datetime
    capacity: int
    host_id: str
    status: EventStatus = EventStatus.upcoming
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EventCancelRequest(BaseModel):
    cancelled_by_user_id: str
    cancel_reason: Optional[str] = None
