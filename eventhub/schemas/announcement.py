"""Pydantic schemas for event announcements."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AnnouncementCreate(BaseModel):
    host_id: str
    subject: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1)


class AnnouncementOut(BaseModel):
    announcement_id: str
    event_id: str
    host_id: str
    subject: str
    message: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AnnouncementSent(BaseModel):
    announcement: AnnouncementOut
    message: str
    recipient_count: int
