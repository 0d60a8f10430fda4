"""Pydantic schemas for Notifications."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from eventhub.models.notification import NotificationKind


class NotificationCreate(BaseModel):
    user_id: str
    kind: NotificationKind
    title: str
    message: str
    event_id: Optional[str] = None
    # Defaults to the insert time; the reminder scheduler stamps its tick instant.
    created_at: Optional[datetime] = None


class NotificationOut(BaseModel):
    notification_id: str
    user_id: str
    event_id: Optional[str] = None
    kind: NotificationKind
    title: str
    message: str
    is_read: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class CalendarSyncReport(BaseModel):
    user_id: str
    event_title: str
    success: bool
