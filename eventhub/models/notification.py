"""Notification ORM model: append-only, only the read flag is mutated."""
import uuid
import enum
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Enum as SAEnum
from eventhub.database import Base


class NotificationKind(str, enum.Enum):
    event_reminder_24h = "event_reminder_24h"
    event_reminder_1h = "event_reminder_1h"
    event_update = "event_update"
    event_cancelled = "event_cancelled"
    new_rsvp = "new_rsvp"
    calendar_sync = "calendar_sync"
    announcement = "announcement"


class Notification(Base):
    __tablename__ = "notifications"

    notification_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=True, index=True)
    kind = Column(SAEnum(NotificationKind), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    # Set client-side so the dedup lookback compares against a precise instant.
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
