"""Event ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from eventhub.database import Base


class EventStatus(str, enum.Enum):
    upcoming = "upcoming"
    ongoing = "ongoing"
    completed = "completed"
    cancelled = "cancelled"


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    location = Column(String(500), nullable=False)
    start_time_utc = Column(DateTime(timezone=True), nullable=False, index=True)
    capacity = Column(Integer, nullable=False)
    host_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    status = Column(SAEnum(EventStatus), nullable=False, default=EventStatus.upcoming, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    rsvps = relationship("Rsvp", back_populates="event", cascade="all, delete-orphan")
