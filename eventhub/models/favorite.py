"""Favorite ORM model: a user's bookmark on an event."""
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from eventhub.database import Base


class Favorite(Base):
    __tablename__ = "favorites"

    user_id = Column(String(36), ForeignKey("users.user_id"), primary_key=True)
    event_id = Column(String(36), ForeignKey("events.event_id"), primary_key=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
