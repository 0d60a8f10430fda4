"""Favorite service: per-user event bookmarks."""
import logging

from sqlalchemy.orm import Session

from eventhub.models.event import Event
from eventhub.models.favorite import Favorite
from eventhub.services.event_service import get_event_or_404
from eventhub.services.user_service import get_user_or_404

logger = logging.getLogger(__name__)


def _find(db: Session, user_id: str, event_id: str):
    return (
        db.query(Favorite)
        .filter(Favorite.user_id == user_id, Favorite.event_id == event_id)
        .first()
    )


def is_favorited(db: Session, user_id: str, event_id: str) -> bool:
    return _find(db, user_id, event_id) is not None


def toggle_favorite(db: Session, user_id: str, event_id: str) -> bool:
    """Add the event to the user's favorites, or remove it if present.

    Returns the new state.
    """
    get_event_or_404(db, event_id)
    get_user_or_404(db, user_id)

    favorite = _find(db, user_id, event_id)
    if favorite:
        db.delete(favorite)
        db.commit()
        logger.info("User %s unfavorited event %s", user_id, event_id)
        return False

    db.add(Favorite(user_id=user_id, event_id=event_id))
    db.commit()
    logger.info("User %s favorited event %s", user_id, event_id)
    return True


def list_favorite_events(db: Session, user_id: str) -> list[Event]:
    get_user_or_404(db, user_id)
    return (
        db.query(Event)
        .join(Favorite, Favorite.event_id == Event.event_id)
        .filter(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc())
        .all()
    )
