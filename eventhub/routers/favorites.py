"""Favorite toggle and status routes, mounted under /api/events.

A user's full favorites list lives at ``GET /api/users/{user_id}/favorites``.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eventhub.database import get_db
from eventhub.schemas.favorite import FavoriteStatus
from eventhub.services import favorite_service

router = APIRouter()


@router.post("/{event_id}/favorite", response_model=FavoriteStatus)
def toggle_favorite(event_id: str, user_id: str = Query(...), db: Session = Depends(get_db)):
    favorited = favorite_service.toggle_favorite(db, user_id, event_id)
    return FavoriteStatus(
        favorited=favorited,
        message="Added to favorites" if favorited else "Removed from favorites",
    )


@router.get("/{event_id}/favorite", response_model=FavoriteStatus)
def favorite_status(event_id: str, user_id: str = Query(...), db: Session = Depends(get_db)):
    return FavoriteStatus(favorited=favorite_service.is_favorited(db, user_id, event_id))
