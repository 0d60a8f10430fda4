"""User API routes."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventhub.database import get_db
from eventhub.schemas.event import EventOut
from eventhub.schemas.user import UserCreate, UserUpdate, UserOut
from eventhub.services import favorite_service, user_service

router = APIRouter()


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Create a new user."""
    return user_service.create_user(db, payload)


@router.get("/", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    """List all users."""
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Fetch a single user by ID."""
    return user_service.get_user_or_404(db, user_id)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(user_id: str, payload: UserUpdate, db: Session = Depends(get_db)):
    """Update a user (partial update)."""
    return user_service.update_user(db, user_id, payload)


@router.get("/{user_id}/favorites", response_model=list[EventOut])
def list_favorites(user_id: str, db: Session = Depends(get_db)):
    """Events the user has favorited, most recently favorited first."""
    return favorite_service.list_favorite_events(db, user_id)
