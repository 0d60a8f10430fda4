"""User service: profiles, unique display names and per-user timezone."""
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from eventhub.models.user import User
from eventhub.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _check_display_name_free(db: Session, display_name: str, user_id: Optional[str] = None) -> None:
    query = db.query(User).filter(User.display_name == display_name)
    if user_id:
        query = query.filter(User.user_id != user_id)
    if query.first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Display name already taken")


def create_user(db: Session, data: UserCreate) -> User:
    _check_display_name_free(db, data.display_name)
    user = User(**data.model_dump())
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (%s)", user.user_id, user.display_name)
    return user


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.display_name).all()


def update_user(db: Session, user_id: str, data: UserUpdate) -> User:
    """Partial update; only fields present in the request are written."""
    user = get_user_or_404(db, user_id)
    updates = data.model_dump(exclude_unset=True)
    if updates.get("display_name"):
        _check_display_name_free(db, updates["display_name"], user_id)
    for field, value in updates.items():
        if value is None and field != "email":
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info("Updated user %s fields=%s", user_id, sorted(updates))
    return user
