"""Pydantic schemas for favorites."""
from typing import Optional
from pydantic import BaseModel


class FavoriteStatus(BaseModel):
    favorited: bool
    message: Optional[str] = None
