"""Pydantic schemas for Users."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
import pytz
from pydantic import BaseModel, field_validator


def _check_timezone(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in pytz.all_timezones_set:
        raise ValueError(f"Unknown timezone: {v}")
    return v


class UserCreate(BaseModel):
    display_name: str
    email: Optional[str] = None
    default_timezone: str = "UTC"  # IANA name; reminder dates render in it

    @field_validator("default_timezone")
    @classmethod
    def valid_timezone(cls, v: Optional[str]) -> Optional[str]:
        return _check_timezone(v)


class UserUpdate(BaseModel):
    display_name: Optional[str] = None
    email: Optional[str] = None
    default_timezone: Optional[str] = None

    @field_validator("default_timezone")
    @classmethod
    def valid_timezone(cls, v: Optional[str]) -> Optional[str]:
        return _check_timezone(v)


class UserOut(BaseModel):
    user_id: str
    display_name: str
    email: Optional[str] = None
    default_timezone: str
    created_at: datetime

    model_config = {"from_attributes": True}
