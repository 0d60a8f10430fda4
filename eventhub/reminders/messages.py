"""Reminder notification text."""
from datetime import datetime
from typing import NamedTuple

from eventhub.reminders.windows import ReminderWindow
from eventhub.schemas.event import EventOut
from eventhub.utils.timezone import to_local


class ReminderText(NamedTuple):
    title: str
    message: str


def format_date(dt: datetime) -> str:
    """``Sunday, December 15, 2024``"""
    return f"{dt:%A, %B} {dt.day}, {dt.year}"


def format_time(dt: datetime) -> str:
    """``9:00 AM``"""
    return f"{dt.hour % 12 or 12}:{dt:%M} {'AM' if dt.hour < 12 else 'PM'}"


def build_reminder(event: EventOut, window: ReminderWindow, tz_name: str = "UTC") -> ReminderText:
    local_start = to_local(event.start_time_utc, tz_name)
    start_time = format_time(local_start)

    if window is ReminderWindow.DAY_BEFORE:
        return ReminderText(
            title="Event Tomorrow!",
            message=(
                f'Don\'t forget about "{event.title}" tomorrow ({format_date(local_start)}) '
                f"at {start_time}. Location: {event.location}"
            ),
        )
    if window is ReminderWindow.HOUR_BEFORE:
        return ReminderText(
            title="Event Starting Soon!",
            message=(
                f'"{event.title}" starts in about 1 hour at {start_time}. '
                f"Get ready! Location: {event.location}"
            ),
        )
    raise ValueError(f"Unknown reminder window: {window!r}")
