"""Reminder windows: when a class of reminder fires and how far back it dedups.

A window fires while ``hours_until_start`` sits inside a band centred on
``lead``. The band half-width matches half the default tick period, so a
15-minute poll always lands inside it once. The dedup horizon is wider than
the band so adjacent ticks never see an empty history.
"""
import enum
from datetime import datetime, timedelta
from typing import NamedTuple

from eventhub.models.notification import NotificationKind
from eventhub.utils.timezone import to_utc_aware

_HOUR = timedelta(hours=1)


class _WindowSpec(NamedTuple):
    lead: timedelta
    tolerance: timedelta
    horizon: timedelta
    kind: NotificationKind


class ReminderWindow(enum.Enum):
    DAY_BEFORE = _WindowSpec(
        lead=timedelta(hours=24),
        tolerance=timedelta(minutes=15),
        horizon=timedelta(hours=25),
        kind=NotificationKind.event_reminder_24h,
    )
    HOUR_BEFORE = _WindowSpec(
        lead=timedelta(hours=1),
        tolerance=timedelta(minutes=15),
        horizon=timedelta(hours=2),
        kind=NotificationKind.event_reminder_1h,
    )

    @property
    def kind(self) -> NotificationKind:
        return self.value.kind

    @property
    def horizon(self) -> timedelta:
        return self.value.horizon

    @property
    def min_hours(self) -> float:
        return (self.value.lead - self.value.tolerance) / _HOUR

    @property
    def max_hours(self) -> float:
        return (self.value.lead + self.value.tolerance) / _HOUR

    def contains(self, hours_until_start: float) -> bool:
        """Inclusive on both bounds."""
        return self.min_hours <= hours_until_start <= self.max_hours


def hours_until(start: datetime, now: datetime) -> float:
    """Signed hours from ``now`` until ``start``; naive datetimes are UTC."""
    return (to_utc_aware(start) - to_utc_aware(now)) / _HOUR


def windows_for(hours_until_start: float) -> list[ReminderWindow]:
    return [window for window in ReminderWindow if window.contains(hours_until_start)]
