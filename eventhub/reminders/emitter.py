"""Attendee reminder emitter: one reminder per (event, attendee, window).

Deduplication is a time-boxed re-query, not a persisted flag: an attendee is
skipped when their history holds a notification for the same event and
window kind created inside the window's horizon. Records older than the
horizon are left alone but no longer count.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

import pytz

from eventhub.reminders.messages import build_reminder
from eventhub.reminders.stores import NotificationStore, UserDirectory
from eventhub.reminders.windows import ReminderWindow
from eventhub.schemas.event import EventOut
from eventhub.schemas.notification import NotificationCreate, NotificationOut
from eventhub.utils.timezone import to_utc_aware

logger = logging.getLogger(__name__)


@dataclass
class EmitResult:
    sent: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def already_sent(
    history: Iterable[NotificationOut],
    event_id: str,
    window: ReminderWindow,
    now: datetime,
) -> bool:
    cutoff = to_utc_aware(now) - window.horizon
    return any(
        n.event_id == event_id
        and n.kind == window.kind
        and n.created_at is not None
        and to_utc_aware(n.created_at) > cutoff
        for n in history
    )


class ReminderEmitter:
    """Writes reminders through ``notifications``.

    Dates render in each recipient's own timezone when ``users`` knows it,
    otherwise in ``tz_name``.
    """

    def __init__(
        self,
        notifications: NotificationStore,
        tz_name: str = "UTC",
        users: Optional[UserDirectory] = None,
    ):
        self._notifications = notifications
        self._tz_name = tz_name
        self._users = users

    def _timezone_for(self, user_id: str) -> str:
        if self._users is None:
            return self._tz_name
        tz_name = self._users.get_timezone(user_id)
        if not tz_name:
            return self._tz_name
        if tz_name not in pytz.all_timezones_set:
            logger.warning("User %s has unknown timezone %r, using %s", user_id, tz_name, self._tz_name)
            return self._tz_name
        return tz_name

    def emit_reminder(
        self,
        event: EventOut,
        window: ReminderWindow,
        attendees: Iterable[str],
        now: datetime,
    ) -> EmitResult:
        """Send ``window``'s reminder for ``event`` to each attending user id."""
        result = EmitResult()
        texts = {self._tz_name: build_reminder(event, window, self._tz_name)}

        for user_id in attendees:
            try:
                # The dedup read must complete before this attendee's write.
                history = self._notifications.list_notifications(user_id)
                if already_sent(history, event.event_id, window, now):
                    result.skipped.append(user_id)
                    continue

                tz_name = self._timezone_for(user_id)
                if tz_name not in texts:
                    texts[tz_name] = build_reminder(event, window, tz_name)
                text = texts[tz_name]

                self._notifications.create_notification(NotificationCreate(
                    user_id=user_id,
                    kind=window.kind,
                    title=text.title,
                    message=text.message,
                    event_id=event.event_id,
                    created_at=to_utc_aware(now),
                ))
                result.sent.append(user_id)
                logger.info("%s reminder sent to user %s for event %s",
                            window.name, user_id, event.event_id)
            except Exception:
                result.failed.append(user_id)
                logger.exception("Failed to send %s reminder to user %s for event %s",
                                 window.name, user_id, event.event_id)

        return result
