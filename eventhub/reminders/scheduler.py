"""Event reminder scheduler.

Polls upcoming events on a fixed interval and hands every event that sits in
a reminder window to the ``ReminderEmitter``. Failures are contained per
attendee (in the emitter), per event and per tick: nothing raised while
processing ever reaches the APScheduler thread or the host process.

The scheduler is a plain service object owned by the application's
composition root. Tests construct one with fake stores and call ``tick()``
with an explicit ``now``.
"""
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

import pytz
from apscheduler.schedulers.background import BackgroundScheduler

from eventhub.models.rsvp import RSVPStatus
from eventhub.reminders.emitter import ReminderEmitter
from eventhub.reminders.stores import EventSource, NotificationStore, RsvpSource, UserDirectory
from eventhub.reminders.windows import hours_until, windows_for
from eventhub.utils.timezone import to_utc_aware, utcnow

logger = logging.getLogger(__name__)

JOB_ID = "event_reminders"
DEFAULT_INTERVAL_MINUTES = 15


def _bump(bucket: dict[str, int], window_name: str, count: int) -> None:
    if count:
        bucket[window_name] = bucket.get(window_name, 0) + count


@dataclass
class TickResult:
    now: Optional[datetime] = None
    skipped: bool = False
    events_scanned: int = 0
    sent: dict[str, int] = field(default_factory=dict)
    deduplicated: dict[str, int] = field(default_factory=dict)
    failed: dict[str, int] = field(default_factory=dict)
    event_errors: list[str] = field(default_factory=list)

    @property
    def total_sent(self) -> int:
        return sum(self.sent.values())


class ReminderScheduler:
    def __init__(
        self,
        events: EventSource,
        rsvps: RsvpSource,
        notifications: NotificationStore,
        interval_minutes: int = DEFAULT_INTERVAL_MINUTES,
        tz_name: str = "UTC",
        clock: Callable[[], datetime] = utcnow,
        users: Optional[UserDirectory] = None,
    ):
        self._events = events
        self._rsvps = rsvps
        self._emitter = ReminderEmitter(notifications, tz_name=tz_name, users=users)
        self._interval_minutes = interval_minutes
        self._clock = clock
        self._tick_lock = threading.Lock()
        self._scheduler: Optional[BackgroundScheduler] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self._scheduler is not None

    def start(self) -> None:
        """Start polling; the first tick runs immediately. No-op if running."""
        if self._scheduler is not None:
            logger.info("Event reminder scheduler already running, skipping start")
            return

        scheduler = BackgroundScheduler(timezone=pytz.utc)
        scheduler.add_job(
            self._run_scheduled_tick,
            trigger="interval",
            minutes=self._interval_minutes,
            id=JOB_ID,
            replace_existing=True,
            max_instances=1,      # Prevent overlapping runs
            coalesce=True,        # Merge missed runs
            next_run_time=utcnow(),
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("Event reminder scheduler started (every %d minutes)", self._interval_minutes)

    def stop(self) -> None:
        """Cancel the timer. A tick already in flight is left to finish."""
        if self._scheduler is None:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Event reminder scheduler stopped")

    def _run_scheduled_tick(self) -> None:
        self.tick()

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def tick(self, now: Optional[datetime] = None) -> TickResult:
        """Run one reminder pass at ``now`` (defaults to the injected clock).

        A tick that starts while another is still running is skipped.
        """
        if not self._tick_lock.acquire(blocking=False):
            logger.warning("Previous reminder tick still running, skipping this one")
            return TickResult(now=now, skipped=True)
        try:
            now = to_utc_aware(now or self._clock())
            result = TickResult(now=now)
            try:
                self._process(now, result)
            except Exception:
                logger.exception("Error processing event reminders")
            return result
        finally:
            self._tick_lock.release()

    def _process(self, now: datetime, result: TickResult) -> None:
        events = self._events.list_upcoming_events()
        result.events_scanned = len(events)

        for event in events:
            try:
                self._process_event(event, now, result)
            except Exception:
                result.event_errors.append(event.event_id)
                logger.exception("Error processing reminders for event %s", event.event_id)

        if result.total_sent or result.event_errors:
            logger.info(
                "Reminder tick at %s: scanned=%d sent=%s deduplicated=%s failed=%s event_errors=%d",
                now.isoformat(), result.events_scanned, result.sent,
                result.deduplicated, result.failed, len(result.event_errors),
            )

    def _process_event(self, event, now: datetime, result: TickResult) -> None:
        windows = windows_for(hours_until(event.start_time_utc, now))
        if not windows:
            return

        attendees = [
            rsvp.user_id
            for rsvp in self._rsvps.list_attendees(event.event_id)
            if rsvp.status == RSVPStatus.attending
        ]

        for window in windows:
            logger.info("Sending %s reminders for event '%s' to %d attendees",
                        window.name, event.title, len(attendees))
            emitted = self._emitter.emit_reminder(event, window, attendees, now)
            _bump(result.sent, window.name, len(emitted.sent))
            _bump(result.deduplicated, window.name, len(emitted.skipped))
            _bump(result.failed, window.name, len(emitted.failed))
