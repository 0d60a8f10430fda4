"""FastAPI application entry point and composition root."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from eventhub.config import settings
from eventhub.database import Base, SessionLocal, engine
from eventhub.reminders.scheduler import ReminderScheduler
from eventhub.reminders.stores import SqlReminderStore

# Import routers
from eventhub.routers import users, events, rsvps, notifications, announcements, favorites

# Import all models so Base.metadata knows about them
from eventhub.models.user import User                  # noqa: F401
from eventhub.models.event import Event                # noqa: F401
from eventhub.models.rsvp import Rsvp                  # noqa: F401
from eventhub.models.notification import Notification  # noqa: F401
from eventhub.models.announcement import Announcement  # noqa: F401
from eventhub.models.favorite import Favorite          # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="EventHub",
    description="Event discovery and RSVP backend with scheduled attendee reminders",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(announcements.router, prefix="/api/events", tags=["Announcements"])
app.include_router(favorites.router, prefix="/api/events", tags=["Favorites"])
app.include_router(rsvps.router, prefix="/api/rsvps", tags=["RSVPs"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])

app.state.reminder_scheduler = None


def build_reminder_scheduler(session_factory=SessionLocal) -> ReminderScheduler:
    store = SqlReminderStore(session_factory)
    return ReminderScheduler(
        events=store,
        rsvps=store,
        notifications=store,
        users=store,
        interval_minutes=settings.REMINDER_INTERVAL_MINUTES,
        tz_name=settings.REMINDER_TIMEZONE,
    )


@app.on_event("startup")
def on_startup():
    """Create tables (SQLite dev mode) and start the reminder scheduler."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)

    if not settings.REMINDER_ENABLED:
        logger.info("Event reminder scheduler disabled via settings (REMINDER_ENABLED=False)")
        return
    scheduler = build_reminder_scheduler()
    scheduler.start()
    app.state.reminder_scheduler = scheduler


@app.on_event("shutdown")
def on_shutdown():
    scheduler = app.state.reminder_scheduler
    if scheduler is not None:
        scheduler.stop()
        app.state.reminder_scheduler = None


@app.get("/api/health")
def health_check():
    scheduler = app.state.reminder_scheduler
    return {"status": "ok", "reminders": bool(scheduler and scheduler.is_running)}
