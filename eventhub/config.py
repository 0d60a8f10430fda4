"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./eventhub.db"
    CORS_ORIGINS: str = "http://localhost:5173"
    LOG_LEVEL: str = "INFO"

    # Reminder scheduler
    REMINDER_ENABLED: bool = True
    REMINDER_INTERVAL_MINUTES: int = 15
    REMINDER_TIMEZONE: str = "UTC"  # fallback IANA tz for users without one

    class Config:
        env_file = ".env"


settings = Settings()
