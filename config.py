"""
config.py

Centralized configuration management using pydantic-settings.
All modules must import settings from this file.
Direct os.getenv() calls are prohibited elsewhere.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings loaded from .env file."""

    # Database
    database_url: str = "sqlite:///./health_tracker.db"
    database_echo: bool = False

    # Clock used by the reminder "upcoming" view.
    # Empty means the server's local time.
    clock_timezone: str = ""

    # Pagination defaults
    vitals_page_size: int = 10
    notifications_page_size: int = 20
    max_page_size: int = 100

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
