"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Document store ────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./zoo.db"

    # ── State cache (Redis with RedisJSON) ────────────────────────────────
    REDIS_URL: str = "redis://localhost:6379/0"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Admission ─────────────────────────────────────────────────────────
    TICKET_UPDATE_RETRIES: int = 3   # CAS attempts before giving up on a ticket update

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True
    LOG_DIR: Optional[str] = None   # Defaults to <repo>/logs

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
