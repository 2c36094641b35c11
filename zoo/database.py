"""
Document store connection, session management, and table creation.
Uses SQLAlchemy; SQLite by default, any SQLAlchemy URL via DATABASE_URL.
All models are imported in create_tables() so one call creates every table.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from zoo.config import settings


def build_engine(url: str):
    """SQLite needs check_same_thread off because FastAPI serves sync routes from a threadpool."""
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False}, echo=False)
    return create_engine(
        url,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=10,
        max_overflow=20,
        echo=False,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency: yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from zoo.models.space import Space      # noqa
    from zoo.models.space_log import SpaceLog  # noqa
    from zoo.models.staff import Staff      # noqa
    from zoo.models.ticket import Ticket    # noqa

    Base.metadata.create_all(bind=bind or engine)
