"""Database session management with connection pooling"""

from functools import lru_cache
from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from obligation_reminders.config import Settings, get_settings
from obligation_reminders.domain.exceptions import ConfigurationError


@lru_cache(maxsize=4)
def _pooled_engine(database_url: str) -> Engine:
    # Sweeps are short and sequential, a small pool is enough
    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=5,
        pool_recycle=3600,
    )


@lru_cache(maxsize=4)
def _sessionmaker(database_url: str) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=_pooled_engine(database_url))


def get_engine(settings: Settings) -> Engine:
    """Engine for the configured database; storage credentials are required"""
    if not settings.database_url:
        raise ConfigurationError("DATABASE_URL not configured")
    return _pooled_engine(settings.database_url)


def get_db(settings: Settings = Depends(get_settings)) -> Session:
    """Dependency injection for database sessions"""
    get_engine(settings)
    db = _sessionmaker(settings.database_url)()
    try:
        yield db
    finally:
        db.close()
