"""Database engine and session management."""

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.errors import ConfigurationError
from app.db.base import Base

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None

SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def get_engine() -> Engine:
    """Create the engine on first use, raising ConfigurationError if DATABASE_URL is not set."""
    global _engine
    if _engine is not None:
        return _engine
    if not settings.database_url:
        logger.error("DATABASE_URL is missing or empty in environment")
        raise ConfigurationError("DATABASE_URL missing")
    _engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        echo=settings.debug,
    )
    SessionLocal.configure(bind=_engine)
    return _engine


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Yields a session and ensures it's closed after use.
    """
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables defined in models."""
    import app.models  # noqa: F401  registers the mappers

    Base.metadata.create_all(bind=get_engine())
