"""
Database engine and session management.

The engine (and its connection pool) is process-wide: created once when this
module is imported and disposed by the application lifespan on shutdown.
"""

from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from snaplink_app.config import settings


def _engine_kwargs(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        # needed for SQLite + FastAPI threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
    }


engine = create_engine(settings.database_url, **_engine_kwargs(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Iterator[Session]:
    """Yield a session for the duration of one request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables and indexes that do not exist yet"""
    # Import models so they're registered with Base
    from snaplink_app import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def close_db() -> None:
    """Release every pooled connection"""
    engine.dispose()
