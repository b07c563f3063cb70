"""
FastAPI dependencies for dependency injection.

Routes depend on the link store, never on sessions directly, so tests can
swap the database by overriding `get_db` and `get_session_factory`.
"""

from fastapi import Depends
from sqlalchemy.orm import Session, sessionmaker

from snaplink_app.database.connection import SessionLocal, get_db
from snaplink_app.services.link_store import LinkStore


def get_session_factory() -> sessionmaker:
    """
    Session factory for work that outlives the request.

    Background tasks run after the request's own session is closed, so they
    open a fresh one from this factory.
    """
    return SessionLocal


def get_link_store(db: Session = Depends(get_db)) -> LinkStore:
    """Get a LinkStore bound to the request's session"""
    return LinkStore(db)
