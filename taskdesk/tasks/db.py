"""Task database engine and session management."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from taskdesk.config import get_config


_engine: Optional[Engine] = None
_sessionmaker = None


def get_engine(database_url: Optional[str] = None) -> Engine:
    """Get or create the SQLAlchemy engine.

    Args:
        database_url: Optional override for the database URL.
                     If not provided, uses config.

    Returns:
        SQLAlchemy Engine instance.
    """
    global _engine, _sessionmaker

    if database_url is None:
        database_url = get_config().database_url

    if _engine is not None and _engine.url.render_as_string(hide_password=False) == database_url:
        return _engine

    # Streamlit serves each session from its own thread.
    connect_args = {}
    if database_url.startswith("sqlite:"):
        connect_args = {"check_same_thread": False}

    if _engine is not None:
        _engine.dispose()

    _engine = create_engine(
        database_url,
        connect_args=connect_args,
        echo=False,
        pool_pre_ping=True,
    )
    _sessionmaker = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=False)
    return _engine


def get_session(database_url: Optional[str] = None) -> Session:
    """Create a new database session."""
    get_engine(database_url)
    return _sessionmaker()


def dispose_engine() -> None:
    global _engine, _sessionmaker
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _sessionmaker = None
