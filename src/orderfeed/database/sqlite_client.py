from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from ..config.loader import DEFAULT_DATABASE_URL
from .schema import create_all


def get_engine(database_url: str = DEFAULT_DATABASE_URL):
    engine = create_engine(database_url, future=True)
    create_all(database_url)
    return engine


def get_session(database_url: str = DEFAULT_DATABASE_URL) -> Session:
    """Get a SQLAlchemy session (caller must close it)."""
    engine = get_engine(database_url)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)()


@contextmanager
def session_context(database_url: str = DEFAULT_DATABASE_URL) -> Generator[Session, None, None]:
    """
    Context manager for SQLAlchemy sessions.

    Rolls back on error and always closes the session. The asks engine only
    reads, so nothing is committed here.

    Usage:
        with session_context(database_url) as session:
            page = list_asks(session, request, sources)
    """
    session = get_session(database_url)
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
