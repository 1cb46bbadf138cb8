"""
Database engine and sessions (SQLAlchemy 2.0).

PostgreSQL in production, SQLite for tests and quick local runs.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shared.config.settings import DATABASE_URL

_IN_MEMORY_SQLITE = ("sqlite://", "sqlite:///:memory:")


def engine_options(url: str) -> dict[str, Any]:
    """Keyword arguments for ``create_engine`` depending on the driver."""
    if url.startswith("sqlite"):
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url in _IN_MEMORY_SQLITE:
            # every connection would otherwise get its own empty database
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 10,
        "pool_recycle": 1800,
        "connect_args": {"connect_timeout": 10},
    }


engine = create_engine(DATABASE_URL, **engine_options(DATABASE_URL))

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.

    Usage:
        @router.get("/tables")
        def list_tables(db: Session = Depends(get_db)):
            ...
    """
    with SessionLocal() as db:
        yield db


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Session for work outside a request (startup seed)."""
    with SessionLocal() as db:
        yield db


def safe_commit(db: Session) -> None:
    """Commit, rolling back and re-raising on failure."""
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
