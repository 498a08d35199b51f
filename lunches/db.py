"""Engine and session handling for the local order store."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base

_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def init_engine(database_url: str, force: bool = False) -> Engine:
    """Initialize global engine (idempotent) or reinitialize when force=True."""
    global _engine, _SessionFactory
    if _engine is not None and not force:
        return _engine
    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(database_url, future=True, echo=False)
    _SessionFactory = sessionmaker(bind=_engine, autoflush=False, autocommit=False)
    return _engine


def get_new_session() -> Session:
    """Short-lived session; every store call opens and closes its own."""
    if _SessionFactory is None:
        raise RuntimeError("DB not initialized; call init_engine first")
    return _SessionFactory()


def create_all() -> None:
    """Create the order tables on a fresh database (tests, local runs)."""
    if _engine is None:
        raise RuntimeError("Engine not initialized")
    Base.metadata.create_all(_engine)
