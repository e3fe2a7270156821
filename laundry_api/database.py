# laundry_api/database.py
"""
Engine and session factory construction.

Components never read the database URL themselves; ``create_app`` builds the
engine once from ``Settings`` and keeps the session factory on ``app.state``.
"""
import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(database_url: str) -> Engine:
    kwargs = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live as long as their single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Check connectivity and create missing tables. Any failure propagates."""
    from laundry_api import models  # noqa: F401  registers tables on Base

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connected (%s)", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
