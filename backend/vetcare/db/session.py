"""Module: session."""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from vetcare.core.config import settings


def build_engine(url: str, **kwargs):
    engine = create_engine(url, future=True, **kwargs)
    if engine.dialect.name == "sqlite":
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection.
        @event.listens_for(engine, "connect")
        def _enable_sqlite_fks(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = build_engine(settings.database_url, pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
