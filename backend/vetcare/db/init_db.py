import logging

from sqlalchemy.engine import Engine

from vetcare.db.base import Base
from vetcare.db.session import engine as default_engine

# IMPORTANT: import models so they register with Base.metadata
from vetcare.db import models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine | None = None) -> None:
    bind = engine or default_engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured on %s", bind.dialect.name)
