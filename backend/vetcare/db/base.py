"""Module: base."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from vetcare.core.dates import utcnow


# Shared SQLAlchemy declarative base that all ORM models inherit from.
# This gives each model access to common metadata for table creation/migrations.
class Base(DeclarativeBase):
    pass


# Audit timestamps shared by every clinic-owned table.
class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
