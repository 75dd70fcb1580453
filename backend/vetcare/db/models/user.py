"""Module: user."""

import uuid
from enum import StrEnum

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vetcare.db.base import Base, TimestampMixin


class UserRole(StrEnum):
    ADMIN = "ADMIN"
    CLINIC_ADMIN = "CLINIC_ADMIN"
    STAFF = "STAFF"


class User(TimestampMixin, Base):
    __tablename__ = "users"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(String, nullable=False, default=UserRole.STAFF)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Platform admins are not attached to a clinic.
    clinic_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("clinics.clinic_id", ondelete="SET NULL"),
        nullable=True,
    )
