"""Module: clinic."""

import uuid
from datetime import date

from sqlalchemy import Boolean, Date, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vetcare.db.base import Base, TimestampMixin

UNLIMITED_REMINDERS = -1


# Tenant root: every owner, pet, visit and staff user belongs to exactly one clinic.
class Clinic(TimestampMixin, Base):
    __tablename__ = "clinics"

    clinic_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=True)
    timezone: Mapped[str] = mapped_column(String(50), nullable=False, default="UTC")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Reminder quota: system switch, per-cycle cap (-1 unlimited, 0 disabled) and usage counter.
    can_send_reminders: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reminder_monthly_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=UNLIMITED_REMINDERS)
    reminder_sent_this_cycle: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_cycle_start_date: Mapped[date] = mapped_column(Date, nullable=True)

    subscription_start_date: Mapped[date] = mapped_column(Date, nullable=True)
    subscription_end_date: Mapped[date] = mapped_column(Date, nullable=True)

    # Plain column: users already reference clinics.
    updated_by_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=True)
