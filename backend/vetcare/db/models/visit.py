"""Module: visit."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vetcare.core.dates import utcnow
from vetcare.db.base import Base, TimestampMixin

VISIT_TYPES = ("checkup", "vaccination", "emergency", "surgery", "dental", "grooming", "other")


# Clinical visit records with vitals and the follow-up reminder schedule.
class Visit(TimestampMixin, Base):
    __tablename__ = "visits"

    visit_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    pet_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("pets.pet_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    visit_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    visit_type: Mapped[str] = mapped_column(String, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=True)

    # Vitals
    temperature: Mapped[Decimal] = mapped_column(Numeric(4, 1), nullable=True)
    weight: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=True)
    weight_unit: Mapped[str] = mapped_column(String(2), nullable=True)
    heart_rate: Mapped[int] = mapped_column(Integer, nullable=True)
    respiratory_rate: Mapped[int] = mapped_column(Integer, nullable=True)

    # A date may be kept while the reminder is switched off.
    is_reminder_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    next_reminder_date: Mapped[datetime] = mapped_column(DateTime, nullable=True, index=True)
    reminder_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_by_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)
    updated_by_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)
