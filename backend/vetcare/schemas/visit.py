"""Module: visit."""

import uuid
from datetime import datetime
from enum import StrEnum
from typing import Literal

from pydantic import Field, field_validator, model_validator

from vetcare.core.dates import as_utc_naive
from vetcare.schemas.common import CamelModel, blank_to_none
from vetcare.schemas.pet import PetOut

REMINDER_DATE_REQUIRED = "Next reminder date is required when reminders are enabled"


class VisitType(StrEnum):
    CHECKUP = "checkup"
    VACCINATION = "vaccination"
    EMERGENCY = "emergency"
    SURGERY = "surgery"
    DENTAL = "dental"
    GROOMING = "grooming"
    OTHER = "other"


class _VisitFields(CamelModel):
    notes: str | None = None
    price: float | None = Field(default=None, ge=0, le=999999.99)
    temperature: float | None = Field(default=None, ge=0, le=50)
    weight: float | None = Field(default=None, ge=0)
    weight_unit: Literal["kg", "lb"] | None = None
    heart_rate: int | None = Field(default=None, ge=0)
    respiratory_rate: int | None = Field(default=None, ge=0)

    blank_fields = field_validator("notes", mode="before")(blank_to_none)

    @field_validator("visit_date", "next_reminder_date", check_fields=False)
    @classmethod
    def to_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc_naive(value)


class VisitCreate(_VisitFields):
    visit_date: datetime
    visit_type: VisitType
    is_reminder_enabled: bool = False
    next_reminder_date: datetime | None = None

    @model_validator(mode="after")
    def reminder_needs_date(self):
        # A stored date with reminders off is allowed; the reverse is not.
        if self.is_reminder_enabled and self.next_reminder_date is None:
            raise ValueError(REMINDER_DATE_REQUIRED)
        return self


class VisitUpdate(_VisitFields):
    visit_date: datetime | None = None
    visit_type: VisitType | None = None
    is_reminder_enabled: bool | None = None
    next_reminder_date: datetime | None = None
    reminder_sent: bool | None = None

    @model_validator(mode="after")
    def reminder_needs_date(self):
        if (
            self.is_reminder_enabled
            and "next_reminder_date" in self.model_fields_set
            and self.next_reminder_date is None
        ):
            raise ValueError(REMINDER_DATE_REQUIRED)
        return self


class VisitOut(CamelModel):
    id: uuid.UUID
    pet_id: uuid.UUID
    visit_date: datetime
    visit_type: str
    notes: str | None = None
    price: float | None = None
    temperature: float | None = None
    weight: float | None = None
    weight_unit: str | None = None
    heart_rate: int | None = None
    respiratory_rate: int | None = None
    is_reminder_enabled: bool
    next_reminder_date: datetime | None = None
    reminder_sent: bool
    pet: PetOut | None = None
    created_by_id: uuid.UUID | None = None
    updated_by_id: uuid.UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PetDetailOut(PetOut):
    visits: list[VisitOut] = []


class DashboardStats(CamelModel):
    owner_count: int
    pet_count: int
    upcoming_vaccination_count: int | None = None
    due_today_count: int | None = None
    is_admin_view: bool
