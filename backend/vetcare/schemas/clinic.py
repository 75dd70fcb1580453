"""Module: clinic."""

import uuid
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator

from vetcare.schemas.common import CamelModel, blank_to_none, strip_required


def _check_timezone(value: str | None) -> str | None:
    if value is None:
        return value
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone: {value}")
    return value


class ReminderUsageOut(CamelModel):
    count: int
    limit: int
    percent: float | None = None
    severity: str


class ClinicSummary(CamelModel):
    id: uuid.UUID
    name: str
    timezone: str
    can_send_reminders: bool


class ClinicCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    address: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=20)
    timezone: str = "UTC"
    is_active: bool = False
    can_send_reminders: bool = False
    reminder_monthly_limit: int = Field(default=-1, ge=-1)
    subscription_start_date: date | None = None
    subscription_end_date: date | None = None

    blank_fields = field_validator("address", "phone", mode="before")(blank_to_none)
    check_timezone = field_validator("timezone")(_check_timezone)
    required_fields = field_validator("name")(strip_required)


class ClinicSettingsUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=20)
    timezone: str | None = None
    is_active: bool | None = None
    can_send_reminders: bool | None = None
    reminder_monthly_limit: int | None = Field(default=None, ge=-1)
    subscription_start_date: date | None = None
    subscription_end_date: date | None = None

    blank_fields = field_validator("address", "phone", mode="before")(blank_to_none)
    check_timezone = field_validator("timezone")(_check_timezone)
    required_fields = field_validator("name")(strip_required)


class ClinicProfileUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=20)

    blank_fields = field_validator("address", "phone", mode="before")(blank_to_none)
    required_fields = field_validator("name")(strip_required)


class ClinicOut(CamelModel):
    id: uuid.UUID
    name: str
    address: str | None = None
    phone: str | None = None
    timezone: str
    is_active: bool
    can_send_reminders: bool
    reminder_monthly_limit: int
    reminder_sent_this_cycle: int
    current_cycle_start_date: date | None = None
    subscription_start_date: date | None = None
    subscription_end_date: date | None = None
    reminder_usage: ReminderUsageOut
    owner_count: int | None = None
    pet_count: int | None = None
    user_count: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
