"""Module: owner."""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from vetcare.schemas.common import CamelModel, blank_to_none, strip_required


class OwnerCreate(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: str = Field(min_length=1, max_length=30)
    email: str | None = None
    address: str | None = Field(default=None, max_length=500)
    allow_automated_reminders: bool = True

    blank_fields = field_validator("email", "address", mode="before")(blank_to_none)
    required_fields = field_validator("first_name", "last_name", "phone")(strip_required)


class OwnerUpdate(CamelModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, min_length=1, max_length=30)
    email: str | None = None
    address: str | None = Field(default=None, max_length=500)
    allow_automated_reminders: bool | None = None

    blank_fields = field_validator("email", "address", mode="before")(blank_to_none)
    required_fields = field_validator("first_name", "last_name", "phone")(strip_required)


class OwnerOut(CamelModel):
    id: uuid.UUID
    clinic_id: uuid.UUID
    first_name: str
    last_name: str
    phone: str
    email: str | None = None
    address: str | None = None
    allow_automated_reminders: bool
    # Opt-in as it applies today, masked by the clinic switch.
    reminders_effective: bool | None = None
    pet_count: int | None = None
    created_by_id: uuid.UUID | None = None
    updated_by_id: uuid.UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
