"""Module: pet."""

import uuid
from datetime import date, datetime

from pydantic import Field, field_validator

from vetcare.schemas.common import CamelModel, blank_to_none, strip_required
from vetcare.schemas.owner import OwnerOut


class PetCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    species: str = Field(min_length=1, max_length=50)
    breed: str | None = Field(default=None, max_length=100)
    gender: str | None = Field(default=None, max_length=20)
    birth_date: date | None = None
    color: str | None = Field(default=None, max_length=50)
    notes: str | None = None

    blank_fields = field_validator("breed", "gender", "color", "notes", mode="before")(blank_to_none)
    required_fields = field_validator("name", "species")(strip_required)


class PetUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    species: str | None = Field(default=None, min_length=1, max_length=50)
    breed: str | None = Field(default=None, max_length=100)
    gender: str | None = Field(default=None, max_length=20)
    birth_date: date | None = None
    color: str | None = Field(default=None, max_length=50)
    notes: str | None = None

    blank_fields = field_validator("breed", "gender", "color", "notes", mode="before")(blank_to_none)
    required_fields = field_validator("name", "species")(strip_required)


class PetOut(CamelModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    species: str | None = None
    breed: str | None = None
    gender: str | None = None
    birth_date: date | None = None
    color: str | None = None
    notes: str | None = None
    owner: OwnerOut | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OwnerDetailOut(OwnerOut):
    pets: list[PetOut] = []
