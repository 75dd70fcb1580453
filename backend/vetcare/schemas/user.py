"""Module: user."""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator, model_validator

from vetcare.db.models.user import UserRole
from vetcare.schemas.clinic import ClinicSummary
from vetcare.schemas.common import CamelModel, strip_required

MIN_PASSWORD_LENGTH = 8


def _normalize_email(value: str | None) -> str | None:
    if value is None:
        return value
    cleaned = value.strip().lower()
    if "@" not in cleaned or cleaned.startswith("@") or cleaned.endswith("@"):
        raise ValueError("Invalid email address")
    return cleaned


class UserOut(CamelModel):
    id: uuid.UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole
    is_active: bool
    clinic_id: uuid.UUID | None = None
    clinic: ClinicSummary | None = None
    created_at: datetime | None = None


class UserCreate(CamelModel):
    email: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    role: UserRole = UserRole.STAFF
    clinic_id: uuid.UUID | None = None
    is_active: bool = True

    normalize_email = field_validator("email")(_normalize_email)


class UserUpdate(CamelModel):
    email: str | None = None
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    role: UserRole | None = None
    clinic_id: uuid.UUID | None = None
    is_active: bool | None = None

    normalize_email = field_validator("email")(_normalize_email)


# Clinic admins manage their own staff; role is limited to clinic-level roles.
class ClinicUserCreate(CamelModel):
    email: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)

    normalize_email = field_validator("email")(_normalize_email)


class ClinicUserUpdate(CamelModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    role: Literal["STAFF", "CLINIC_ADMIN"] | None = None
    is_active: bool | None = None


class ProfileUpdate(CamelModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=50)
    last_name: str | None = Field(default=None, min_length=1, max_length=50)

    required_fields = field_validator("first_name", "last_name")(strip_required)


class LoginRequest(CamelModel):
    email: str
    password: str


class LoginResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserOut


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self
