"""Module: deps."""

import logging
import uuid
from datetime import date
from typing import Generator

from fastapi import Depends, Header, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from vetcare.core.dates import utcnow
from vetcare.core.security import tokens
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.user import User, UserRole
from vetcare.db.session import SessionLocal

logger = logging.getLogger(__name__)


# Dependency provider: one DB session per request lifecycle.
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Validate and coerce UUID inputs from query/path payloads.
def parse_uuid(value: str, field_name: str = "id") -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field_name} (must be UUID)")


def get_token_value(authorization: str | None) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid Authorization header")

    return parts[1].strip()


def clinic_is_open(clinic: Clinic | None, today: date | None = None) -> bool:
    if clinic is None or not clinic.is_active:
        return False
    end = clinic.subscription_end_date
    return end is None or end >= (today or utcnow().date())


def get_current_user(
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    token = get_token_value(authorization)
    user_id = tokens.resolve(token)
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user = db.execute(select(User).where(User.user_id == uuid.UUID(user_id))).scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="User account is inactive")

    # Platform admins may operate without a clinic.
    if user.role == UserRole.ADMIN and user.clinic_id is None:
        return user

    clinic = db.get(Clinic, user.clinic_id) if user.clinic_id else None
    if not clinic_is_open(clinic):
        logger.warning("Rejected request for user %s: clinic inactive or expired", user.user_id)
        raise HTTPException(status_code=401, detail="Clinic subscription is inactive or expired")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def require_clinic_user(user: User = Depends(get_current_user)) -> User:
    if user.clinic_id is None:
        raise HTTPException(status_code=403, detail="User is not assigned to a clinic")
    return user


def require_clinic_admin(user: User = Depends(require_clinic_user)) -> User:
    if user.role != UserRole.CLINIC_ADMIN:
        raise HTTPException(status_code=403, detail="Clinic admin access required")
    return user


# Platform admins without a clinic see every clinic; everyone else is scoped.
def require_clinic_or_admin(user: User = Depends(get_current_user)) -> User:
    if user.clinic_id is None and user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="User is not assigned to a clinic")
    return user
