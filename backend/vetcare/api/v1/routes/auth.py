"""Module: auth."""

import logging

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vetcare.api.v1.routes.deps import clinic_is_open, get_current_user, get_db, get_token_value
from vetcare.api.v1.serializers import as_user_payload
from vetcare.core.security import hash_password, tokens, verify_password
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.user import User, UserRole
from vetcare.schemas.common import Message
from vetcare.schemas.user import ChangePasswordRequest, LoginRequest, LoginResponse, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()


def _normalize_email(value: str) -> str:
    return value.strip().lower()


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    normalized_email = _normalize_email(payload.email)
    user = db.execute(
        select(User).where(func.lower(User.email) == normalized_email)
    ).scalar_one_or_none()

    if not user or not verify_password(payload.password, user.password):
        logger.info("Login failed for %s", normalized_email)
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="User account is inactive")

    clinic = db.get(Clinic, user.clinic_id) if user.clinic_id else None
    if not (user.role == UserRole.ADMIN and user.clinic_id is None) and not clinic_is_open(clinic):
        logger.warning("Login refused for %s: clinic inactive, expired or missing", normalized_email)
        raise HTTPException(status_code=401, detail="Clinic subscription inactive or expired")

    token = tokens.issue(str(user.user_id))
    return LoginResponse(
        access_token=token,
        expires_in=int(tokens.ttl_seconds),
        user=as_user_payload(user, clinic),
    )


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    clinic = db.get(Clinic, user.clinic_id) if user.clinic_id else None
    return as_user_payload(user, clinic)


@router.patch("/change-password", response_model=Message)
def change_password(
    payload: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not verify_password(payload.current_password, user.password):
        logger.warning("Password change failed for user %s: wrong current password", user.user_id)
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    user.password = hash_password(payload.new_password)
    db.commit()
    return Message(message="Password updated successfully")


@router.post("/logout", response_model=Message)
def logout(authorization: str | None = Header(default=None)):
    tokens.revoke(get_token_value(authorization))
    return Message(message="Logged out")
