"""Module: users."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vetcare.api.v1.routes.deps import get_current_user, get_db
from vetcare.api.v1.serializers import as_user_payload
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.user import User
from vetcare.schemas.user import ProfileUpdate, UserOut

router = APIRouter()


# Endpoint: self-service profile edit (names only).
@router.patch("/profile", response_model=UserOut)
def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    clinic = db.get(Clinic, user.clinic_id) if user.clinic_id else None
    return as_user_payload(user, clinic)
