"""Module: clinic_profile."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vetcare.api.v1.routes.deps import get_db, require_clinic_user
from vetcare.api.v1.serializers import as_clinic_payload
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.user import User
from vetcare.schemas.clinic import ClinicOut, ClinicProfileUpdate

router = APIRouter()


def _own_clinic(db: Session, user: User) -> Clinic:
    clinic = db.get(Clinic, user.clinic_id)
    if not clinic:
        raise HTTPException(status_code=404, detail="Clinic not found")
    return clinic


# Endpoint: caller's clinic with reminder usage.
@router.get("", response_model=ClinicOut)
def get_clinic_profile(user: User = Depends(require_clinic_user), db: Session = Depends(get_db)):
    return as_clinic_payload(_own_clinic(db, user))


# Endpoint: contact details only; quota fields are managed under /admin/clinics.
@router.patch("", response_model=ClinicOut)
def update_clinic_profile(
    payload: ClinicProfileUpdate,
    user: User = Depends(require_clinic_user),
    db: Session = Depends(get_db),
):
    clinic = _own_clinic(db, user)
    changes = payload.model_dump(exclude_unset=True)

    if "name" in changes and changes["name"] is None:
        raise HTTPException(status_code=400, detail="name cannot be null")

    if changes.get("name"):
        name = changes["name"].strip()
        taken = db.execute(
            select(Clinic.clinic_id).where(
                func.lower(Clinic.name) == name.lower(),
                Clinic.clinic_id != clinic.clinic_id,
            )
        ).first()
        if taken:
            raise HTTPException(status_code=409, detail=f'Clinic with name "{name}" already exists')
        changes["name"] = name

    for field, value in changes.items():
        setattr(clinic, field, value)
    clinic.updated_by_id = user.user_id
    db.commit()
    db.refresh(clinic)
    return as_clinic_payload(clinic)
