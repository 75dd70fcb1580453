"""Module: admin_clinics."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from vetcare.api.v1.routes.deps import get_db, parse_uuid, require_admin
from vetcare.api.v1.serializers import as_clinic_payload
from vetcare.core.pagination import ListQuery, apply_search, list_query, page_response, paginate
from vetcare.db.models.clinic import Clinic
from vetcare.db.models.owner import Owner
from vetcare.db.models.pet import Pet
from vetcare.db.models.user import User
from vetcare.schemas.clinic import ClinicCreate, ClinicOut, ClinicSettingsUpdate
from vetcare.schemas.common import Paginated

logger = logging.getLogger(__name__)

router = APIRouter()


def clinic_counts(db: Session, clinic: Clinic) -> dict[str, int]:
    owner_count = db.execute(
        select(func.count(Owner.owner_id)).where(Owner.clinic_id == clinic.clinic_id)
    ).scalar_one()
    pet_count = db.execute(
        select(func.count(Pet.pet_id))
        .select_from(Pet)
        .join(Owner, Owner.owner_id == Pet.owner_id)
        .where(Owner.clinic_id == clinic.clinic_id)
    ).scalar_one()
    user_count = db.execute(
        select(func.count(User.user_id)).where(User.clinic_id == clinic.clinic_id)
    ).scalar_one()
    return {
        "owner_count": int(owner_count or 0),
        "pet_count": int(pet_count or 0),
        "user_count": int(user_count or 0),
    }


def _get_clinic_or_404(db: Session, clinic_id: str) -> Clinic:
    clinic = db.get(Clinic, parse_uuid(clinic_id, "clinic_id"))
    if not clinic:
        raise HTTPException(status_code=404, detail="Clinic not found")
    return clinic


def _ensure_unique_name(db: Session, name: str, exclude: Clinic | None = None) -> None:
    stmt = select(Clinic.clinic_id).where(func.lower(Clinic.name) == name.strip().lower())
    if exclude is not None:
        stmt = stmt.where(Clinic.clinic_id != exclude.clinic_id)
    if db.execute(stmt).first():
        raise HTTPException(status_code=409, detail=f'Clinic with name "{name}" already exists')


# Endpoint: handles HTTP request/response mapping for this route.
@router.post("", response_model=ClinicOut, status_code=201, summary="Create clinic")
def create_clinic(payload: ClinicCreate, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    _ensure_unique_name(db, payload.name)

    clinic = Clinic(**payload.model_dump(), updated_by_id=admin.user_id)
    clinic.name = clinic.name.strip()
    clinic.reminder_sent_this_cycle = 0
    clinic.current_cycle_start_date = payload.subscription_start_date
    db.add(clinic)
    db.commit()
    db.refresh(clinic)

    logger.info("Clinic %s created by %s", clinic.clinic_id, admin.user_id)
    return as_clinic_payload(clinic, clinic_counts(db, clinic))


# Endpoint: handles HTTP request/response mapping for this route.
@router.get("", response_model=Paginated[ClinicOut], summary="List clinics")
def list_clinics(
    query: ListQuery = Depends(list_query),
    is_active: bool | None = Query(default=None, alias="isActive"),
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    stmt = select(Clinic)
    stmt = apply_search(stmt, query.search, [Clinic.name, Clinic.address, Clinic.phone])
    if is_active is not None:
        stmt = stmt.where(Clinic.is_active == is_active)
    stmt = stmt.order_by(desc(Clinic.created_at))

    clinics, total = paginate(db, stmt, query)
    data = [as_clinic_payload(c, clinic_counts(db, c)) for c in clinics]
    return page_response(data, total, query)


# Endpoint: handles HTTP request/response mapping for this route.
@router.get("/{clinic_id}", response_model=ClinicOut, summary="Get clinic")
def get_clinic(clinic_id: str, _: User = Depends(require_admin), db: Session = Depends(get_db)):
    clinic = _get_clinic_or_404(db, clinic_id)
    return as_clinic_payload(clinic, clinic_counts(db, clinic))


# Endpoint: handles HTTP request/response mapping for this route.
@router.patch("/{clinic_id}", response_model=ClinicOut, summary="Update clinic settings")
def update_clinic_settings(
    clinic_id: str,
    payload: ClinicSettingsUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    clinic = _get_clinic_or_404(db, clinic_id)
    changes = payload.model_dump(exclude_unset=True)

    for required in ("name", "timezone", "is_active", "can_send_reminders", "reminder_monthly_limit"):
        if required in changes and changes[required] is None:
            raise HTTPException(status_code=400, detail=f"{required} cannot be null")

    if changes.get("name"):
        _ensure_unique_name(db, changes["name"], exclude=clinic)
        changes["name"] = changes["name"].strip()

    for field, value in changes.items():
        setattr(clinic, field, value)

    # A new subscription start opens a fresh reminder cycle.
    if changes.get("subscription_start_date"):
        clinic.reminder_sent_this_cycle = 0
        clinic.current_cycle_start_date = changes["subscription_start_date"]

    clinic.updated_by_id = admin.user_id
    db.commit()
    db.refresh(clinic)

    logger.info("Clinic %s settings updated by %s: %s", clinic.clinic_id, admin.user_id, sorted(changes))
    return as_clinic_payload(clinic, clinic_counts(db, clinic))
